"""Exception types raised by statypes constructors and codecs."""

from __future__ import annotations


class StatypesError(Exception):
    """Base class for all statypes errors."""


class ProbabilityRangeError(StatypesError, ValueError):
    """Raised when a probability lies outside the closed interval [0, 1]."""


class SigmaRangeError(StatypesError, ValueError):
    """Raised when a number of standard deviations is not positive."""


class DecodeError(StatypesError, ValueError):
    """Raised when a binary or JSON payload cannot be decoded into a valid value."""
