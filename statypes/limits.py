"""One-sided limits and test statistics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from .probability import CL

T = TypeVar("T")
D = TypeVar("D")


@dataclass(frozen=True)
class UpperLimit(Generic[T]):
    """Upper limit.

    Usually given for small non-negative values when it is not possible to
    detect a difference from zero.

    Attributes:
        bound: Upper limit.
        cl: Confidence level for which the limit was calculated.
    """

    bound: T
    cl: CL[float]


@dataclass(frozen=True)
class LowerLimit(Generic[T]):
    """Lower limit.

    Usually given for large quantities that cannot be measured directly, for
    example the proton half-life.

    Attributes:
        bound: Lower limit.
        cl: Confidence level for which the limit was calculated.
    """

    bound: T
    cl: CL[float]


@dataclass(frozen=True)
class TestStatistic(Generic[T, D]):
    """Value of a test statistic and the reference distribution for its p-value."""

    __test__ = False

    value: T
    distribution: D
