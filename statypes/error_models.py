"""
Error models attached to point estimates.

Three representations are provided:
- ``NormalErr``: symmetric, normally distributed 1σ error.
- ``TErr``: Student-t distributed error with degrees of freedom, or the
  sentinel ``UNKNOWN`` when the error is still to be determined.
- ``ConfInt``: asymmetric interval at a given confidence level.

None of them validate their fields. Callers are responsible for passing
physically sensible values (e.g. non-negative deltas).

Error models that can be multiplied by a constant implement ``scale(factor)``
(the ``Scalable`` protocol). ``TErr`` deliberately does not: scaling a t
distributed error is not well defined without knowing how the scale and the
degrees of freedom were obtained.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar, Union, runtime_checkable

from scipy.stats import t as student_t

from .probability import CL
from .sigma import get_n_sigma

T = TypeVar("T")
S = TypeVar("S", bound="Scalable")


@runtime_checkable
class Scalable(Protocol):
    """Values that transform when the underlying quantity is multiplied by a constant."""

    def scale(self: S, factor: Any) -> S: ...


def scale(factor: Any, value: S) -> S:
    """Multiply ``value`` by ``factor``.

    Raises:
        TypeError: If ``value`` has no defined scaling (e.g. ``TErr``).
    """
    if not isinstance(value, Scalable):
        raise TypeError(f"{type(value).__name__} does not support scaling")
    return value.scale(factor)


@dataclass(frozen=True)
class NormalErr(Generic[T]):
    """Normal errors, stored as 1σ (≈68.3% CL).

    The confidence level is not stored since the error can be recalculated
    for any level with ``to_conf_int``.
    """

    sigma: T

    def scale(self, factor: Any) -> "NormalErr[T]":
        # Symmetric, so the sign of the factor is irrelevant.
        return NormalErr(abs(factor) * self.sigma)

    def to_conf_int(self, cl: CL[float]) -> "ConfInt":
        """Symmetric interval covering ``cl`` under the normal distribution."""
        half_width = self.sigma * get_n_sigma(cl)
        return ConfInt(half_width, half_width, cl)


class TErrUnknown(Enum):
    """Sentinel for a t error that has not been determined yet."""

    UNKNOWN = "unknown"

    def __repr__(self) -> str:
        return "UNKNOWN"


UNKNOWN = TErrUnknown.UNKNOWN


@dataclass(frozen=True)
class TErr(Generic[T]):
    """Student-t distributed errors.

    Stored as a 1σ error with degrees of freedom, which corresponds to a
    confidence level of ``Pr(|t_df| <= 1)``. Use ``UNKNOWN`` in place of a
    ``TErr`` when the error will be estimated later, for instance by a fit.
    """

    error: T
    degrees_of_freedom: float

    def to_conf_int(self, cl: CL[float]) -> "ConfInt":
        """Symmetric interval covering ``cl`` under the t distribution."""
        t_crit = float(student_t.ppf(1 - cl.p / 2, self.degrees_of_freedom))
        half_width = self.error * t_crit
        return ConfInt(half_width, half_width, cl)


TErrModel = Union[TErr, TErrUnknown]


@dataclass(frozen=True)
class ConfInt(Generic[T]):
    """Asymmetric confidence interval around a point estimate.

    Assumes the confidence region is a single interval, not a set of disjoint
    intervals.

    Attributes:
        lower_delta: Distance between the point estimate and the lower bound.
        upper_delta: Distance between the point estimate and the upper bound.
        cl: Confidence level of the interval.
    """

    lower_delta: T
    upper_delta: T
    cl: CL[float]

    def scale(self, factor: Any) -> "ConfInt[T]":
        if factor >= 0:
            return ConfInt(factor * self.lower_delta, factor * self.upper_delta, self.cl)
        # A negative factor mirrors the interval, so lower and upper swap.
        return ConfInt(-factor * self.upper_delta, -factor * self.lower_delta, self.cl)

    def to_conf_int(self, cl: CL[float]) -> "ConfInt[T]":
        if cl != self.cl:
            raise ValueError(
                f"Interval is given at {self.cl!r}; cannot convert to {cl!r} "
                "without a distribution model"
            )
        return self
