"""
Point estimates paired with an error model.

For example ``144 ± 5`` (assuming normality) is written

    Estimate(point=144, error=NormalErr(5))      # or pm(144, 5)

and ``144 +6 -4`` at 95% CL is written

    Estimate(point=144, error=ConfInt(4, 6, CL95))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Tuple, TypeVar

from .error_models import ConfInt, NormalErr, TErr, TErrUnknown, scale
from .probability import CL

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Estimate(Generic[T, E]):
    """A point estimate and its error.

    Attributes:
        point: Point estimate.
        error: Any error model (``NormalErr``, ``TErr``/``UNKNOWN``,
            ``ConfInt``, or a user type following the same conventions).
    """

    point: T
    error: E

    def scale(self, factor: Any) -> "Estimate[T, E]":
        """Multiply the point and its error by ``factor``.

        Raises:
            TypeError: If the error model has no defined scaling.
        """
        return Estimate(factor * self.point, scale(factor, self.error))

    def to_conf_int(self, cl: CL[float]) -> "Estimate[T, ConfInt]":
        """Re-express the error as an interval at confidence level ``cl``.

        Raises:
            ValueError: If the error is ``UNKNOWN`` or an interval at another level.
            TypeError: If the error model cannot produce an interval.
        """
        if isinstance(self.error, TErrUnknown):
            raise ValueError("Cannot build a confidence interval from an unknown t error")
        convert = getattr(self.error, "to_conf_int", None)
        if convert is None:
            raise TypeError(
                f"{type(self.error).__name__} cannot be converted to a confidence interval"
            )
        return Estimate(self.point, convert(cl))


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def estimate_norm_err(point: T, sigma: T) -> Estimate[T, NormalErr[T]]:
    """Create an estimate with a normal 1σ error."""
    return Estimate(point, NormalErr(sigma))


pm = estimate_norm_err


def estimate_t_err(
    point: T, sigma: T, degrees_of_freedom: float
) -> Estimate[T, TErr[T]]:
    """Create an estimate with a Student-t error."""
    return Estimate(point, TErr(sigma, degrees_of_freedom))


def estimate_from_err(
    point: T, errors: Tuple[T, T], cl: CL[float]
) -> Estimate[T, ConfInt[T]]:
    """Create an estimate with asymmetric errors.

    Args:
        point: Central estimate.
        errors: ``(lower_delta, upper_delta)``. Both should be non-negative
            but this is not checked.
        cl: Confidence level of the interval.
    """
    lower_delta, upper_delta = errors
    return Estimate(point, ConfInt(lower_delta, upper_delta, cl))


def estimate_from_interval(
    point: T, bounds: Tuple[T, T], cl: CL[float]
) -> Estimate[T, ConfInt[T]]:
    """Create an estimate from the bounds of its confidence interval.

    Args:
        point: Point estimate. Should lie within the interval but this is not
            checked.
        bounds: ``(lower, upper)`` bounds of the interval.
        cl: Confidence level of the interval.
    """
    lower, upper = bounds
    return Estimate(point, ConfInt(point - lower, upper - point, cl))


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------


def _conf_int(est: Estimate) -> ConfInt:
    if not isinstance(est.error, ConfInt):
        raise TypeError(
            f"Estimate error must be a ConfInt, got {type(est.error).__name__}"
        )
    return est.error


def confidence_interval(est: Estimate[T, ConfInt[T]]) -> Tuple[T, T]:
    """Return ``(lower, upper)`` bounds of the confidence interval."""
    ci = _conf_int(est)
    return est.point - ci.lower_delta, est.point + ci.upper_delta


def asym_errors(est: Estimate[T, ConfInt[T]]) -> Tuple[T, T]:
    """Return ``(lower_delta, upper_delta)``."""
    ci = _conf_int(est)
    return ci.lower_delta, ci.upper_delta
