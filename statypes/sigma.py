"""Express confidence levels as a number of standard deviations (nσ).

This is the convention widely used in experimental physics: an N sigma
confidence level is the probability mass within N sigma of a normal
distribution (two-tailed), or below N sigma (one-tailed).

Note:
    The correspondence only holds for the normal distribution. Experimental
    distributions are usually only approximately normal, especially at the
    extreme tails.
"""

from __future__ import annotations

from typing import Optional

from scipy.stats import norm

from .exceptions import SigmaRangeError
from .probability import CL


def n_sigma_or_none(n: float) -> Optional[CL[float]]:
    """Two-tailed nσ confidence level, or ``None`` if ``n`` is not positive."""
    if n > 0:
        return CL(float(2 * norm.cdf(-n)))
    return None


def n_sigma(n: float) -> CL[float]:
    """Confidence level corresponding to ``n`` sigma, two-tailed.

    Args:
        n (float): Number of standard deviations. Must be positive.

    Returns:
        CL: Level with stored complement ``2·Φ(−n)``.

    Raises:
        SigmaRangeError: If ``n <= 0``.
    """
    cl = n_sigma_or_none(n)
    if cl is None:
        raise SigmaRangeError(
            f"statypes.sigma.n_sigma: non-positive number of sigma, got {n!r}"
        )
    return cl


def n_sigma1_or_none(n: float) -> Optional[CL[float]]:
    """One-tailed nσ confidence level, or ``None`` if ``n`` is not positive."""
    if n > 0:
        return CL(float(norm.cdf(-n)))
    return None


def n_sigma1(n: float) -> CL[float]:
    """Confidence level corresponding to ``n`` sigma, one-tailed.

    This is the probability of obtaining a value less than ``n·σ``.

    Raises:
        SigmaRangeError: If ``n <= 0``.
    """
    cl = n_sigma1_or_none(n)
    if cl is None:
        raise SigmaRangeError(
            f"statypes.sigma.n_sigma1: non-positive number of sigma, got {n!r}"
        )
    return cl


def get_n_sigma(cl: CL[float]) -> float:
    """Express a confidence level in sigma, two-tailed."""
    return float(-norm.ppf(cl.p / 2))


def get_n_sigma1(cl: CL[float]) -> float:
    """Express a confidence level in sigma, one-tailed."""
    return float(-norm.ppf(cl.p))
