"""
Human-readable formatting of estimates, limits and confidence levels.

Rounding follows the usual significant-figure convention for reported
uncertainties:
- uncertainty rounded to 1 s.f. (2 if the leading digit is 1)
- value rounded to the same decimal place as the uncertainty
"""

from __future__ import annotations

import math
from typing import Tuple

from .error_models import ConfInt, NormalErr, TErr, TErrUnknown
from .estimate import Estimate
from .limits import LowerLimit, UpperLimit
from .probability import CL


def _round_uncertainty(u: float) -> Tuple[float, int]:
    """
    Returns:
      (rounded_uncertainty, ndigits_for_rounding_value)
    where ndigits may be negative (round to tens/hundreds/etc.).
    """
    if u <= 0 or not math.isfinite(u):
        return u, 0

    u = abs(float(u))
    exponent = math.floor(math.log10(u))
    leading = u / (10**exponent)

    sig_figs = 2 if 1.0 <= leading < 2.0 else 1
    ndigits = sig_figs - 1 - exponent

    ru = round(u, ndigits)

    if ru == 0:
        ndigits = sig_figs - exponent
        ru = round(u, ndigits)

    return float(ru), int(ndigits)


def round_value_to_uncertainty(value: float, uncertainty: float) -> Tuple[float, float]:
    """
    Round a value and uncertainty using s.f. rules:
    - uncertainty to 1 s.f. (2 if leading digit is 1)
    - value rounded to the same decimal place
    """
    ru, ndigits = _round_uncertainty(abs(float(uncertainty)))
    if not math.isfinite(ru) or ru == 0:
        return float(value), float(uncertainty)
    return float(round(float(value), ndigits)), float(ru)


def _format_number_with_rounding(x: float, ndigits: int) -> str:
    xr = round(float(x), ndigits)
    if ndigits > 0:
        return f"{xr:.{ndigits}f}"
    return f"{xr:.0f}"


def _with_unit(text: str, unit: str) -> str:
    return f"{text} {unit}".strip()


def format_value_with_uncertainty(
    value: float, uncertainty: float, unit: str = ""
) -> str:
    """Format ``value ± uncertainty`` with s.f.-consistent rounding."""
    ru, ndigits = _round_uncertainty(abs(float(uncertainty)))
    if ru == 0 or not math.isfinite(ru):
        v = f"{float(value):.6g}"
        u = f"{float(uncertainty):.6g}"
        return _with_unit(f"{v} ± {u}", unit)

    v_str = _format_number_with_rounding(value, ndigits)
    u_str = _format_number_with_rounding(ru, ndigits)
    return _with_unit(f"{v_str} ± {u_str}", unit)


def format_cl(cl: CL) -> str:
    """Format a confidence level as a percentage, e.g. ``"95% CL"``."""
    return f"{100 * float(cl.confidence):.6g}% CL"


def _format_asymmetric(value: float, ci: ConfInt, unit: str) -> str:
    lower = float(ci.lower_delta)
    upper = float(ci.upper_delta)
    # Offsets are shown signed: the interval is [value - lower, value + upper].
    up_sign = "-" if upper < 0 else "+"
    down_sign = "+" if lower < 0 else "-"
    lower, upper = abs(lower), abs(upper)
    positive = [d for d in (lower, upper) if d > 0 and math.isfinite(d)]
    if positive:
        _, ndigits = _round_uncertainty(min(positive))
        v_str = _format_number_with_rounding(value, ndigits)
        u_str = _format_number_with_rounding(upper, ndigits)
        l_str = _format_number_with_rounding(lower, ndigits)
    else:
        v_str, u_str, l_str = f"{value:.6g}", f"{upper:.6g}", f"{lower:.6g}"
    text = f"{v_str} {up_sign}{u_str}/{down_sign}{l_str}"
    return f"{_with_unit(text, unit)} ({format_cl(ci.cl)})"


def format_estimate(est: Estimate, unit: str = "") -> str:
    """Format an estimate for reports.

    Examples:
        ``144 ± 5``, ``144 ± 5 (t, df=9)``, ``144 +6/-4 (95% CL)``,
        ``144 (error unknown)``.

    Raises:
        TypeError: If the error model has no text form.
    """
    value = float(est.point)
    err = est.error
    if isinstance(err, NormalErr):
        return format_value_with_uncertainty(value, float(err.sigma), unit)
    if isinstance(err, TErr):
        text = format_value_with_uncertainty(value, float(err.error), unit)
        return f"{text} (t, df={float(err.degrees_of_freedom):g})"
    if isinstance(err, TErrUnknown):
        return f"{_with_unit(f'{value:.6g}', unit)} (error unknown)"
    if isinstance(err, ConfInt):
        return _format_asymmetric(value, err, unit)
    raise TypeError(f"No text form for error model {type(err).__name__}")


def format_limit(limit: UpperLimit | LowerLimit, unit: str = "") -> str:
    """Format a one-sided limit, e.g. ``"< 3.2 (95% CL)"``."""
    if isinstance(limit, UpperLimit):
        sign = "<"
    elif isinstance(limit, LowerLimit):
        sign = ">"
    else:
        raise TypeError(f"Expected UpperLimit or LowerLimit, got {type(limit).__name__}")
    bound = _with_unit(f"{float(limit.bound):.6g}", unit)
    return f"{sign} {bound} ({format_cl(limit.cl)})"
