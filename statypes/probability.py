"""
Probability primitives: p-values and confidence levels.

Both types hold a single probability in [0, 1] and are validated on
construction. Every validated constructor comes in two forms:
- a raising form (``mk_pvalue``, ``cl_from_pvalue``, ``mk_conf_level``) that
  raises ``ProbabilityRangeError`` when the argument is out of range, and
- a fallible form (``*_or_none``, ``try_from``) that returns ``None`` instead.

Confidence levels are usually close to 1, so ``CL`` stores ``1 - CL`` (the
p-value) internally. Ordering of ``CL`` is reversed relative to the stored
complement: a smaller complement is a *higher* confidence level.

>>> CL95 > CL90
True
>>> CL95
cl_from_pvalue(0.05)
"""

from __future__ import annotations

import ast
import re
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from .exceptions import ProbabilityRangeError

T = TypeVar("T")

_ERR_MK_PVALUE = "statypes.probability.mk_pvalue: probability is out of [0,1] range"
_ERR_MK_CL = "statypes.probability.cl_from_pvalue: probability is out of [0,1] range"
_ERR_MK_CONF_LEVEL = (
    "statypes.probability.mk_conf_level: probability is out of [0,1] range"
)


def _in_unit_range(x: Any) -> bool:
    # Uses the value's own ordering, so NaN and incomparable values fail.
    try:
        return bool(0 <= x <= 1)
    except TypeError:
        return False


@dataclass(frozen=True, order=True, repr=False)
class PValue(Generic[T]):
    """A p-value: probability of the tested hypothesis, in [0, 1].

    Equality and ordering follow the contained value.
    """

    value: T

    def __post_init__(self) -> None:
        if not _in_unit_range(self.value):
            raise ProbabilityRangeError(f"{_ERR_MK_PVALUE}, got {self.value!r}")

    def __repr__(self) -> str:
        return f"mk_pvalue({self.value!r})"

    @classmethod
    def try_from(cls, value: T) -> Optional["PValue[T]"]:
        """Return a ``PValue`` or ``None`` if ``value`` is outside [0, 1]."""
        return mk_pvalue_or_none(value)


@dataclass(frozen=True, repr=False)
class CL(Generic[T]):
    """Confidence level, stored as the complement ``p = 1 - confidence``.

    In the context of confidence intervals it is the probability of the
    interval covering the true value. For statistical tests it is ``1 - α``
    where α is the significance of the test.

    Attributes:
        p: Stored complement of the confidence level (probability of the
            hypothesis being false).

    Note:
        Comparisons are reversed relative to ``p``. ``max`` therefore picks the
        level with the smaller stored complement.
    """

    p: T

    def __post_init__(self) -> None:
        if not _in_unit_range(self.p):
            raise ProbabilityRangeError(f"{_ERR_MK_CL}, got {self.p!r}")

    def __repr__(self) -> str:
        return f"cl_from_pvalue({self.p!r})"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CL):
            return NotImplemented
        return self.p > other.p

    def __le__(self, other: object) -> bool:
        if not isinstance(other, CL):
            return NotImplemented
        return self.p >= other.p

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, CL):
            return NotImplemented
        return self.p < other.p

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, CL):
            return NotImplemented
        return self.p <= other.p

    @property
    def confidence(self) -> T:
        """Confidence level ``1 - p``. Subject to rounding errors."""
        return 1 - self.p

    @classmethod
    def try_from(cls, p: T) -> Optional["CL[T]"]:
        """Return a ``CL`` from its stored complement, or ``None`` if out of range."""
        return cl_from_pvalue_or_none(p)


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def mk_pvalue_or_none(value: T) -> Optional[PValue[T]]:
    """Construct a ``PValue``; return ``None`` if ``value`` is outside [0, 1]."""
    if _in_unit_range(value):
        return PValue(value)
    return None


def mk_pvalue(value: T) -> PValue[T]:
    """Construct a ``PValue``.

    Raises:
        ProbabilityRangeError: If ``value`` is outside [0, 1].
    """
    pv = mk_pvalue_or_none(value)
    if pv is None:
        raise ProbabilityRangeError(f"{_ERR_MK_PVALUE}, got {value!r}")
    return pv


def cl_from_pvalue_or_none(p: T) -> Optional[CL[T]]:
    """Construct a ``CL`` from ``1 - CL``; return ``None`` if out of range.

    >>> cl_from_pvalue_or_none(0.05)
    cl_from_pvalue(0.05)
    """
    if _in_unit_range(p):
        return CL(p)
    return None


def cl_from_pvalue(p: T) -> CL[T]:
    """Construct a ``CL`` from ``1 - CL``.

    Raises:
        ProbabilityRangeError: If ``p`` is outside [0, 1].
    """
    cl = cl_from_pvalue_or_none(p)
    if cl is None:
        raise ProbabilityRangeError(f"{_ERR_MK_CL}, got {p!r}")
    return cl


def mk_conf_level_or_none(confidence: T) -> Optional[CL[T]]:
    """Construct a ``CL`` from the confidence itself; ``None`` if out of range.

    >>> mk_conf_level_or_none(0.95)  # doctest: +ELLIPSIS
    cl_from_pvalue(0.050...)
    """
    if _in_unit_range(confidence):
        return CL(1 - confidence)
    return None


def mk_conf_level(confidence: T) -> CL[T]:
    """Construct a ``CL`` from the confidence itself (e.g. ``0.95``).

    Raises:
        ProbabilityRangeError: If ``confidence`` is outside [0, 1].
    """
    cl = mk_conf_level_or_none(confidence)
    if cl is None:
        raise ProbabilityRangeError(f"{_ERR_MK_CONF_LEVEL}, got {confidence!r}")
    return cl


# ---------------------------------------------------------------------------
# Accessors and conversions
# ---------------------------------------------------------------------------


def pvalue(pv: PValue[T]) -> T:
    """Return the raw probability of a ``PValue``."""
    return pv.value


def get_pvalue(cl: CL[T]) -> T:
    """Return the probability of the hypothesis being false (``1 - CL``)."""
    return cl.p


def conf_level(cl: CL[T]) -> T:
    """Return the confidence level ``1 - p``.

    This is subject to rounding errors. Use ``get_pvalue`` when ``1 - CL`` is
    what is actually needed.
    """
    return cl.confidence


def as_cl(pv: PValue[T]) -> CL[T]:
    """Reinterpret a p-value as a confidence level (probability of being wrong)."""
    return CL(pv.value)


def as_pvalue(cl: CL[T]) -> PValue[T]:
    """Reinterpret a confidence level as the p-value of the hypothesis being false."""
    return PValue(cl.p)


CL90: CL[float] = CL(0.10)
CL95: CL[float] = CL(0.05)
CL99: CL[float] = CL(0.01)


# ---------------------------------------------------------------------------
# Text form
# ---------------------------------------------------------------------------

_CALL_RE = re.compile(r"^\s*(?P<name>[a-z_]+)\s*\(\s*(?P<arg>[^()]*?)\s*\)\s*$")


def _parse_call(text: str, name: str) -> Any:
    match = _CALL_RE.match(text)
    if match is None or match.group("name") != name:
        raise ValueError(f"Expected '{name}(<number>)', got {text!r}")
    try:
        arg = ast.literal_eval(match.group("arg"))
    except (ValueError, SyntaxError) as exc:
        raise ValueError(f"Invalid numeric literal in {text!r}") from exc
    if isinstance(arg, bool) or not isinstance(arg, (int, float)):
        raise ValueError(f"Invalid numeric literal in {text!r}")
    return arg


def parse_pvalue(text: str) -> PValue:
    """Parse the ``repr`` of a ``PValue``, e.g. ``"mk_pvalue(0.05)"``.

    Raises:
        ValueError: If the text is not of the form ``mk_pvalue(<number>)``.
        ProbabilityRangeError: If the number is outside [0, 1].
    """
    return mk_pvalue(_parse_call(text, "mk_pvalue"))


def parse_cl(text: str) -> CL:
    """Parse the ``repr`` of a ``CL``, e.g. ``"cl_from_pvalue(0.05)"``.

    Raises:
        ValueError: If the text is not of the form ``cl_from_pvalue(<number>)``.
        ProbabilityRangeError: If the number is outside [0, 1].
    """
    return cl_from_pvalue(_parse_call(text, "cl_from_pvalue"))
