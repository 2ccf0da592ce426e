"""Packed columnar representation of many estimates or confidence levels.

Large collections of estimates are stored as one ``pandas.DataFrame`` with a
column per field instead of a list of objects. The error kind is inferred
from the columns present:

- ``NormalErr``: ``point``, ``sigma``
- ``TErr``: ``point``, ``error``, ``degrees_of_freedom`` (NaN in both marks
  ``UNKNOWN``, so a ``TErr(nan, nan)`` reads back as ``UNKNOWN``)
- ``ConfInt``: ``point``, ``lower_delta``, ``upper_delta``, ``cl_p_value``
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

import numpy as np
import numpy.typing as npt
import pandas as pd

from .error_models import UNKNOWN, ConfInt, NormalErr, TErr, TErrUnknown
from .estimate import Estimate
from .exceptions import ProbabilityRangeError
from .probability import CL
from .schema import FIELDS

logger = logging.getLogger(__name__)


def _error_kind(error: object) -> type:
    if isinstance(error, TErrUnknown):
        return TErr
    for kind in (NormalErr, TErr, ConfInt):
        if isinstance(error, kind):
            return kind
    raise TypeError(f"No columnar layout for error model {type(error).__name__}")


def estimates_to_frame(estimates: Sequence[Estimate]) -> pd.DataFrame:
    """Pack estimates sharing one error kind into a DataFrame.

    Args:
        estimates (Sequence[Estimate]): Estimates whose errors are all
            ``NormalErr``, all ``TErr``/``UNKNOWN``, or all ``ConfInt``.

    Returns:
        pandas.DataFrame: One row per estimate, float columns.

    Raises:
        ValueError: If ``estimates`` is empty (the error kind is unknown).
        TypeError: If error kinds are mixed or unsupported.
    """
    if len(estimates) == 0:
        raise ValueError("estimates cannot be empty")

    kinds = {_error_kind(e.error) for e in estimates}
    if len(kinds) > 1:
        names = sorted(k.__name__ for k in kinds)
        raise TypeError(f"Estimates must share one error kind; got {names}")
    kind = kinds.pop()

    f = FIELDS
    data = {f.point: [float(e.point) for e in estimates]}
    if kind is NormalErr:
        data[f.sigma] = [float(e.error.sigma) for e in estimates]
    elif kind is TErr:
        data[f.t_error] = [
            np.nan if e.error is UNKNOWN else float(e.error.error) for e in estimates
        ]
        data[f.dof] = [
            np.nan if e.error is UNKNOWN else float(e.error.degrees_of_freedom)
            for e in estimates
        ]
    else:
        data[f.lower_delta] = [float(e.error.lower_delta) for e in estimates]
        data[f.upper_delta] = [float(e.error.upper_delta) for e in estimates]
        data[f.cl_p_value] = [float(e.error.cl.p) for e in estimates]

    return pd.DataFrame(data, dtype=float)


def frame_to_estimates(frame: pd.DataFrame) -> List[Estimate]:
    """Unpack a DataFrame produced by ``estimates_to_frame``.

    Raises:
        KeyError: If the columns do not match any known layout.
        ProbabilityRangeError: If a ``cl_p_value`` entry is outside [0, 1].
    """
    f = FIELDS
    cols = set(frame.columns)
    if f.point not in cols:
        raise KeyError(f"Missing point column '{f.point}'.")
    points = frame[f.point].to_numpy(dtype=float)

    if f.sigma in cols:
        sigmas = frame[f.sigma].to_numpy(dtype=float)
        return [Estimate(float(x), NormalErr(float(s))) for x, s in zip(points, sigmas)]

    if {f.t_error, f.dof} <= cols:
        errs = frame[f.t_error].to_numpy(dtype=float)
        dofs = frame[f.dof].to_numpy(dtype=float)
        out: List[Estimate] = []
        for x, err, dof in zip(points, errs, dofs):
            if np.isnan(err) and np.isnan(dof):
                out.append(Estimate(float(x), UNKNOWN))
            else:
                out.append(Estimate(float(x), TErr(float(err), float(dof))))
        return out

    if {f.lower_delta, f.upper_delta, f.cl_p_value} <= cols:
        levels = cls_from_array(frame[f.cl_p_value].to_numpy(dtype=float))
        lows = frame[f.lower_delta].to_numpy(dtype=float)
        highs = frame[f.upper_delta].to_numpy(dtype=float)
        return [
            Estimate(float(x), ConfInt(float(lo), float(hi), cl))
            for x, lo, hi, cl in zip(points, lows, highs, levels)
        ]

    raise KeyError(f"Columns {sorted(cols)} do not match any estimate layout.")


def cl_array(levels: Iterable[CL]) -> npt.NDArray[np.float64]:
    """Return the stored complements of ``levels`` as a float array."""
    return np.fromiter((float(cl.p) for cl in levels), dtype=float)


def cls_from_array(arr: npt.ArrayLike) -> List[CL[float]]:
    """Build confidence levels from an array of stored complements.

    Raises:
        ProbabilityRangeError: Naming the first index outside [0, 1].
    """
    values = np.asarray(arr, dtype=float)
    ok = (values >= 0) & (values <= 1)
    if not np.all(ok):
        idx = int(np.flatnonzero(~ok)[0])
        logger.debug("Rejected %d out-of-range level(s)", int(np.sum(~ok)))
        raise ProbabilityRangeError(
            f"statypes.columnar.cls_from_array: probability is out of [0,1] range "
            f"at index {idx}, got {float(values[idx])!r}"
        )
    return [CL(float(p)) for p in values]
