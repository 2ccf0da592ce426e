"""Array aliases for samples and weights, with coercion helpers."""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

Sample = npt.NDArray[np.float64]
"""One-dimensional array of observations."""

Weights = npt.NDArray[np.float64]
"""One-dimensional array of weights, parallel to a ``Sample``."""

WeightedSample = npt.NDArray[np.float64]
"""Array of shape ``(n, 2)`` holding ``(value, weight)`` pairs."""


def as_sample(values: npt.ArrayLike) -> Sample:
    """Coerce ``values`` to a one-dimensional float array.

    Raises:
        ValueError: If the input is not one-dimensional.
    """
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 1:
        raise ValueError(f"Sample must be one-dimensional, got shape {arr.shape}")
    return arr


def as_weighted_sample(
    values: npt.ArrayLike, weights: npt.ArrayLike | None = None
) -> WeightedSample:
    """Build a ``(n, 2)`` weighted sample.

    With ``weights`` omitted, ``values`` must already be ``(value, weight)``
    pairs.

    Raises:
        ValueError: If shapes do not line up.
    """
    if weights is None:
        arr = np.asarray(values, dtype=float)
        if arr.ndim != 2 or arr.shape[1] != 2:
            raise ValueError(
                f"Weighted sample must have shape (n, 2), got {arr.shape}"
            )
        return arr

    x = as_sample(values)
    w = as_sample(weights)
    if len(x) != len(w):
        raise ValueError("values and weights must be the same length.")
    return np.column_stack((x, w))


def split_weighted_sample(sample: WeightedSample) -> tuple[Sample, Weights]:
    """Split a weighted sample into its values and weights columns."""
    arr = as_weighted_sample(sample)
    return arr[:, 0].copy(), arr[:, 1].copy()
