"""
Coordinate normalization.

Rescales raw coordinates into the square ``[-1, 1] x [-1, 1]``, each axis
independently.
"""

from __future__ import annotations

from typing import Union

import numpy as np

from .types import Layout

ArrayLike = Union[float, np.ndarray]


def scaler(z: ArrayLike, a: float, b: float) -> ArrayLike:
    """Map ``z`` from ``[a, b]`` onto ``[-1, 1]``."""
    return 2.0 * (z - a) / (b - a) - 1.0


def rescale_axis(values: np.ndarray) -> np.ndarray:
    """
    Rescale one axis into ``[-1, 1]``.

    An axis whose values are all equal has no extent to rescale; it is
    treated as already centered and mapped to ``0.0``.

    Args:
        values: Raw coordinates along one axis

    Returns:
        New array with min -1.0 and max 1.0, or all zeros if collapsed
    """
    values = np.asarray(values, dtype=np.float64)
    if values.size == 0:
        return values.copy()

    lo = float(np.min(values))
    hi = float(np.max(values))
    if hi - lo <= 0.0:
        return np.zeros_like(values)

    scaled = np.asarray(scaler(values, lo, hi))
    # Pin the extremes exactly; rounding can leave them one ulp off
    scaled[values == lo] = -1.0
    scaled[values == hi] = 1.0
    return scaled


def normalize_layout(x: np.ndarray, y: np.ndarray) -> Layout:
    """Rescale both axes of a layout into ``[-1, 1]``."""
    return Layout(rescale_axis(x), rescale_axis(y))


__all__ = [
    "scaler",
    "rescale_axis",
    "normalize_layout",
]
