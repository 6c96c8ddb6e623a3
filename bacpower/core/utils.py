"""Small pure helpers for core computations."""

from __future__ import annotations

import numpy as np

from bacpower.errors import ShapeMismatch


def require_length(name: str, values: np.ndarray, expected: int) -> np.ndarray:
    arr = np.asarray(values, dtype=float).ravel()
    if arr.size != int(expected):
        raise ShapeMismatch(f"{name} must have length {int(expected)}, got {arr.size}.")
    return arr
