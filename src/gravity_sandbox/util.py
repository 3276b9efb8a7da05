# MIT License (see LICENSE)
"""
Utility functions for 2D vector math.

All functions operate on 2D vectors represented as numpy arrays of shape (2,).
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Always returns a fresh array, so it doubles as a value copy of
    positions and velocities.
    """
    return np.array(x, dtype=np.float64)


def zeros2() -> np.ndarray:
    """A new zero 2-vector."""
    return np.zeros(2, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 2D vector. Avoids sqrt for performance."""
    return float(v[0] * v[0] + v[1] * v[1])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 2D vector."""
    return float(np.sqrt(norm2(v)))


def perp(v: np.ndarray) -> np.ndarray:
    """
    Perpendicular of v: (x, y) -> (-y, x).

    Every orbit-related helper uses this one rotation so that all
    circular orbits share the same handedness.
    """
    return np.array([-v[1], v[0]], dtype=np.float64)


def cross2(a: np.ndarray, b: np.ndarray) -> float:
    """
    2D cross product (scalar result): a × b = ax*by - ay*bx.

    Positive result means b is counterclockwise from a.
    """
    return float(a[0] * b[1] - a[1] * b[0])
