"""2D vector helpers used by the corner smoother.

Vectors are plain length-2 numpy arrays. No geographic meaning is attached
here; callers decide the axis order.
"""

from __future__ import annotations
import numpy as np


def as_vec(v) -> np.ndarray:
    return np.asarray(v, dtype=np.float64)


def sub(v1: np.ndarray, v2: np.ndarray) -> np.ndarray:
    return as_vec(v1) - as_vec(v2)


def add(v1: np.ndarray, v2: np.ndarray) -> np.ndarray:
    return as_vec(v1) + as_vec(v2)


def scale(v: np.ndarray, s: float) -> np.ndarray:
    return as_vec(v) * s


def magnitude(v: np.ndarray) -> float:
    v = as_vec(v)
    return float(np.hypot(v[0], v[1]))


def normalize(v: np.ndarray) -> np.ndarray:
    """Return the unit vector of ``v``, or the zero vector when ``v`` has no length."""
    mag = magnitude(v)
    if mag > 0:
        return as_vec(v) / mag
    return np.zeros(2, dtype=np.float64)


def dot(v1: np.ndarray, v2: np.ndarray) -> float:
    return float(np.dot(as_vec(v1), as_vec(v2)))
