# MIT License (see LICENSE)
"""
Utility functions for vector math and numeric operations.

Vectors are numpy float64 arrays of shape (D,), where D is 2 or 3.
Every helper here is dimension-agnostic so the same core serves both the
planar and the spatial chassis.
"""
from __future__ import annotations
import os

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Always returns a fresh array, so callers may mutate the result
    without aliasing the input (tuples, lists or other particles' arrays).
    """
    return np.array(x, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a vector. Avoids sqrt."""
    return float(np.dot(v, v))


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a vector."""
    return float(np.sqrt(norm2(v)))


def distance(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance between two points."""
    return norm(b - a)


def unit(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """
    Return a unit vector in the same direction as v.

    Returns the zero vector if |v| < eps to avoid division by zero.
    """
    n = norm(v)
    if n < eps:
        return np.zeros(len(v), dtype=np.float64)
    return v / n


def log_level_from_env(default: str = "WARNING") -> str:
    """Logging level name requested via PLASTIC_SIM_LOG_LEVEL."""
    return os.environ.get("PLASTIC_SIM_LOG_LEVEL", default).upper()
