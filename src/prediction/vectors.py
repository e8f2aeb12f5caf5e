"""
Small helpers over 128-long frequency/probability vectors.
"""
import numpy as np

from .errors import DimensionMismatchError


def _check(a: np.ndarray, b: np.ndarray) -> None:
    if a.shape != b.shape:
        raise DimensionMismatchError(f"Array sizes do not match: {a.shape} vs {b.shape}")


def add(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    _check(a, b)
    return a + b


def multiply(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Element-wise product."""
    _check(a, b)
    return a * b


def count_nonzero(a: np.ndarray) -> int:
    return int(np.count_nonzero(a > 0))


def normalise(a: np.ndarray) -> np.ndarray:
    """Scale to sum 1. An all-zero vector is returned unchanged."""
    total = a.sum()
    if total <= 0:
        return a.copy()
    return a / total
