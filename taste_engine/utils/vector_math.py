"""
Vector math — the one place dot products, sigmoid, norms, and cosine similarity live.

Shared by preference updates, pair selection, scoring, and MMR. Length mismatches are
zero-padded and zero-norm vectors are left alone; neither raises.
"""

import logging
import math
from typing import Sequence, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)

VectorLike = Union[Sequence[float], np.ndarray]


def as_vector(v: VectorLike) -> np.ndarray:
    """Float numpy array from a list/tuple/array; None or empty gives an empty array."""
    if v is None:
        return np.zeros(0, dtype=float)
    if hasattr(v, "as_array"):
        return v.as_array()
    return np.asarray(v, dtype=float)


def pad_pair(a: VectorLike, b: VectorLike) -> Tuple[np.ndarray, np.ndarray]:
    """Zero-pad the shorter of two vectors so both have the same length."""
    a_arr, b_arr = as_vector(a), as_vector(b)
    if len(a_arr) == len(b_arr):
        return a_arr, b_arr
    logger.debug(
        "[vector_math] DIMENSION_MISMATCH_PADDED a_len=%s b_len=%s", len(a_arr), len(b_arr)
    )
    n = max(len(a_arr), len(b_arr))
    return np.pad(a_arr, (0, n - len(a_arr))), np.pad(b_arr, (0, n - len(b_arr)))


def dot(a: VectorLike, b: VectorLike) -> float:
    a_arr, b_arr = pad_pair(a, b)
    return float(np.dot(a_arr, b_arr))


def sigmoid(z: float) -> float:
    """Logistic function, stable for large |z|."""
    if z >= 0:
        return 1.0 / (1.0 + math.exp(-z))
    ez = math.exp(z)
    return ez / (1.0 + ez)


def l2_norm(v: VectorLike) -> float:
    return float(np.linalg.norm(as_vector(v)))


def normalize(v: VectorLike) -> np.ndarray:
    """Unit-length copy of v; a zero vector is returned unchanged."""
    arr = as_vector(v)
    norm = np.linalg.norm(arr)
    if norm > 0:
        return arr / norm
    return arr.copy()


def padded_difference(a: VectorLike, b: VectorLike) -> np.ndarray:
    """a - b with the shorter side zero-padded."""
    a_arr, b_arr = pad_pair(a, b)
    return a_arr - b_arr


def l1_distance(a: VectorLike, b: VectorLike) -> float:
    return float(np.abs(padded_difference(a, b)).sum())


def cosine_similarity(v1: VectorLike, v2: VectorLike) -> float:
    """Cosine of the angle between v1 and v2; the shorter is zero-padded, and an empty or zero-norm vector gives 0."""
    a, b = pad_pair(v1, v2)
    if len(a) == 0:
        return 0.0
    norm_product = np.linalg.norm(a) * np.linalg.norm(b)
    return float(np.dot(a, b) / norm_product) if norm_product > 0 else 0.0
