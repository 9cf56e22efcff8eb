"""Shared utilities for vector math and random sources."""

from .rng import make_rng, resolve_rng
from .vector_math import (
    cosine_similarity,
    dot,
    l1_distance,
    l2_norm,
    normalize,
    padded_difference,
    sigmoid,
)

__all__ = [
    "cosine_similarity",
    "dot",
    "l1_distance",
    "l2_norm",
    "make_rng",
    "normalize",
    "padded_difference",
    "resolve_rng",
    "sigmoid",
]
