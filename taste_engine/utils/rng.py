"""
Random source helpers.

Every stage that samples, shuffles, or jitters takes a numpy Generator so a fixed seed
reproduces a whole session. Production callers pass None for fresh OS entropy.
"""

from typing import Optional, Union

import numpy as np

RngLike = Union[None, int, np.random.Generator]


def make_rng(seed: RngLike = None) -> np.random.Generator:
    """Generator from a seed, an existing Generator (returned as-is), or None (OS entropy)."""
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def resolve_rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    """Return rng or a freshly seeded Generator when none is provided."""
    return rng if rng is not None else np.random.default_rng()
