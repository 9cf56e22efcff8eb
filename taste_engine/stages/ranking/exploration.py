"""
Epsilon-greedy exploration on a ranked list.

With probability exploration_rate, the top item trades places with a random item from
positions [swap_start, min(swap_end, N - 1)]. Only serving order changes; scores do not.
"""

import logging
from typing import List, Optional

import numpy as np

from ...models.config import TasteConfig
from ...models.scoring import ScoredItem

logger = logging.getLogger(__name__)


def swap_range(n: int, config: TasteConfig) -> Optional[range]:
    """Positions the top item may be swapped with, or None when the list is too short."""
    hi = min(config.exploration_swap_end, n - 1)
    if hi < config.exploration_swap_start:
        return None
    return range(config.exploration_swap_start, hi + 1)


def apply_exploration_swap(
    ranked: List[ScoredItem],
    exploration_rate: float,
    config: TasteConfig,
    rng: np.random.Generator,
) -> List[ScoredItem]:
    """
    Return a copy of ranked, possibly with position 0 swapped for serendipity.

    A rate of 0 never swaps (and draws nothing from rng).
    """
    out = list(ranked)
    if exploration_rate <= 0:
        return out
    positions = swap_range(len(out), config)
    if positions is None:
        return out
    if rng.random() >= exploration_rate:
        return out
    k = int(rng.integers(positions.start, positions.stop))
    out[0], out[k] = out[k], out[0]
    logger.debug("[exploration] TOP_SWAPPED position=%s rate=%s", k, exploration_rate)
    return out
