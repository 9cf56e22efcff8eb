"""
Main ranking orchestration: score every eligible item, sort, then explore.

Submodules used: scorer, exploration.
"""

import logging
from typing import Dict, Iterable, List, Optional, Union

import numpy as np

from ...features.cache import FeatureCache, resolve_features
from ...models.config import TasteConfig, resolve_config
from ...models.item import CatalogueItem, ensure_items
from ...models.scoring import ScoredItem
from ...models.state import PreferenceState
from ...utils.rng import resolve_rng
from ..candidate_pool import get_ranking_pool
from .exploration import apply_exploration_swap
from .scorer import score_item

logger = logging.getLogger(__name__)


def rank_items(
    items: Iterable[Union[Dict, CatalogueItem]],
    state: PreferenceState,
    config: Optional[TasteConfig] = None,
    rng: Optional[np.random.Generator] = None,
    features: Optional[FeatureCache] = None,
    explore: bool = True,
) -> List[ScoredItem]:
    """
    Rank the eligible catalogue against the session's weights.

    Hidden items are dropped. Sorting is by final_score descending (stable, so equal
    scores keep catalogue order); the epsilon-greedy swap is applied last unless
    explore is False (callers that re-order afterwards apply it themselves).
    """
    config = resolve_config(config)
    rng = resolve_rng(rng)
    features = resolve_features(features)

    # 1) Eligible pool (hidden removed, duplicate ids collapsed)
    pool = get_ranking_pool(ensure_items(list(items)), state)

    # 2) Score and sort
    scored = [score_item(item, state, config, features) for item in pool]
    scored.sort(key=lambda s: s.final_score, reverse=True)

    # 3) Epsilon-greedy exploration on serving order
    ranked = (
        apply_exploration_swap(scored, state.exploration_rate, config, rng)
        if explore
        else scored
    )

    if ranked:
        logger.debug(
            "[rank] RANKED n=%s top=%s top_score=%.3f",
            len(ranked), ranked[0].item.id, ranked[0].final_score,
        )
    return ranked
