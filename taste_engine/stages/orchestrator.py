"""
Recommendation orchestrator — ranks the eligible catalogue, diversifies it, and explains it.

The main entry point is create_recommendations:
    rank (score + sort) -> MMR top-K (over-fetched when the guard is on)
    -> diversity guard -> epsilon-greedy swap -> explanation
"""

import logging
from typing import Dict, List, Optional, Union

import numpy as np

from ..features.cache import FeatureCache, resolve_features
from ..models.config import TasteConfig, resolve_config
from ..models.item import CatalogueItem, ensure_items, index_by_id
from ..models.scoring import Recommendations, ScoredItem
from ..models.state import PreferenceState
from ..utils.rng import resolve_rng
from .ranking import (
    apply_diversity_guard,
    apply_exploration_swap,
    build_explanation,
    rank_items,
    select_top_k,
)

logger = logging.getLogger(__name__)


def _diversify(
    ranked: List[ScoredItem],
    k: int,
    config: TasteConfig,
    rng: np.random.Generator,
    features: FeatureCache,
) -> List[ScoredItem]:
    """MMR selection, then the genre/director guard when enabled."""
    if not config.diversity_guard_enabled:
        return select_top_k(ranked, k, config.mmr_lambda, features)
    overfetch = min(len(ranked), k * max(1, config.guard_overfetch))
    ordered = select_top_k(ranked, overfetch, config.mmr_lambda, features)
    return apply_diversity_guard(ordered, ranked, k, config, rng)


def create_recommendations(
    items: List[Union[Dict, CatalogueItem]],
    state: PreferenceState,
    k: int = 12,
    config: Optional[TasteConfig] = None,
    rng: Optional[np.random.Generator] = None,
    features: Optional[FeatureCache] = None,
) -> Recommendations:
    """
    Build the served recommendation list for a session.

    Returns:
        Recommendations with min(k, eligible items) entries and an explanation built
        from the session's winning votes.
    """
    # Resolve config (use defaults when None)
    config = resolve_config(config)
    rng = resolve_rng(rng)
    features = resolve_features(features)

    # Normalize inputs to models (callers may pass dicts)
    typed = ensure_items(items)

    # Score and sort; exploration waits until the final order is known
    ranked = rank_items(typed, state, config, rng, features, explore=False)

    # Diversify
    served = _diversify(ranked, k, config, rng, features) if k > 0 else []
    served = apply_exploration_swap(served, state.exploration_rate, config, rng)

    explanation = build_explanation(state.winner_ids, index_by_id(typed), config)
    logger.info(
        "[recommend] SERVED k=%s served=%s eligible=%s choices=%s",
        k, len(served), len(ranked), state.choices,
    )
    return Recommendations(items=served, explanation=explanation)
