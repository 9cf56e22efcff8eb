"""
Maximal Marginal Relevance — greedy top-K that trades relevance against redundancy.

For each slot, picks the remaining candidate maximizing
    value = lambda * relevance - (1 - lambda) * max_{s in chosen} cosine(phi(c), phi(s))
No backtracking. Relevance is the Scorer's final_score.
"""

from typing import Dict, List, Optional

import numpy as np

from ...features.cache import FeatureCache, resolve_features
from ...models.scoring import ScoredItem
from ...utils.vector_math import cosine_similarity


def _dedupe(pool: List[ScoredItem]) -> List[ScoredItem]:
    """First occurrence of each item id, order kept."""
    seen = set()
    out = []
    for s in pool:
        if s.item.id in seen:
            continue
        seen.add(s.item.id)
        out.append(s)
    return out


def select_top_k(
    scored_pool: List[ScoredItem],
    k: int = 10,
    lam: float = 0.7,
    features: Optional[FeatureCache] = None,
) -> List[ScoredItem]:
    """
    Select up to k items with MMR.

    Args:
        scored_pool: Candidates with relevance in final_score. Not mutated.
        k: Number to select.
        lam: Relevance weight in [0, 1]; 1 = pure score order, 0 = pure diversity.
        features: Cache for phi lookups.

    Returns:
        Ordered list of min(k, unique ids in pool) ScoredItems, in selection order.
    """
    features = resolve_features(features)
    remaining = _dedupe(scored_pool)
    vectors: Dict[str, np.ndarray] = {s.item.id: features.array(s.item) for s in remaining}

    chosen: List[ScoredItem] = []
    # Running max similarity of each remaining candidate to anything chosen so far
    max_sim: Dict[str, float] = {s.item.id: 0.0 for s in remaining}

    while len(chosen) < k and remaining:
        best_idx = 0
        best_value = -np.inf
        for idx, cand in enumerate(remaining):
            penalty = max_sim[cand.item.id] if chosen else 0.0
            value = lam * cand.final_score - (1.0 - lam) * penalty
            if value > best_value:
                best_value = value
                best_idx = idx

        picked = remaining.pop(best_idx)
        chosen.append(picked)
        picked_vec = vectors[picked.item.id]
        for cand in remaining:
            sim = cosine_similarity(vectors[cand.item.id], picked_vec)
            if len(chosen) == 1 or sim > max_sim[cand.item.id]:
                max_sim[cand.item.id] = sim

    return chosen
