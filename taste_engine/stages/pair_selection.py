"""
Active-learning pair selection for onboarding.

Picks the comparison expected to teach the model the most: pairs the current weights
cannot call (prediction near 50/50) and whose items look clearly different.

    uncertainty     = clamp(1 - 2 * min(1, |w . (phi(A) - phi(B))|), 0, 1)
    distance        = L1(phi(A) - phi(B)) / D
    informativeness = weight_uncertainty * uncertainty + weight_distance * distance

Search is bounded: a random sample of the pool, and a fixed window of partners per
anchor, so cost stays flat for catalogues in the hundreds.

The public entry point is select_pair.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple, Union

import numpy as np

from ..errors import InsufficientCandidatesError
from ..features.cache import FeatureCache, resolve_features
from ..models.config import TasteConfig, resolve_config
from ..models.item import CatalogueItem, ensure_items
from ..models.session import ComparisonPair
from ..models.state import pair_key
from ..utils.rng import resolve_rng
from .candidate_pool import get_pair_pool

logger = logging.getLogger(__name__)


def _sample_pool(
    pool: List[CatalogueItem],
    sample_size: int,
    rng: np.random.Generator,
) -> List[CatalogueItem]:
    """Shuffle the pool and keep at most sample_size items."""
    order = rng.permutation(len(pool))[:sample_size]
    return [pool[i] for i in order]


def _fit_weights(w: Sequence[float], dimensions: int) -> np.ndarray:
    """Weights padded or cut to the feature dimension (extra slots would meet zeros)."""
    arr = np.asarray(w, dtype=float)
    if len(arr) >= dimensions:
        return arr[:dimensions]
    return np.pad(arr, (0, dimensions - len(arr)))


def score_pairs_for_anchor(
    anchor: np.ndarray,
    partners: np.ndarray,
    w: np.ndarray,
    config: TasteConfig,
) -> np.ndarray:
    """Informativeness of (anchor, partner) for each partner row."""
    diffs = anchor - partners
    confidence = np.abs(diffs @ w)
    uncertainty = np.clip(1.0 - np.minimum(1.0, confidence) * 2.0, 0.0, 1.0)
    distance = np.abs(diffs).sum(axis=1) / max(1, diffs.shape[1])
    return config.weight_uncertainty * uncertainty + config.weight_distance * distance


def select_pair(
    candidates: Iterable[Union[Dict, CatalogueItem]],
    w: Sequence[float],
    exclude_ids: Optional[Set[str]] = None,
    config: Optional[TasteConfig] = None,
    rng: Optional[np.random.Generator] = None,
    features: Optional[FeatureCache] = None,
    pairs_shown: Optional[Set[str]] = None,
) -> ComparisonPair:
    """
    Propose the next comparison pair.

    Pairs already asked (pairs_shown) are passed over while any unseen pair is found
    in the search window.

    Raises:
        InsufficientCandidatesError: fewer than 2 items left after exclusions.
    """
    config = resolve_config(config)
    rng = resolve_rng(rng)
    features = resolve_features(features)
    pairs_shown = pairs_shown or set()

    # --- 1. Filter exclusions and duplicates ---
    pool = get_pair_pool(ensure_items(list(candidates)), exclude_ids or set())
    if len(pool) < 2:
        logger.info(
            "[pair_select] INSUFFICIENT_CANDIDATES eligible=%s excluded=%s",
            len(pool), len(exclude_ids or ()),
        )
        raise InsufficientCandidatesError(len(pool))

    # --- 2. Bounded random sample ---
    sample = _sample_pool(pool, config.pair_sample_size, rng)
    vectors = np.stack([features.array(item) for item in sample])
    weights = _fit_weights(w, vectors.shape[1])

    # --- 3. Score bounded window of partners per anchor ---
    best_any: Optional[Tuple[int, int, float]] = None
    best_unseen: Optional[Tuple[int, int, float]] = None
    n = len(sample)
    for i in range(n - 1):
        end = min(n, i + 1 + config.pair_partner_window)
        scores = score_pairs_for_anchor(vectors[i], vectors[i + 1:end], weights, config)
        for offset, score in enumerate(scores):
            j = i + 1 + offset
            score = float(score)
            if best_any is None or score > best_any[2]:
                best_any = (i, j, score)
            if pair_key(sample[i].id, sample[j].id) in pairs_shown:
                continue
            if best_unseen is None or score > best_unseen[2]:
                best_unseen = (i, j, score)

    # --- 4. Prefer a pair not asked before ---
    if best_unseen is None:
        logger.info("[pair_select] ALL_PAIRS_SEEN sample=%s, repeating best pair", n)
    i, j, score = best_unseen if best_unseen is not None else best_any
    return ComparisonPair(left=sample[i], right=sample[j], informativeness=score)
