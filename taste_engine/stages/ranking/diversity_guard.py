"""
Diversity guard — hard caps per primary genre and per director on the served list.

Walks an already-ordered list (MMR output) and skips items whose primary genre or
director is at its cap. If the caps leave fewer than k items, the list is topped up
from the rest of the pool in random order, caps ignored.
"""

import logging
from typing import Dict, List, Optional, Set

import numpy as np

from ...models.config import TasteConfig
from ...models.scoring import ScoredItem

logger = logging.getLogger(__name__)


def _director_key(scored: ScoredItem) -> Optional[str]:
    director = scored.item.director
    return director.strip().lower() if director and director.strip() else None


def _genre_key(scored: ScoredItem) -> Optional[str]:
    genre = scored.item.primary_genre
    return genre.lower() if genre else None


def select_with_caps(
    ordered: List[ScoredItem],
    k: int,
    max_per_genre: int = 2,
    max_per_director: int = 1,
) -> List[ScoredItem]:
    """
    Keep order, skipping items that would exceed a cap.

    Items with no primary genre / no director are not limited by that cap.

    Args:
        ordered: Candidates in preferred order. Not mutated.
        k: Number to select.
        max_per_genre: Max items sharing a primary genre.
        max_per_director: Max items sharing a director.

    Returns:
        Up to k ScoredItems in their original relative order.
    """
    selected: List[ScoredItem] = []
    genre_count: Dict[str, int] = {}
    director_count: Dict[str, int] = {}

    for scored in ordered:
        if len(selected) >= k:
            break
        genre = _genre_key(scored)
        director = _director_key(scored)

        # Hard caps: skip if genre or director already at max
        if genre is not None and genre_count.get(genre, 0) >= max_per_genre:
            continue
        if director is not None and director_count.get(director, 0) >= max_per_director:
            continue

        selected.append(scored)
        if genre is not None:
            genre_count[genre] = genre_count.get(genre, 0) + 1
        if director is not None:
            director_count[director] = director_count.get(director, 0) + 1

    return selected


def apply_diversity_guard(
    ordered: List[ScoredItem],
    pool: List[ScoredItem],
    k: int,
    config: TasteConfig,
    rng: np.random.Generator,
) -> List[ScoredItem]:
    """
    Cap the ordered list, then fill to min(k, unique pool ids) from the pool at random.
    """
    selected = select_with_caps(
        ordered,
        k,
        max_per_genre=config.max_per_genre,
        max_per_director=config.max_per_director,
    )
    if len(selected) >= k:
        return selected

    taken: Set[str] = {s.item.id for s in selected}
    leftovers: List[ScoredItem] = []
    for s in pool:
        if s.item.id not in taken:
            taken.add(s.item.id)
            leftovers.append(s)
    if not leftovers:
        return selected

    needed = k - len(selected)
    order = rng.permutation(len(leftovers))[:needed]
    logger.info(
        "[diversity_guard] RANDOM_FILL capped=%s filled=%s k=%s",
        len(selected), len(order), k,
    )
    selected.extend(leftovers[i] for i in order)
    return selected
