"""
Eligible pool pre-selection

Filters the catalogue before pair selection or ranking: drops excluded ids and
collapses duplicate ids (first occurrence wins). Catalogue order is preserved.

The public entry points are get_pair_pool and get_ranking_pool.
"""

from typing import Iterable, List, Set

from ..models.item import CatalogueItem
from ..models.state import PreferenceState


def _not_excluded(item: CatalogueItem, excluded_ids: Set[str]) -> bool:
    """True if the item id is not in the exclusion set."""
    return item.id not in excluded_ids


def _filter_eligible(
    items: Iterable[CatalogueItem],
    excluded_ids: Set[str],
) -> List[CatalogueItem]:
    """Return items not excluded, each id at most once."""
    seen: Set[str] = set()
    eligible = []
    for item in items:
        if not _not_excluded(item, excluded_ids):
            continue
        if item.id in seen:
            continue
        seen.add(item.id)
        eligible.append(item)
    return eligible


def get_pair_pool(
    items: Iterable[CatalogueItem],
    excluded_ids: Set[str],
) -> List[CatalogueItem]:
    """Items that may appear in the next comparison."""
    return _filter_eligible(items, set(excluded_ids))


def get_ranking_pool(
    items: Iterable[CatalogueItem],
    state: PreferenceState,
) -> List[CatalogueItem]:
    """Items that may be recommended: everything the user has not hidden."""
    return _filter_eligible(items, set(state.hidden))
