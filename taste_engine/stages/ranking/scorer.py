"""
Per-item scoring: learned preference plus novelty and era bonuses.

Builds a ScoredItem for one catalogue item given the session state and config.
"""

from ...features.cache import FeatureCache
from ...models.config import TasteConfig
from ...models.item import CatalogueItem
from ...models.scoring import ScoredItem
from ...models.state import PreferenceState
from ...utils.vector_math import dot, sigmoid


def novelty_bonus(item: CatalogueItem, state: PreferenceState, config: TasteConfig) -> float:
    """Bonus for items not shown yet; short-form series comedy gets a little extra."""
    if item.id in state.explored:
        return 0.0
    bonus = config.novelty_bonus
    if item.is_series and item.has_genre("Comedy"):
        bonus += config.series_novelty_bonus
    return bonus


def era_bonus(is_recent: bool, config: TasteConfig) -> float:
    return config.era_bonus if is_recent else 0.0


def score_item(
    item: CatalogueItem,
    state: PreferenceState,
    config: TasteConfig,
    features: FeatureCache,
) -> ScoredItem:
    """
    Score one item against the session weights.

    final = sigmoid(w . phi(item)) + novelty_bonus + era_bonus
    """
    vec = features.vector(item)
    pref = sigmoid(dot(state.w, vec))
    nov = novelty_bonus(item, state, config)
    era = era_bonus(vec.is_recent, config)
    return ScoredItem(
        item=item,
        preference_score=pref,
        novelty_bonus=nov,
        era_bonus=era,
        final_score=pref + nov + era,
    )
