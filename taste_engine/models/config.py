"""
Engine configuration — learning, pair selection, scoring, exploration, and diversity parameters.

TasteConfig defaults are defined here. Callers may pass a dict (e.g. loaded from a
config.json next to the catalogue); from_dict() merges it with these defaults.
"""

import json
from pathlib import Path
from typing import Dict, Optional, Union

from pydantic import BaseModel, model_validator

from .feature_vector import FEATURE_DIMENSIONS


class TasteConfig(BaseModel):
    """Configuration for the preference learning and ranking engine."""

    # -------------------------------------------------------------------------
    # Feature space
    # -------------------------------------------------------------------------

    # Length of every feature and weight vector. Must match the feature scheme.
    feature_dimensions: int = FEATURE_DIMENSIONS

    # -------------------------------------------------------------------------
    # Onboarding / online pairwise learning
    # w = (1 - l2) * w + eta * (1 - sigmoid(w . diff)) * diff, then L2-normalized
    # -------------------------------------------------------------------------

    # Number of A/B votes before the session switches to recommendations.
    target_rounds: int = 12

    # Step size eta. Higher = faster convergence, noisier weights.
    learning_rate: float = 0.6
    # Shrinkage per update. Keeps weights from running away on repeated votes.
    l2_regularization: float = 0.01

    # -------------------------------------------------------------------------
    # Pair selection (active learning)
    # informativeness = weight_uncertainty * uncertainty + weight_distance * distance
    # -------------------------------------------------------------------------

    # Max items randomly sampled from the eligible pool before pair search.
    pair_sample_size: int = 110
    # Partners considered per anchor in the sampled pool (bounded inner loop).
    pair_partner_window: int = 26

    weight_uncertainty: float = 0.6
    weight_distance: float = 0.4

    # Ids shown as pair members in the last N slots are excluded from the next pair.
    recent_window: int = 8

    # -------------------------------------------------------------------------
    # Anchor pool (recognisable titles the onboarding pairs are drawn from)
    # knownness = imdbTop 1.5 + imdbList 0.5 + 0.8 * pop/60 + 0.5 * votes/20000
    # -------------------------------------------------------------------------

    anchor_pool_enabled: bool = True
    anchor_min_knownness: float = 0.6
    anchor_max_per_cluster: int = 30
    anchor_max_per_decade: int = 5
    # Only titles in this original language become anchors ("" accepts all; missing means "en").
    anchor_language: str = "en"

    # Funnel: broad before focused_from votes, focused before precise_from, then precise.
    funnel_focused_from: int = 4
    funnel_precise_from: int = 8
    # Per-cluster slice sizes for each funnel phase.
    anchor_broad_per_cluster: int = 8
    anchor_focused_per_cluster: int = 15
    anchor_precise_per_cluster: int = 15
    # Slice of the whole anchor pool when no cluster preference is learned yet.
    anchor_focused_fallback: int = 40
    anchor_precise_fallback: int = 30
    # Learned genre slots used to narrow focused (all) and precise (first 2) phases.
    anchor_top_genres: int = 3

    # -------------------------------------------------------------------------
    # Scoring
    # score = sigmoid(w . phi) + novelty + era
    # -------------------------------------------------------------------------

    # Bonus for items not yet shown in this session.
    novelty_bonus: float = 0.08
    # Extra bonus for unexplored short-form (series comedy) items.
    series_novelty_bonus: float = 0.05
    # Bonus for recent (2020+) releases; offsets the catalogue's bias to older titles.
    era_bonus: float = 0.3

    # -------------------------------------------------------------------------
    # Exploration (epsilon-greedy swap of the top item)
    # -------------------------------------------------------------------------

    exploration_rate_default: float = 0.12
    exploration_rate_min: float = 0.02
    exploration_rate_max: float = 0.45

    # The top item may be swapped with a position in [swap_start, min(swap_end, N - 1)].
    exploration_swap_start: int = 3
    exploration_swap_end: int = 12

    # -------------------------------------------------------------------------
    # Diversity
    # MMR value = lambda * relevance - (1 - lambda) * max cosine to chosen
    # -------------------------------------------------------------------------

    # Higher = more relevance-driven, lower = more diversity-driven.
    mmr_lambda: float = 0.7

    # Hard caps applied after MMR; filled randomly from the rest of the pool if k is unreachable.
    diversity_guard_enabled: bool = True
    max_per_genre: int = 2
    max_per_director: int = 1
    # MMR pre-selects k * guard_overfetch items so the guard has room to skip.
    guard_overfetch: int = 3

    # -------------------------------------------------------------------------
    # Explanation
    # -------------------------------------------------------------------------

    explanation_top_genres: int = 3
    explanation_top_actors: int = 2
    explanation_top_directors: int = 2

    @model_validator(mode="after")
    def pair_weights_sum_to_one(self):
        total = self.weight_uncertainty + self.weight_distance
        if abs(total - 1.0) > 0.01:
            raise ValueError(f"Pair selection weights must sum to 1.0, got {total}")
        return self

    @model_validator(mode="after")
    def exploration_bounds_ordered(self):
        lo, hi = self.exploration_rate_min, self.exploration_rate_max
        if not 0.0 <= lo <= hi <= 1.0:
            raise ValueError(
                f"Exploration bounds must satisfy 0 <= min <= max <= 1, got [{lo}, {hi}]"
            )
        if not lo <= self.exploration_rate_default <= hi:
            raise ValueError(
                f"Default exploration rate {self.exploration_rate_default} outside [{lo}, {hi}]"
            )
        return self

    @model_validator(mode="after")
    def dimensions_match_scheme(self):
        if self.feature_dimensions != FEATURE_DIMENSIONS:
            raise ValueError(
                f"feature_dimensions must be {FEATURE_DIMENSIONS} for the current feature scheme, "
                f"got {self.feature_dimensions}"
            )
        return self

    @model_validator(mode="after")
    def positive_sizes(self):
        if self.target_rounds < 1:
            raise ValueError("target_rounds must be >= 1")
        if self.pair_sample_size < 2:
            raise ValueError("pair_sample_size must be >= 2")
        if self.pair_partner_window < 1:
            raise ValueError("pair_partner_window must be >= 1")
        if not 0.0 <= self.mmr_lambda <= 1.0:
            raise ValueError(f"mmr_lambda must be within [0, 1], got {self.mmr_lambda}")
        return self

    @model_validator(mode="after")
    def funnel_thresholds_ordered(self):
        if not 0 <= self.funnel_focused_from <= self.funnel_precise_from:
            raise ValueError(
                "Funnel thresholds must satisfy 0 <= focused_from <= precise_from, got "
                f"{self.funnel_focused_from}, {self.funnel_precise_from}"
            )
        return self

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "TasteConfig":
        """Create config from dictionary (e.g., loaded from JSON)."""
        flat = {}
        if "learning" in config_dict:
            lr = config_dict["learning"]
            if "eta" in lr:
                flat["learning_rate"] = lr["eta"]
            if "l2" in lr:
                flat["l2_regularization"] = lr["l2"]
            if "target_rounds" in lr:
                flat["target_rounds"] = lr["target_rounds"]
        if "pair_selection" in config_dict:
            ps = config_dict["pair_selection"]
            for key in ("pair_sample_size", "pair_partner_window", "recent_window"):
                if key in ps:
                    flat[key] = ps[key]
            if "sample_size" in ps:
                flat["pair_sample_size"] = ps["sample_size"]
            if "partner_window" in ps:
                flat["pair_partner_window"] = ps["partner_window"]
            if "alpha" in ps:
                flat["weight_uncertainty"] = ps["alpha"]
            if "beta" in ps:
                flat["weight_distance"] = ps["beta"]
        if "scoring" in config_dict:
            flat.update(config_dict["scoring"])
        if "exploration" in config_dict:
            ex = config_dict["exploration"]
            if "default" in ex:
                flat["exploration_rate_default"] = ex["default"]
            if "min" in ex:
                flat["exploration_rate_min"] = ex["min"]
            if "max" in ex:
                flat["exploration_rate_max"] = ex["max"]
            if "swap_start" in ex:
                flat["exploration_swap_start"] = ex["swap_start"]
            if "swap_end" in ex:
                flat["exploration_swap_end"] = ex["swap_end"]
        if "diversity" in config_dict:
            dv = config_dict["diversity"]
            if "lambda" in dv:
                flat["mmr_lambda"] = dv["lambda"]
            if "guard_enabled" in dv:
                flat["diversity_guard_enabled"] = dv["guard_enabled"]
            flat["max_per_genre"] = dv.get("max_per_genre", 2)
            flat["max_per_director"] = dv.get("max_per_director", 1)
            if "overfetch" in dv:
                flat["guard_overfetch"] = dv["overfetch"]
        if "anchors" in config_dict:
            an = config_dict["anchors"]
            if "enabled" in an:
                flat["anchor_pool_enabled"] = an["enabled"]
            if "min_knownness" in an:
                flat["anchor_min_knownness"] = an["min_knownness"]
            if "max_per_cluster" in an:
                flat["anchor_max_per_cluster"] = an["max_per_cluster"]
            if "max_per_decade" in an:
                flat["anchor_max_per_decade"] = an["max_per_decade"]
            if "language" in an:
                flat["anchor_language"] = an["language"]
            if "focused_from" in an:
                flat["funnel_focused_from"] = an["focused_from"]
            if "precise_from" in an:
                flat["funnel_precise_from"] = an["precise_from"]
        if "explanation" in config_dict:
            ep = config_dict["explanation"]
            if "top_genres" in ep:
                flat["explanation_top_genres"] = ep["top_genres"]
            if "top_actors" in ep:
                flat["explanation_top_actors"] = ep["top_actors"]
            if "top_directors" in ep:
                flat["explanation_top_directors"] = ep["top_directors"]
        # Flat keys at the top level win over sections
        flat.update({k: v for k, v in config_dict.items() if not isinstance(v, dict)})
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = TasteConfig()


def resolve_config(config: Optional["TasteConfig"]) -> "TasteConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG


def load_config(path: Union[str, Path]) -> "TasteConfig":
    """Load a TasteConfig from a JSON file (nested sections or flat keys)."""
    with open(path) as f:
        return TasteConfig.from_dict(json.load(f))
