"""Data models for the taste engine."""

from .anchor import Anchor, FunnelPhase
from .config import DEFAULT_CONFIG, TasteConfig, load_config, resolve_config
from .feature_vector import (
    FEATURE_DIMENSIONS,
    FEATURE_NAMES,
    FEATURE_SCHEMA_VERSION,
    FeatureVector,
)
from .item import CatalogueItem, coerce_id, ensure_items, index_by_id
from .scoring import CountEntry, EraEntry, Explanation, Recommendations, ScoredItem
from .session import ComparisonPair, FunnelProgress, SessionPhase, SessionSnapshot
from .state import PreferenceState, pair_key
from .vote import Vote

__all__ = [
    "DEFAULT_CONFIG",
    "Anchor",
    "FEATURE_DIMENSIONS",
    "FEATURE_NAMES",
    "FEATURE_SCHEMA_VERSION",
    "CatalogueItem",
    "ComparisonPair",
    "CountEntry",
    "EraEntry",
    "Explanation",
    "FeatureVector",
    "FunnelPhase",
    "FunnelProgress",
    "PreferenceState",
    "Recommendations",
    "ScoredItem",
    "SessionPhase",
    "SessionSnapshot",
    "TasteConfig",
    "Vote",
    "coerce_id",
    "ensure_items",
    "index_by_id",
    "load_config",
    "pair_key",
    "resolve_config",
]
