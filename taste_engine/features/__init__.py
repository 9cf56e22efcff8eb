"""Feature strategy: phi, the feature cache, and schema constants."""

from .cache import FeatureCache, resolve_features
from .feature_strategy import (
    FEATURE_DIMENSIONS,
    FEATURE_NAMES,
    FEATURE_SCHEMA_VERSION,
    GENRE_CLUSTERS,
    RECENT_YEAR_CUTOFF,
    phi,
)

__all__ = [
    "FEATURE_DIMENSIONS",
    "FEATURE_NAMES",
    "FEATURE_SCHEMA_VERSION",
    "GENRE_CLUSTERS",
    "RECENT_YEAR_CUTOFF",
    "FeatureCache",
    "phi",
    "resolve_features",
]
