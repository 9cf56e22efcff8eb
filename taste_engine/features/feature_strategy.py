"""
Feature Strategy for the 12-slot genre-cluster scheme

This module defines HOW a catalogue item becomes a feature vector.
Changes to this module require invalidating cached vectors (bump FEATURE_SCHEMA_VERSION).

The feature layout:
    [comedy, drama, action, thriller, scifi, fantasy_animation, documentary,
     light, dark, fast, slow, recent]

Slots 0-6 are genre-cluster flags, 7-10 are composite tone/pace scores (weighted sums
of flags, clamped to [0, 1]), and slot 11 flags releases from 2020 onwards.

This is used for BOTH:
- Preference learning (vote differences, user weight vector)
- Similarity (pair distance, MMR diversity penalty)
"""

from typing import Dict, FrozenSet, Set

from ..models.feature_vector import (
    FEATURE_DIMENSIONS,
    FEATURE_NAMES,
    FEATURE_SCHEMA_VERSION,
    FeatureVector,
)
from ..models.item import CatalogueItem

RECENT_YEAR_CUTOFF = 2020

# Genre names (lower-case) per cluster flag. Aliases cover scraped IMDb labels.
GENRE_CLUSTERS: Dict[str, FrozenSet[str]] = {
    "comedy": frozenset({"comedy"}),
    "drama": frozenset({"drama"}),
    "action": frozenset({"action"}),
    "thriller": frozenset({"thriller", "mystery", "crime"}),
    "scifi": frozenset({"science fiction", "sci-fi", "scifi", "sci fi"}),
    "fantasy_animation": frozenset({"fantasy", "animation", "adventure"}),
    "documentary": frozenset({"documentary"}),
}

# Genres that only feed composites
_FAMILY = frozenset({"family"})
_ROMANCE = frozenset({"romance"})
_HORROR = frozenset({"horror"})
_CRIME = frozenset({"crime"})

# Composite weights keyed by flag name
LIGHT_WEIGHTS = {"comedy": 0.8, "fantasy_animation": 0.4, "family": 0.6, "romance": 0.4}
DARK_WEIGHTS = {"thriller": 0.6, "drama": 0.4, "horror": 0.8, "crime": 0.5}
FAST_WEIGHTS = {"action": 0.8, "thriller": 0.6, "scifi": 0.4, "fantasy_animation": 0.3}
SLOW_WEIGHTS = {"drama": 0.6, "documentary": 0.4}


def _has_any(genres: Set[str], names: FrozenSet[str]) -> float:
    return 1.0 if genres & names else 0.0


def _composite(flags: Dict[str, float], weights: Dict[str, float]) -> float:
    return min(1.0, sum(flags.get(name, 0.0) * w for name, w in weights.items()))


def phi(item: CatalogueItem) -> FeatureVector:
    """
    Build the feature vector for a catalogue item.

    Total and deterministic: missing genres or year give zeros, never an error.

    Args:
        item: CatalogueItem (genres matched case-insensitively)

    Returns:
        FeatureVector of length FEATURE_DIMENSIONS
    """
    genres = {g.lower() for g in item.genres}

    flags = {name: _has_any(genres, members) for name, members in GENRE_CLUSTERS.items()}
    extra = {
        "family": _has_any(genres, _FAMILY),
        "romance": _has_any(genres, _ROMANCE),
        "horror": _has_any(genres, _HORROR),
        "crime": _has_any(genres, _CRIME),
    }
    signals = {**flags, **extra}

    values = [
        flags["comedy"],
        flags["drama"],
        flags["action"],
        flags["thriller"],
        flags["scifi"],
        flags["fantasy_animation"],
        flags["documentary"],
        _composite(signals, LIGHT_WEIGHTS),
        _composite(signals, DARK_WEIGHTS),
        _composite(signals, FAST_WEIGHTS),
        _composite(signals, SLOW_WEIGHTS),
        1.0 if item.year is not None and item.year >= RECENT_YEAR_CUTOFF else 0.0,
    ]
    return FeatureVector(values=tuple(values), schema_version=FEATURE_SCHEMA_VERSION)


__all__ = [
    "FEATURE_DIMENSIONS",
    "FEATURE_NAMES",
    "FEATURE_SCHEMA_VERSION",
    "GENRE_CLUSTERS",
    "RECENT_YEAR_CUTOFF",
    "phi",
]
