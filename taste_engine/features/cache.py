"""
Feature cache — memoised phi() per item fingerprint.

Vectors are keyed by (schema version, id, genres, year), so an item whose genres or year
change gets a fresh vector instead of a stale one.
"""

from typing import Dict, Iterable, Tuple

import numpy as np

from ..models.feature_vector import FEATURE_SCHEMA_VERSION, FeatureVector
from ..models.item import CatalogueItem
from .feature_strategy import phi

FingerPrint = Tuple[str, str, Tuple[str, ...], object]


def fingerprint(item: CatalogueItem) -> FingerPrint:
    return (FEATURE_SCHEMA_VERSION, item.id, tuple(item.genres), item.year)


class FeatureCache:
    """Per-session cache of feature vectors. Not shared between sessions."""

    def __init__(self):
        self._vectors: Dict[FingerPrint, FeatureVector] = {}

    def vector(self, item: CatalogueItem) -> FeatureVector:
        key = fingerprint(item)
        vec = self._vectors.get(key)
        if vec is None:
            vec = phi(item)
            self._vectors[key] = vec
        return vec

    def array(self, item: CatalogueItem) -> np.ndarray:
        """Feature vector of item as a numpy array."""
        return self.vector(item).as_array()

    def warm(self, items: Iterable[CatalogueItem]) -> None:
        for item in items:
            self.vector(item)

    def clear(self) -> None:
        self._vectors.clear()

    def __len__(self) -> int:
        return len(self._vectors)


def resolve_features(features: "FeatureCache" = None) -> "FeatureCache":
    """Return features or a new empty FeatureCache when none is provided."""
    return features if features is not None else FeatureCache()
