"""
FeatureVector model — fixed-length numeric encoding of a catalogue item.

Wraps the raw floats so vectors from different schemes cannot be mixed by accident:
every vector carries the schema version it was built with.
"""

from typing import List, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict

# Metadata for cache validation
# IMPORTANT: Bump this version when the feature layout changes!
FEATURE_SCHEMA_VERSION = "12d-genre-cluster-1"

FEATURE_NAMES: Tuple[str, ...] = (
    "comedy",
    "drama",
    "action",
    "thriller",
    "scifi",
    "fantasy_animation",
    "documentary",
    "light",
    "dark",
    "fast",
    "slow",
    "recent",
)

FEATURE_DIMENSIONS = len(FEATURE_NAMES)

# Slot of the 2020+ recency flag; read by the era bonus.
RECENT_SLOT = FEATURE_NAMES.index("recent")


class FeatureVector(BaseModel):
    """An immutable feature vector and the schema it was built with."""

    model_config = ConfigDict(frozen=True)

    values: Tuple[float, ...]
    schema_version: str = FEATURE_SCHEMA_VERSION

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, idx: int) -> float:
        return self.values[idx]

    def as_array(self) -> np.ndarray:
        """Values as a float numpy array (a fresh copy)."""
        return np.array(self.values, dtype=float)

    def as_list(self) -> List[float]:
        return list(self.values)

    def named(self) -> dict:
        """Slot name -> value, for debugging and explanations."""
        return dict(zip(FEATURE_NAMES, self.values))

    @property
    def is_recent(self) -> bool:
        return len(self.values) > RECENT_SLOT and self.values[RECENT_SLOT] > 0.5
