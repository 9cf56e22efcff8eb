"""
Scoring models — ScoredItem and the recommendation output records.

Contains:
- ScoredItem: a catalogue item with its score components
- CountEntry / EraEntry / Explanation: user-facing rationale built from winning votes
- Recommendations: the served list plus its explanation
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .item import CatalogueItem


class ScoredItem(BaseModel):
    """A catalogue item with all its scoring components."""

    item: CatalogueItem
    preference_score: float
    novelty_bonus: float
    era_bonus: float
    final_score: float


class CountEntry(BaseModel):
    name: str
    count: int


class EraEntry(BaseModel):
    bucket: str
    count: int


class Explanation(BaseModel):
    """What the user kept picking: top genres, actors, directors, and era among winners."""

    top_genres: List[CountEntry] = Field(default_factory=list)
    top_actors: List[CountEntry] = Field(default_factory=list)
    top_directors: List[CountEntry] = Field(default_factory=list)
    top_era: Optional[EraEntry] = None


class Recommendations(BaseModel):
    """Served list in display order, with the rationale behind it."""

    items: List[ScoredItem]
    explanation: Explanation

    @property
    def catalogue_items(self) -> List[CatalogueItem]:
        return [s.item for s in self.items]

    @property
    def ids(self) -> List[str]:
        return [s.item.id for s in self.items]
