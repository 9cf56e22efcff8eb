"""
CatalogueItem model — typed representation of a movie or series for the engine.

Used by feature building, pair selection, scoring, and diversity stages instead of raw dicts.
Built from catalogue/API dicts via CatalogueItem.model_validate(d) or ensure_items().
"""

import re
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# TMDb genre ids, so catalogues that carry numeric genres map onto the same names.
TMDB_GENRE_NAMES: Dict[int, str] = {
    28: "Action",
    12: "Adventure",
    16: "Animation",
    35: "Comedy",
    80: "Crime",
    99: "Documentary",
    18: "Drama",
    10751: "Family",
    14: "Fantasy",
    36: "History",
    27: "Horror",
    10402: "Music",
    9648: "Mystery",
    10749: "Romance",
    878: "Science Fiction",
    10770: "TV Movie",
    53: "Thriller",
    10752: "War",
    37: "Western",
}

_GENRE_SEPARATORS = re.compile(r"\s*[,|/]\s*")


def coerce_id(v: Any) -> Any:
    """Numeric ids become strings; 123.0 is read as "123". Anything else is left to validation."""
    if isinstance(v, bool):
        return v
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v) if isinstance(v, int) else v


class CatalogueItem(BaseModel):
    """
    Catalogue entry used across the engine stages.

    All fields except id are optional to support partial data from scrapers/APIs.
    Extra fields (poster, trailer URL, ...) are kept as-is for the caller.
    """

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    id: str
    title: Optional[str] = ""
    year: Optional[int] = None
    genres: List[str] = Field(default_factory=list)
    popularity: Optional[float] = None
    vote_average: Optional[float] = Field(default=None, alias="voteAverage")
    vote_count: Optional[int] = Field(default=None, alias="voteCount")
    actors: List[str] = Field(default_factory=list, alias="topActors")
    director: Optional[str] = None
    is_series: bool = Field(default=False, alias="isSeries")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        return coerce_id(v)

    @field_validator("year", mode="before")
    @classmethod
    def _coerce_year(cls, v: Any) -> Optional[int]:
        """Accept ints, "1999", or a release date like "1999-03-31"; anything else is None."""
        if v is None or v == "":
            return None
        if isinstance(v, int):
            return v
        try:
            return int(str(v)[:4])
        except ValueError:
            return None

    @field_validator("genres", mode="before")
    @classmethod
    def _normalize_genres(cls, v: Any) -> List[str]:
        """Map TMDb genre ids to names, strip blanks, drop unknown ids.

        A single string such as "Action, Drama" or "Action|Drama" is split first.
        """
        if not v:
            return []
        if isinstance(v, str):
            v = _GENRE_SEPARATORS.split(v)
        names = []
        for g in v:
            if isinstance(g, int):
                name = TMDB_GENRE_NAMES.get(g)
                if name:
                    names.append(name)
            elif isinstance(g, dict):
                name = g.get("name")
                if name:
                    names.append(str(name).strip())
            elif g is not None and str(g).strip():
                names.append(str(g).strip())
        return names

    @field_validator("actors", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return v or []

    @property
    def primary_genre(self) -> Optional[str]:
        """Primary (first) genre for this item."""
        return self.genres[0] if self.genres else None

    @property
    def era_bucket(self) -> Optional[str]:
        """Decade label such as "1990s"; None when the year is unknown."""
        if self.year is None:
            return None
        return f"{(self.year // 10) * 10}s"

    def has_genre(self, name: str) -> bool:
        target = name.lower()
        return any(g.lower() == target for g in self.genres)


def ensure_items(items: List[Union[Dict[str, Any], "CatalogueItem"]]) -> List["CatalogueItem"]:
    """Convert list of dicts or CatalogueItems to list of CatalogueItem models for the engine."""
    return [
        CatalogueItem.model_validate(i) if isinstance(i, dict) else i
        for i in items
    ]


def index_by_id(items: List["CatalogueItem"]) -> Dict[str, "CatalogueItem"]:
    """Map id -> item. On duplicate ids the first occurrence wins."""
    by_id: Dict[str, CatalogueItem] = {}
    for item in items:
        by_id.setdefault(item.id, item)
    return by_id
