"""Shared fixtures: a small mixed catalogue and a no-exploration config."""

from typing import Dict, List

import pytest

from taste_engine.models import CatalogueItem, TasteConfig, ensure_items


def _item(id_, title, year, genres, **extra) -> Dict:
    return {"id": id_, "title": title, "year": year, "genres": genres, **extra}


CATALOGUE: List[Dict] = [
    _item("a1", "Heat Run", 2012, ["Action"], director="Dir A", topActors=["Actor One"]),
    _item("a2", "Heat Run 2", 2014, ["Action"], director="Dir B", topActors=["Actor One"]),
    _item("a3", "Fast Lane", 2008, ["Action", "Thriller"], director="Dir C"),
    _item("d1", "Quiet Rooms", 2011, ["Drama"], director="Dir D", topActors=["Actor Two"]),
    _item("d2", "Long Winter", 2009, ["Drama"], director="Dir E"),
    _item("d3", "The Letter", 2013, ["Drama", "Romance"], director="Dir F"),
    _item("c1", "Laugh Track", 2016, ["Comedy"], director="Dir G"),
    _item("c2", "Family Trip", 2021, ["Comedy", "Family"], director="Dir H"),
    _item("s1", "Orbit", 2015, ["Science Fiction"], director="Dir I"),
    _item("s2", "Star Gate Nine", 2022, ["Sci-Fi", "Adventure"], director="Dir J"),
    _item("h1", "Night Door", 2005, ["Horror", "Thriller"], director="Dir K"),
    _item("m1", "Cold Case", 1998, ["Crime", "Mystery"], director="Dir L"),
    _item("f1", "Dragon Tale", 2003, ["Fantasy", "Animation"], director="Dir M"),
    _item("doc1", "Deep Sea", 2019, ["Documentary"], director="Dir N"),
    _item("doc2", "High Peaks", 2023, ["Documentary"], director="Dir O"),
    _item("r1", "Summer Letters", 1995, ["Romance", "Drama"], director="Dir P"),
    _item("w1", "Last Frontier", 1988, ["Western"], director="Dir Q"),
    _item("t1", "Sitcom Nights", 2018, ["Comedy"], isSeries=True, director="Dir R"),
]


@pytest.fixture
def catalogue() -> List[Dict]:
    return [dict(d) for d in CATALOGUE]


@pytest.fixture
def items(catalogue) -> List[CatalogueItem]:
    return ensure_items(catalogue)


@pytest.fixture
def items_by_id(items) -> Dict[str, CatalogueItem]:
    return {i.id: i for i in items}


@pytest.fixture
def no_explore_config() -> TasteConfig:
    """Defaults, but exploration disabled so serving order is score order."""
    return TasteConfig(exploration_rate_min=0.0, exploration_rate_default=0.0)
