"""
Feature Tests

phi() on the 12-slot genre-cluster scheme, CatalogueItem parsing of scraped/TMDb
fields, and the per-session feature cache.

Feature layout:
---------------
    [comedy, drama, action, thriller, scifi, fantasy_animation, documentary,
     light, dark, fast, slow, recent]

Run:
----
    pytest tests/test_features.py -v
"""

import pytest

from taste_engine.features import FEATURE_DIMENSIONS, FeatureCache, phi
from taste_engine.models import CatalogueItem, Vote


def _named(item_dict):
    return phi(CatalogueItem.model_validate(item_dict)).named()


class TestPhi:
    def test_length_matches_scheme(self, items):
        for item in items:
            assert len(phi(item)) == FEATURE_DIMENSIONS

    def test_pure_action(self):
        v = _named({"id": "x", "genres": ["Action"], "year": 2010})
        assert v["action"] == 1.0
        assert v["fast"] == pytest.approx(0.8)
        assert v["drama"] == 0.0
        assert v["recent"] == 0.0

    def test_pure_drama(self):
        v = _named({"id": "x", "genres": ["Drama"], "year": 2010})
        assert v["drama"] == 1.0
        assert v["dark"] == pytest.approx(0.4)
        assert v["slow"] == pytest.approx(0.6)

    def test_thriller_cluster_aliases(self):
        for genre in ("Thriller", "Mystery", "Crime"):
            assert _named({"id": "x", "genres": [genre]})["thriller"] == 1.0

    def test_scifi_aliases(self):
        for genre in ("Science Fiction", "Sci-Fi", "sci-fi"):
            assert _named({"id": "x", "genres": [genre]})["scifi"] == 1.0

    def test_composites_clamped_to_one(self):
        v = _named({"id": "x", "genres": ["Thriller", "Horror", "Crime", "Drama"]})
        assert v["dark"] == 1.0

    def test_recent_flag_from_2020(self):
        assert _named({"id": "x", "year": 2020})["recent"] == 1.0
        assert _named({"id": "x", "year": 2019})["recent"] == 0.0

    def test_missing_fields_give_zero_vector(self):
        vec = phi(CatalogueItem(id="bare"))
        assert vec.as_list() == [0.0] * FEATURE_DIMENSIONS

    def test_deterministic(self, items):
        for item in items:
            assert phi(item) == phi(item)


class TestCatalogueItemParsing:
    def test_tmdb_genre_ids_mapped(self):
        item = CatalogueItem.model_validate({"id": 42, "genres": [28, 18, 999999]})
        assert item.id == "42"
        assert item.genres == ["Action", "Drama"]

    def test_release_date_year(self):
        item = CatalogueItem.model_validate({"id": "x", "year": "1999-03-31"})
        assert item.year == 1999
        assert item.era_bucket == "1990s"

    def test_unparseable_year_is_none(self):
        assert CatalogueItem.model_validate({"id": "x", "year": "unknown"}).year is None

    def test_camel_case_aliases(self):
        item = CatalogueItem.model_validate(
            {"id": "x", "topActors": None, "isSeries": True, "voteAverage": 7.5}
        )
        assert item.actors == []
        assert item.is_series is True
        assert item.vote_average == 7.5

    def test_genre_string_is_split(self):
        item = CatalogueItem.model_validate({"id": "x", "genres": "Action, Drama|Sci-Fi"})
        assert item.genres == ["Action", "Drama", "Sci-Fi"]

    def test_single_genre_string(self):
        item = CatalogueItem.model_validate({"id": "x", "genres": "Action"})
        assert item.genres == ["Action"]
        assert phi(item).named()["action"] == 1.0

    def test_integral_float_id(self):
        assert CatalogueItem.model_validate({"id": 123.0}).id == "123"

    def test_float_vote_ids(self):
        vote = Vote.model_validate({"winnerId": 7.0, "loserId": 8})
        assert (vote.winner_id, vote.loser_id) == ("7", "8")

    def test_extra_fields_kept(self):
        item = CatalogueItem.model_validate({"id": "x", "trailerUrl": "https://example.com/t"})
        assert item.model_extra["trailerUrl"] == "https://example.com/t"


class TestFeatureCache:
    def test_memoises_vectors(self, items):
        cache = FeatureCache()
        cache.warm(items)
        assert len(cache) == len(items)
        assert cache.vector(items[0]) is cache.vector(items[0])

    def test_changed_genres_get_fresh_vector(self):
        cache = FeatureCache()
        item = CatalogueItem(id="x", genres=["Drama"])
        before = cache.vector(item)
        changed = item.model_copy(update={"genres": ["Action"]})
        after = cache.vector(changed)
        assert before != after
        assert after.named()["action"] == 1.0

    def test_array_is_a_copy(self, items):
        cache = FeatureCache()
        arr = cache.array(items[0])
        arr[:] = 99.0
        assert cache.array(items[0])[0] != 99.0
