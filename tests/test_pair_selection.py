"""
Pair Selection Tests

Active-learning pair choice: exclusions honoured, never an item against itself,
preference for uncertain and distant pairs, and no repeat pairs while unseen ones exist.

Run:
----
    pytest tests/test_pair_selection.py -v
"""

import numpy as np
import pytest

from taste_engine.errors import InsufficientCandidatesError
from taste_engine.models import CatalogueItem, TasteConfig
from taste_engine.models.state import pair_key
from taste_engine.stages.pair_selection import select_pair

ZERO_W = [0.0] * 12


class TestPairValidity:
    @pytest.mark.parametrize("seed", range(10))
    def test_excluded_ids_never_returned(self, items, seed):
        excluded = {"a1", "d1", "c1", "s1", "doc1"}
        pair = select_pair(items, ZERO_W, excluded, rng=np.random.default_rng(seed))
        assert pair.left.id not in excluded
        assert pair.right.id not in excluded

    @pytest.mark.parametrize("seed", range(10))
    def test_never_same_item(self, items, seed):
        pair = select_pair(items, ZERO_W, rng=np.random.default_rng(seed))
        assert pair.left.id != pair.right.id

    def test_duplicate_ids_do_not_form_a_pair(self):
        dupes = [CatalogueItem(id="x", genres=["Action"]), CatalogueItem(id="x", genres=["Drama"])]
        with pytest.raises(InsufficientCandidatesError):
            select_pair(dupes, ZERO_W)


class TestInsufficientCandidates:
    def test_empty_catalogue(self):
        with pytest.raises(InsufficientCandidatesError) as exc:
            select_pair([], ZERO_W)
        assert exc.value.eligible == 0

    def test_everything_but_one_excluded(self, items):
        keep = items[0].id
        excluded = {i.id for i in items if i.id != keep}
        with pytest.raises(InsufficientCandidatesError) as exc:
            select_pair(items, ZERO_W, excluded)
        assert exc.value.eligible == 1


class TestInformativeness:
    def test_zero_weights_prefer_the_most_distant_pair(self):
        pool = [
            CatalogueItem(id="act1", genres=["Action"]),
            CatalogueItem(id="act2", genres=["Action"]),
            CatalogueItem(id="doc", genres=["Documentary"]),
        ]
        pair = select_pair(pool, ZERO_W, rng=np.random.default_rng(0))
        assert "doc" in {pair.left.id, pair.right.id}

    def test_confident_pairs_lose_to_uncertain_ones(self):
        # w strongly separates action from drama, but says nothing about comedy vs scifi
        w = [0.0, -0.7, 0.7] + [0.0] * 9
        pool = [
            CatalogueItem(id="act", genres=["Action"]),
            CatalogueItem(id="dra", genres=["Drama"]),
            CatalogueItem(id="com", genres=["Comedy"]),
            CatalogueItem(id="sci", genres=["Sci-Fi"]),
        ]
        pair = select_pair(pool, w, rng=np.random.default_rng(0))
        assert {pair.left.id, pair.right.id} != {"act", "dra"}

    def test_informativeness_within_bounds(self, items):
        pair = select_pair(items, ZERO_W, rng=np.random.default_rng(3))
        assert 0.0 <= pair.informativeness <= 1.0


class TestRepeatAvoidance:
    def test_seen_pair_is_passed_over(self):
        pool = [
            CatalogueItem(id="act1", genres=["Action"]),
            CatalogueItem(id="act2", genres=["Action"]),
            CatalogueItem(id="doc", genres=["Documentary"]),
        ]
        shown = {pair_key("act1", "doc"), pair_key("act2", "doc")}
        pair = select_pair(pool, ZERO_W, rng=np.random.default_rng(0), pairs_shown=shown)
        assert {pair.left.id, pair.right.id} == {"act1", "act2"}

    def test_all_pairs_seen_still_returns_a_pair(self):
        pool = [CatalogueItem(id="a", genres=["Action"]), CatalogueItem(id="b", genres=["Drama"])]
        pair = select_pair(pool, ZERO_W, pairs_shown={pair_key("a", "b")})
        assert {pair.left.id, pair.right.id} == {"a", "b"}


class TestBoundedSearch:
    def test_small_sample_still_valid(self, items):
        config = TasteConfig(pair_sample_size=2, pair_partner_window=1)
        pair = select_pair(items, ZERO_W, config=config, rng=np.random.default_rng(5))
        assert pair.left.id != pair.right.id

    def test_same_seed_same_pair(self, items):
        p1 = select_pair(items, ZERO_W, rng=np.random.default_rng(11))
        p2 = select_pair(items, ZERO_W, rng=np.random.default_rng(11))
        assert (p1.left.id, p1.right.id) == (p2.left.id, p2.right.id)


class TestDictCatalogue:
    def test_accepts_plain_dicts(self, catalogue):
        pair = select_pair(catalogue, ZERO_W, {"a1"}, rng=np.random.default_rng(4))
        assert isinstance(pair.left, CatalogueItem)
        assert pair.left.id != pair.right.id
        assert "a1" not in {pair.left.id, pair.right.id}

    def test_accepts_mixed_input(self, catalogue):
        mixed = [CatalogueItem.model_validate(catalogue[0])] + catalogue[1:3]
        pair = select_pair(mixed, ZERO_W, rng=np.random.default_rng(5))
        assert {pair.left.id, pair.right.id} <= {"a1", "a2", "a3"}
