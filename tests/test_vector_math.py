"""
Vector Math Tests

Covers the shared helpers: sigmoid stability, zero-padding on length mismatch,
and zero-norm guards for normalize/cosine.

Run:
----
    pytest tests/test_vector_math.py -v
"""

import math

import numpy as np
import pytest

from taste_engine.utils.vector_math import (
    cosine_similarity,
    dot,
    l1_distance,
    l2_norm,
    normalize,
    padded_difference,
    sigmoid,
)


class TestSigmoid:
    def test_midpoint(self):
        assert sigmoid(0.0) == pytest.approx(0.5)

    def test_symmetry(self):
        assert sigmoid(2.0) + sigmoid(-2.0) == pytest.approx(1.0)

    def test_extreme_values_do_not_overflow(self):
        assert sigmoid(1000.0) == pytest.approx(1.0)
        assert sigmoid(-1000.0) == pytest.approx(0.0)
        assert not math.isnan(sigmoid(-1000.0))


class TestPaddingAndDistances:
    def test_dot_pads_shorter_vector(self):
        assert dot([1, 2, 3], [1, 1]) == pytest.approx(3.0)

    def test_difference_pads_with_zeros(self):
        diff = padded_difference([1, 1], [0.5, 0.5, 2])
        np.testing.assert_allclose(diff, [0.5, 0.5, -2.0])

    def test_l1_distance(self):
        assert l1_distance([1, 0, 1], [0, 0, 0]) == pytest.approx(2.0)

    def test_empty_vectors(self):
        assert dot([], []) == 0.0
        assert cosine_similarity([], [1, 2]) == 0.0


class TestNormAndCosine:
    def test_normalize_unit_length(self):
        assert l2_norm(normalize([3, 4])) == pytest.approx(1.0)

    def test_normalize_zero_vector_unchanged(self):
        np.testing.assert_array_equal(normalize([0, 0, 0]), [0, 0, 0])

    def test_cosine_identical(self):
        assert cosine_similarity([1, 2, 0], [2, 4, 0]) == pytest.approx(1.0)

    def test_cosine_orthogonal(self):
        assert cosine_similarity([1, 0], [0, 1]) == pytest.approx(0.0)

    def test_cosine_pads_shorter_vector(self):
        assert cosine_similarity([1, 0], [1, 0, 0]) == pytest.approx(1.0)
        assert cosine_similarity([1], [1, 1]) == pytest.approx(1 / np.sqrt(2))

    def test_cosine_zero_norm_is_zero(self):
        assert cosine_similarity([0, 0], [1, 1]) == 0.0
