import math

import pytest

from notesynth.dedup.similarity import cosine_similarity, is_duplicate


def test_identical_vectors():
    assert cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == pytest.approx(1.0)


def test_scaled_vectors_are_identical():
    assert cosine_similarity([1.0, 2.0], [2.0, 4.0]) == pytest.approx(1.0)


def test_orthogonal_vectors():
    assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)


def test_opposite_vectors():
    assert cosine_similarity([1.0, 1.0], [-1.0, -1.0]) == pytest.approx(-1.0)


def test_zero_vector_is_nan():
    assert math.isnan(cosine_similarity([0.0, 0.0], [1.0, 2.0]))
    assert math.isnan(cosine_similarity([1.0, 2.0], [0.0, 0.0]))


def test_dimension_mismatch():
    with pytest.raises(ValueError):
        cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0])


def test_is_duplicate_is_strict():
    assert is_duplicate(0.99)
    assert not is_duplicate(0.95)
    assert not is_duplicate(0.5)
    assert is_duplicate(0.6, threshold=0.5)


def test_nan_is_never_duplicate():
    assert not is_duplicate(math.nan)
