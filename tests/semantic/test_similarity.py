from __future__ import annotations

import math

import numpy as np
import pytest

from folio.semantic.similarity import cosine_similarity, finite_or_zero, mean_vector


def test_cosine_similarity_of_parallel_and_orthogonal_vectors() -> None:
    assert cosine_similarity([1.0, 2.0, 3.0], [2.0, 4.0, 6.0]) == pytest.approx(1.0)
    assert cosine_similarity([1.0, 0.0], [0.0, 5.0]) == pytest.approx(0.0)
    assert cosine_similarity([1.0, 0.0], [-3.0, 0.0]) == pytest.approx(-1.0)


def test_cosine_similarity_is_symmetric() -> None:
    a = [0.3, -1.2, 4.5, 0.0]
    b = [1.1, 0.4, -0.2, 2.0]

    assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))


def test_cosine_similarity_returns_zero_for_missing_or_mismatched_vectors() -> None:
    assert cosine_similarity(None, [1.0, 2.0]) == 0.0
    assert cosine_similarity([1.0, 2.0], None) == 0.0
    assert cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0]) == 0.0


def test_zero_norm_is_non_finite_and_callers_map_it_to_zero() -> None:
    value = cosine_similarity([0.0, 0.0], [1.0, 1.0])

    assert not math.isfinite(value)
    assert finite_or_zero(value) == 0.0
    assert finite_or_zero(0.42) == 0.42


def test_mean_vector_averages_matching_dimensions_only() -> None:
    mean = mean_vector([np.array([1.0, 0.0]), np.array([0.0, 1.0]), np.array([9.0, 9.0, 9.0])])

    assert mean is not None
    assert mean.tolist() == pytest.approx([0.5, 0.5])
    assert mean_vector([]) is None
