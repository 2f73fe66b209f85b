"""Tests for cosine scoring and ranking."""

import math

import pytest

from meow.core.ranker import cosine_similarity, rank, top_candidates


def test_cosine_is_symmetric() -> None:
    a, b = [0.3, -1.2, 2.0], [1.0, 0.5, -0.25]
    assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))


def test_self_similarity_is_maximal() -> None:
    a = [0.6, 0.8]
    b = [0.8, 0.6]  # same norm, different direction
    assert cosine_similarity(a, a) == pytest.approx(1.0)
    assert cosine_similarity(a, a) >= cosine_similarity(a, b)


def test_magnitude_does_not_matter() -> None:
    assert cosine_similarity([1.0, 2.0], [10.0, 20.0]) == pytest.approx(1.0)


def test_zero_vector_scores_zero() -> None:
    assert cosine_similarity([0.0, 0.0], [1.0, 2.0]) == 0.0
    assert cosine_similarity([1.0, 2.0], [0.0, 0.0]) == 0.0


def test_dimension_mismatch_scores_zero() -> None:
    assert cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0]) == 0.0


def test_rank_sorts_descending() -> None:
    ranked = rank([1.0, 0.0], [("low", [0.0, 1.0]), ("high", [1.0, 0.1])])
    assert [p for p, _ in ranked] == ["high", "low"]


def test_rank_never_contains_nan() -> None:
    ranked = rank([1.0, 0.0], [("zero", [0.0, 0.0]), ("ok", [1.0, 0.0])])
    assert ranked == [("ok", pytest.approx(1.0)), ("zero", 0.0)]
    assert not any(math.isnan(s) for _, s in ranked)


def test_rank_is_stable_for_equal_scores() -> None:
    v = [0.5, 0.5]
    ranked = rank([1.0, 0.0], [("p1", v), ("p2", v), ("p3", v)])
    assert [p for p, _ in ranked] == ["p1", "p2", "p3"]


def test_top_candidates_builds_one_based_entries() -> None:
    ranked = [(f"/home/u/Downloads/File{i}.PDF", 1.0 - i / 100) for i in range(15)]
    candidates = top_candidates(ranked)
    assert len(candidates) == 10
    first = candidates[0]
    assert first.idx == 1
    assert first.file_name == "File0.PDF"
    assert first.ext == "pdf"
    assert first.folder == "Downloads"
    assert candidates[-1].idx == 10


def test_top_candidates_empty() -> None:
    assert top_candidates([]) == []
