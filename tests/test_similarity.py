import pytest

from dupcheck.config import ScorerConfig
from dupcheck.similarity import (
    SimilarityScorer,
    ValueKind,
    jaccard,
    number_similarity,
    string_similarity,
    value_kind,
)


@pytest.fixture
def scorer() -> SimilarityScorer:
    return SimilarityScorer()


@pytest.mark.parametrize(
    ("value", "kind"),
    [
        ("a", ValueKind.STRING),
        (1, ValueKind.NUMBER),
        (1.5, ValueKind.NUMBER),
        (True, ValueKind.BOOL),
        (None, ValueKind.NULL),
        ([1], ValueKind.ARRAY),
        ({"a": 1}, ValueKind.OBJECT),
    ],
)
def test_value_kind(value: object, kind: ValueKind) -> None:
    assert value_kind(value) is kind


def test_string_similarity() -> None:
    assert string_similarity("same", "same") == 1.0
    assert string_similarity("", "") == 1.0
    assert string_similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)
    assert string_similarity("Hello World", "Hello World!") == pytest.approx(11 / 12)


def test_number_similarity() -> None:
    assert number_similarity(100, 110) == pytest.approx(0.905, abs=1e-3)
    assert number_similarity(7, 7) == 1.0
    assert number_similarity(0.5, 0.7) == pytest.approx(0.8)
    assert number_similarity(5, -5) == 0.0
    assert number_similarity(float("inf"), 1.0) == 0.0


def test_similarity_is_symmetric_for_scalars(scorer: SimilarityScorer) -> None:
    assert scorer.similarity(100, 110) == pytest.approx(scorer.similarity(110, 100))
    assert scorer.similarity("abc", "abd") == pytest.approx(
        scorer.similarity("abd", "abc")
    )


def test_type_mismatch_scores_zero(scorer: SimilarityScorer) -> None:
    assert scorer.similarity("a", 1) == 0.0
    assert scorer.similarity(True, 1) == 0.0
    assert scorer.similarity(None, 0) == 0.0
    assert scorer.similarity([1], {"a": 1}) == 0.0


def test_numeric_string_compares_as_number(scorer: SimilarityScorer) -> None:
    assert scorer.similarity("100", 110) == pytest.approx(0.905, abs=1e-3)
    assert scorer.similarity(110, "100") == pytest.approx(0.905, abs=1e-3)
    assert scorer.compatible("100", 110)
    assert not scorer.compatible("abc", 110)


def test_bool_and_null_compare_by_equality(scorer: SimilarityScorer) -> None:
    assert scorer.similarity(True, True) == 1.0
    assert scorer.similarity(True, False) == 0.0
    assert scorer.similarity(None, None) == 1.0


def test_disabled_comparisons_score_zero() -> None:
    scorer = SimilarityScorer(
        ScorerConfig(enable_string_comparison=False, enable_number_comparison=False)
    )
    assert scorer.similarity("a", "a") == 0.0
    assert scorer.similarity(1, 1) == 0.0
    assert scorer.similarity("1", 1) == 0.0
    assert not scorer.compatible("1", 1)


def test_array_similarity_is_asymmetric(scorer: SimilarityScorer) -> None:
    assert scorer.similarity([1, 1], [1, 2]) == pytest.approx(0.6333, abs=1e-4)
    assert scorer.similarity([1, 2], [1, 1]) == pytest.approx(0.5333, abs=1e-4)


def test_array_sorted_equality_wins(scorer: SimilarityScorer) -> None:
    assert scorer.similarity([1, 2, 3], [3, 2, 1]) == 1.0
    assert scorer.similarity([{"a": 1}, "x"], ["x", {"a": 1}]) == 1.0


def test_array_empty_cases(scorer: SimilarityScorer) -> None:
    assert scorer.similarity([], []) == 1.0
    assert scorer.similarity([], [1]) == 0.0


def test_object_similarity(scorer: SimilarityScorer) -> None:
    assert scorer.similarity({"a": 1, "b": 2}, {"a": 1, "c": 3}) == pytest.approx(0.8)
    assert scorer.similarity({}, {}) == 1.0
    assert scorer.similarity({"a": 1}, {"b": 1}) == pytest.approx(0.0)


def test_object_depth_limit() -> None:
    scorer = SimilarityScorer(ScorerConfig(max_depth=0))
    a = {"a": {"b": 1}}
    b = {"a": {"b": 1}}
    # Nested values sit past the limit and contribute nothing.
    assert scorer.object_similarity(a, b) == pytest.approx(0.4)
    assert SimilarityScorer().object_similarity(a, b) == pytest.approx(1.0)


def test_depth_past_limit_is_zero(scorer: SimilarityScorer) -> None:
    assert scorer.object_similarity({"a": 1}, {"a": 1}, depth=6) == 0.0
    assert scorer.array_similarity([1], [1], depth=6) == 0.0


def test_jaccard() -> None:
    assert jaccard(set(), set()) == 1.0
    assert jaccard({1, 2}, {2, 3}) == pytest.approx(1 / 3)


def test_object_similarity_with_null_operand(scorer: SimilarityScorer) -> None:
    assert scorer.object_similarity(None, {"a": 1}) == 0.0
    assert scorer.object_similarity({"a": 1}, None) == 0.0


def test_integers_past_float_range(scorer: SimilarityScorer) -> None:
    huge = 10**400
    assert scorer.similarity(huge, 5) == 0.0
    assert scorer.similarity(5, huge) == 0.0
    assert scorer.similarity(huge, huge) == 1.0
    assert scorer.similarity("100", huge) == 0.0
    assert scorer.similarity([huge, 1], [5, 1]) == pytest.approx(0.5 * 0.5 + 0.3 * 0.5)
