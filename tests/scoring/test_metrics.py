"""Tests for the shared sequence metrics."""

import pytest

from sayscore.config import LengthPenaltyPolicy
from sayscore.scoring.metrics import (
    edit_similarity,
    length_penalty,
    length_ratio,
    levenshtein,
    positional_match,
    weighted_sum,
)

POLICY = LengthPenaltyPolicy(low=0.5, high=1.8, low_value=0.4, high_value=0.4)


class TestLevenshtein:
    def test_strings(self):
        assert levenshtein("kitten", "sitting") == 3

    def test_token_lists_compare_whole_tokens(self):
        # "oo" vs "o" is one substitution, not a character edit
        assert levenshtein(["k", "oo", "t"], ["k", "o", "t"]) == 1

    def test_empty(self):
        assert levenshtein("", "abc") == 3
        assert levenshtein([], []) == 0

    def test_symmetric(self):
        assert levenshtein("apple", "aple") == levenshtein("aple", "apple") == 1

    def test_custom_comparator(self):
        case_blind = lambda a, b: a.lower() == b.lower()
        assert levenshtein("ABC", "abc", case_blind) == 0


class TestEditSimilarity:
    def test_identical(self):
        assert edit_similarity("cat", "cat") == 1.0

    def test_both_empty(self):
        assert edit_similarity("", "") == 1.0

    def test_one_substitution(self):
        assert edit_similarity(["k", "a", "t"], ["k", "e", "t"]) == pytest.approx(2 / 3)


class TestLengthPenalty:
    def test_equal_length(self):
        assert length_penalty(1.0, POLICY) == 1.0

    def test_too_short(self):
        assert length_penalty(0.49, POLICY) == 0.4

    def test_too_long(self):
        assert length_penalty(1.81, POLICY) == 0.4

    def test_smooth_region(self):
        assert length_penalty(0.8, POLICY) == pytest.approx(0.9)
        assert length_penalty(1.5, POLICY) == pytest.approx(0.75)

    def test_boundaries_inclusive(self):
        assert length_penalty(0.5, POLICY) == pytest.approx(0.75)
        assert length_penalty(1.8, POLICY) == pytest.approx(0.6)

    def test_ratio(self):
        assert length_ratio("ab", "abcd") == 0.5
        assert length_ratio("", "") == 1.0


class TestPositionalMatch:
    def test_full_match(self):
        assert positional_match(["a", "e"], ["a", "e", "i"]) == 1.0

    def test_shifted_sequence_scores_low(self):
        assert positional_match(["u", "a", "e"], ["a", "e"]) == 0.0

    def test_empty_side(self):
        assert positional_match([], ["a"]) == 0.0


def test_weighted_sum():
    assert weighted_sum([1.0, 0.5], [0.6, 0.4]) == pytest.approx(0.8)
