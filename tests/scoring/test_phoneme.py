"""Tests for phoneme-sequence scoring."""

import pytest

from sayscore.config import VOWEL_TOKENS, PhonemeWeights, ScoringConfig
from sayscore.scoring import get_scorer
from sayscore.scoring.phoneme import PhonemeScorer, score_phoneme, tokenize, vowel_similarity


class TestTokenize:
    def test_string(self):
        assert tokenize("K E  T") == ["k", "e", "t"]

    def test_word_boundary_removed(self):
        assert tokenize("k e t | d o g") == ["k", "e", "t", "d", "o", "g"]
        assert tokenize(["k", "|", "e"]) == ["k", "e"]

    def test_none_and_blank(self):
        assert tokenize(None) == []
        assert tokenize("   ") == []


class TestScorePhoneme:
    def test_exact_match(self):
        score, _ = score_phoneme(["k", "e", "t"], ["k", "e", "t"])
        assert score == pytest.approx(100.0)

    def test_empty_predicted(self):
        score, breakdown = score_phoneme([], ["k", "e", "t"])
        assert score == 0.0
        assert breakdown.metrics == ()

    def test_empty_target(self):
        score, _ = score_phoneme(["k", "e", "t"], [])
        assert score == 0.0

    def test_vowel_substitution(self):
        # edit 2/3, vowel 0, length 1
        score, breakdown = score_phoneme(["k", "a", "t"], ["k", "e", "t"])
        assert breakdown.metric("edit").value == pytest.approx(2 / 3)
        assert breakdown.metric("vowel").value == 0.0
        assert breakdown.metric("length").value == 1.0
        assert score == pytest.approx(100 * (0.7 * 2 / 3 + 0.15))

    def test_short_attempt_penalised(self):
        _, breakdown = score_phoneme(["k"], ["k", "e", "t"])
        assert breakdown.metric("length").value == 0.4

    def test_long_attempt_penalised(self):
        _, breakdown = score_phoneme(["k", "e", "t"] * 2, ["k", "e", "t"])
        assert breakdown.metric("length").value == 0.4

    def test_string_input(self):
        a, _ = score_phoneme("k e t", "k e t")
        b, _ = score_phoneme(["k", "e", "t"], ["k", "e", "t"])
        assert a == b

    def test_deterministic(self):
        first, _ = score_phoneme(["b", "ay", "b", "ee"], ["b", "ay", "b", "ee", "z"])
        second, _ = score_phoneme(["b", "ay", "b", "ee"], ["b", "ay", "b", "ee", "z"])
        assert first == second

    @pytest.mark.parametrize("predicted,target", [
        (["k"], ["k", "e", "t"]),
        (["z", "z", "z", "z", "z", "z", "z"], ["k", "e", "t"]),
        (["a", "e", "i"], ["oo"]),
        (["d", "aw", "g"], ["k", "e", "t"]),
    ])
    def test_range(self, predicted, target):
        score, _ = score_phoneme(predicted, target)
        assert 0.0 <= score <= 100.0

    def test_custom_weights(self):
        config = ScoringConfig(phoneme_weights=PhonemeWeights(edit=1.0, vowel=0.0, length=0.0))
        score, breakdown = PhonemeScorer(config).score(["k", "a", "t"], ["k", "e", "t"])
        assert score == pytest.approx(100 * 2 / 3)
        assert breakdown.metric("edit").weight == 1.0


class TestVowelSimilarity:
    def test_positional_not_aligned(self):
        # An inserted leading vowel shifts every later vowel out of phase
        assert vowel_similarity(["u", "k", "e", "t"], ["k", "e", "t"], VOWEL_TOKENS) == 0.0

    def test_no_vowels(self):
        assert vowel_similarity(["k", "t"], ["k", "e", "t"], VOWEL_TOKENS) == 0.0

    def test_compares_up_to_shorter(self):
        assert vowel_similarity(["e"], ["e", "u"], VOWEL_TOKENS) == 1.0


def test_get_scorer():
    assert isinstance(get_scorer("phoneme"), PhonemeScorer)
    with pytest.raises(ValueError):
        get_scorer("acoustic")
