"""Tests for greedy CTC decoding."""

import numpy as np
import pytest

from sayscore.errors import DecodingError, VocabularyMismatchError
from sayscore.phonemes.ctc import CTCDecoder, best_path, collapse, greedy_decode
from sayscore.phonemes.vocabulary import DEFAULT_VOCABULARY, VocabularyTable

# Small vocabulary with the blank at id 0
SMALL_VOCAB = VocabularyTable({
    0: "[PAD]", 1: "[UNK]", 2: "|", 3: "a", 4: "b", 5: "k", 6: "t", 7: "oo",
})


def _one_hot(path: list[int], vocab_size: int) -> np.ndarray:
    """Logits whose arg-max at step t is path[t]."""
    logits = np.zeros((1, len(path), vocab_size), dtype=np.float32)
    for t, idx in enumerate(path):
        logits[0, t, idx] = 5.0
    return logits


class TestCollapse:
    def test_blank_separates_repeats(self):
        assert collapse([5, 5, 0, 5, 7, 7, 0], blank_id=0) == [5, 5, 7]

    def test_adjacent_repeats_merge(self):
        assert collapse([3, 3, 3, 4, 4], blank_id=0) == [3, 4]

    def test_repeated_blanks_dropped(self):
        assert collapse([0, 0, 0], blank_id=0) == []

    def test_empty(self):
        assert collapse([], blank_id=0) == []


class TestBestPath:
    def test_ties_pick_first_index(self):
        logits = np.zeros((2, 4))
        assert best_path(logits) == [0, 0]

    def test_argmax_per_step(self):
        logits = np.array([[0.1, 0.9, 0.0], [0.7, 0.2, 0.1]])
        assert best_path(logits) == [1, 0]


class TestGreedyDecode:
    def test_decodes_tokens_across_blank(self):
        logits = _one_hot([5, 5, 0, 5, 7, 7, 0], len(SMALL_VOCAB))
        assert greedy_decode(logits, SMALL_VOCAB, blank_id=0) == ["k", "k", "oo"]

    def test_reserved_markers_dropped(self):
        logits = _one_hot([1, 3, 2, 4, 0], len(SMALL_VOCAB))
        assert greedy_decode(logits, SMALL_VOCAB, blank_id=0) == ["a", "b"]

    def test_only_blanks_gives_empty(self):
        logits = _one_hot([0, 0, 0], len(SMALL_VOCAB))
        assert greedy_decode(logits, SMALL_VOCAB, blank_id=0) == []

    def test_default_vocab_uses_pad_as_blank(self):
        # k e t with [PAD] frames between and a word boundary at the end
        path = [42, 11, 11, 42, 32, 42, 18, 18, 0, 42]
        logits = _one_hot(path, len(DEFAULT_VOCABULARY))
        assert greedy_decode(logits) == ["k", "e", "t"]

    def test_vocab_size_mismatch(self):
        logits = _one_hot([1, 2], 10)
        with pytest.raises(VocabularyMismatchError):
            greedy_decode(logits)

    def test_rejects_2d_logits(self):
        with pytest.raises(DecodingError):
            greedy_decode(np.zeros((4, len(DEFAULT_VOCABULARY))))

    def test_rejects_batch_above_one(self):
        with pytest.raises(DecodingError):
            greedy_decode(np.zeros((2, 4, len(DEFAULT_VOCABULARY))))

    def test_zero_timesteps(self):
        logits = np.zeros((1, 0, len(DEFAULT_VOCABULARY)))
        assert greedy_decode(logits) == []


class TestCTCDecoder:
    def test_default_blank(self):
        decoder = CTCDecoder()
        assert decoder.blank_id == 42

    def test_decode_ids(self):
        decoder = CTCDecoder(SMALL_VOCAB, blank_id=0)
        assert decoder.decode_ids([5, 5, 0, 5, 7, 7, 0]) == ["k", "k", "oo"]

    def test_decode_matches_function(self):
        decoder = CTCDecoder(SMALL_VOCAB, blank_id=0)
        logits = _one_hot([3, 0, 4, 4, 6], len(SMALL_VOCAB))
        assert decoder.decode(logits) == greedy_decode(logits, SMALL_VOCAB, 0)
