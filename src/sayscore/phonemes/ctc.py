"""Greedy CTC decoding of acoustic-model logits into phoneme tokens."""

import itertools
import logging

import numpy as np

from sayscore.errors import DecodingError, VocabularyMismatchError
from sayscore.phonemes.vocabulary import DEFAULT_VOCABULARY, VocabularyTable

logger = logging.getLogger(__name__)


def collapse(ids: list[int], blank_id: int) -> list[int]:
    """Collapse a frame-level id path the CTC way.

    Runs of the same id become one id, then blanks are removed. A blank
    between two equal ids separates them, so ``[5, 5, 0, 5]`` with blank
    ``0`` yields ``[5, 5]``.
    """
    return [i for i, _ in itertools.groupby(ids) if i != blank_id]


def best_path(logits: np.ndarray) -> list[int]:
    """Arg-max id per time step (first index wins ties)."""
    return np.argmax(logits, axis=-1).tolist()


def greedy_decode(
    logits: np.ndarray,
    vocab: VocabularyTable = DEFAULT_VOCABULARY,
    blank_id: int | None = None,
) -> list[str]:
    """Decode a (1, T, V) logit matrix into phoneme tokens.

    Reserved markers (unknown, pad, word boundary) never appear in the
    output. The result may be empty.

    Raises:
        DecodingError: if the matrix is not 3-D with batch size 1.
        VocabularyMismatchError: if V differs from the vocabulary size.
    """
    logits = np.asarray(logits)
    if logits.ndim != 3:
        raise DecodingError(f"Expected a 3-D logit tensor, got shape {logits.shape}")
    if logits.shape[0] != 1:
        raise DecodingError(f"Expected batch size 1, got {logits.shape[0]}")
    if logits.shape[2] != len(vocab):
        raise VocabularyMismatchError(logits.shape[2], len(vocab))

    if blank_id is None:
        blank_id = vocab.blank_id

    path = best_path(logits[0])
    tokens = [vocab[i] for i in collapse(path, blank_id)]
    tokens = [t for t in tokens if not vocab.is_reserved(t)]
    logger.debug(f"Decoded {len(path)} frames -> {len(tokens)} tokens: {' '.join(tokens)}")
    return tokens


class CTCDecoder:
    """Greedy CTC decoder bound to one vocabulary."""

    def __init__(self, vocab: VocabularyTable = DEFAULT_VOCABULARY, blank_id: int | None = None):
        self.vocab = vocab
        self.blank_id = vocab.blank_id if blank_id is None else blank_id

    def decode(self, logits: np.ndarray) -> list[str]:
        return greedy_decode(logits, self.vocab, self.blank_id)

    def decode_ids(self, ids: list[int]) -> list[str]:
        """Decode an already arg-maxed id path."""
        tokens = [self.vocab[i] for i in collapse(ids, self.blank_id)]
        return [t for t in tokens if not self.vocab.is_reserved(t)]
