"""Similarity between a predicted and a target phoneme token sequence."""

import logging
from collections.abc import Sequence

from sayscore.config import DEFAULT_CONFIG, WORD_BOUNDARY_TOKEN, ScoringConfig
from sayscore.scoring.metrics import (
    edit_similarity,
    length_penalty,
    length_ratio,
    positional_match,
    weighted_sum,
)
from sayscore.types import MetricScore, ScoreBreakdown

logger = logging.getLogger(__name__)


def tokenize(phonemes: str | Sequence[str] | None) -> list[str]:
    """Normalise a phoneme string or token list to lower-case tokens.

    Word-boundary markers are dropped.
    """
    if phonemes is None:
        return []
    if isinstance(phonemes, str):
        phonemes = phonemes.replace(WORD_BOUNDARY_TOKEN, " ").split()
    return [p.strip().lower() for p in phonemes if p.strip() and p != WORD_BOUNDARY_TOKEN]


def vowel_similarity(
    predicted: Sequence[str],
    target: Sequence[str],
    vowels: frozenset[str],
) -> float:
    """Positional agreement of the vowel subsequences."""
    pv = [p for p in predicted if p in vowels]
    tv = [t for t in target if t in vowels]
    return positional_match(pv, tv)


class PhonemeScorer:
    """Scores phoneme sequences: edit similarity, vowel agreement, length."""

    strategy = "phoneme"

    def __init__(self, config: ScoringConfig = DEFAULT_CONFIG):
        self.config = config

    def metrics(self, predicted: Sequence[str], target: Sequence[str]) -> tuple[MetricScore, ...]:
        w = self.config.phoneme_weights
        edit = edit_similarity(predicted, target)
        vowel = vowel_similarity(predicted, target, self.config.vowels)
        length = length_penalty(length_ratio(predicted, target), self.config.phoneme_length)
        return (
            MetricScore("edit", edit, w.edit),
            MetricScore("vowel", vowel, w.vowel),
            MetricScore("length", length, w.length),
        )

    def score(
        self,
        predicted: str | Sequence[str] | None,
        target: str | Sequence[str] | None,
    ) -> tuple[float, ScoreBreakdown]:
        """Return (score 0-100, breakdown). Empty input on either side scores 0."""
        pred_tokens = tokenize(predicted)
        target_tokens = tokenize(target)
        pred_str = " ".join(pred_tokens)
        target_str = " ".join(target_tokens)

        if not pred_tokens or not target_tokens:
            return 0.0, ScoreBreakdown(self.strategy, pred_str, target_str, (), 0.0)

        metrics = self.metrics(pred_tokens, target_tokens)
        score = 100.0 * weighted_sum(
            [m.value for m in metrics], [m.weight for m in metrics]
        )
        logger.debug(
            f"{pred_str:<20} vs {target_str:<20} -> "
            + "  ".join(f"{m.name}={m.value:6.3f}" for m in metrics)
            + f"  score={score:7.3f}"
        )
        return score, ScoreBreakdown(self.strategy, pred_str, target_str, metrics, score)


def score_phoneme(
    predicted: str | Sequence[str] | None,
    target: str | Sequence[str] | None,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> tuple[float, ScoreBreakdown]:
    return PhonemeScorer(config).score(predicted, target)
