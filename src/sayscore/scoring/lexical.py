"""Orthographic similarity between a transcribed word and the target word.

Combines character Levenshtein, Jaro-Winkler, a Soundex-style phonetic code
and a length penalty. Useful when no phoneme alignment is available, e.g.
after a Whisper transcription, or as a cross-check on the phoneme score.
"""

import logging
import math

from sayscore.config import (
    DEFAULT_CONFIG,
    JW_PREFIX_LIMIT,
    JW_PREFIX_SCALE,
    SOUNDEX_LENGTH,
    ScoringConfig,
)
from sayscore.scoring.metrics import (
    edit_similarity,
    length_penalty,
    length_ratio,
    levenshtein,
    weighted_sum,
)
from sayscore.types import MetricScore, ScoreBreakdown

logger = logging.getLogger(__name__)

# Soundex digit class for A..Z; "0" marks vowels and ignored letters
_SOUNDEX_CLASSES = "01230120022455012623010202"


def normalize_word(word: str | None) -> str:
    return (word or "").lower().strip()


def jaro(s1: str, s2: str) -> float:
    len1, len2 = len(s1), len(s2)
    if len1 == 0 and len2 == 0:
        return 1.0
    if len1 == 0 or len2 == 0:
        return 0.0

    window = max(len1, len2) // 2 - 1
    s1_matched = [False] * len1
    s2_matched = [False] * len2

    matches = 0
    for i in range(len1):
        start = max(0, i - window)
        end = min(i + window + 1, len2)
        for j in range(start, end):
            if s2_matched[j] or s1[i] != s2[j]:
                continue
            s1_matched[i] = s2_matched[j] = True
            matches += 1
            break

    if matches == 0:
        return 0.0

    transpositions = 0
    k = 0
    for i in range(len1):
        if not s1_matched[i]:
            continue
        while not s2_matched[k]:
            k += 1
        if s1[i] != s2[k]:
            transpositions += 1
        k += 1

    return (
        matches / len1
        + matches / len2
        + (matches - transpositions / 2) / matches
    ) / 3.0


def jaro_winkler(s1: str, s2: str) -> float:
    """Jaro similarity boosted by a common prefix of up to four characters."""
    j = jaro(s1, s2)
    prefix = 0
    for a, b in zip(s1[:JW_PREFIX_LIMIT], s2[:JW_PREFIX_LIMIT]):
        if a != b:
            break
        prefix += 1
    return j + prefix * JW_PREFIX_SCALE * (1.0 - j)


def _soundex_class(ch: str) -> str:
    if "A" <= ch <= "Z":
        return _SOUNDEX_CLASSES[ord(ch) - ord("A")]
    return "0"


def soundex(word: str) -> str:
    """Four-character Soundex-style code.

    The first letter is kept; later letters contribute their digit class
    unless it is 0 or repeats the previous non-zero class.
    """
    if not word:
        return "0" * SOUNDEX_LENGTH

    word = word.upper()
    code = [word[0]]
    last = _soundex_class(word[0])
    for ch in word[1:]:
        if len(code) >= SOUNDEX_LENGTH:
            break
        digit = _soundex_class(ch)
        if digit == "0":
            continue
        if digit != last:
            code.append(digit)
        last = digit

    return "".join(code).ljust(SOUNDEX_LENGTH, "0")


def phonetic_similarity(s1: str, s2: str) -> float:
    c1, c2 = soundex(s1), soundex(s2)
    if c1 == c2:
        return 1.0
    return 1.0 - levenshtein(c1, c2) / SOUNDEX_LENGTH


class LexicalScorer:
    """Scores a transcribed word against the target spelling."""

    strategy = "lexical"

    def __init__(self, config: ScoringConfig = DEFAULT_CONFIG):
        self.config = config

    def metrics(self, transcribed: str, target: str) -> tuple[MetricScore, ...]:
        """Sub-metrics over already-normalised, non-empty words."""
        w = self.config.lexical_weights
        ratio = length_ratio(transcribed, target)
        return (
            MetricScore("levenshtein", edit_similarity(transcribed, target), w.levenshtein),
            MetricScore("jaro_winkler", jaro_winkler(transcribed, target), w.jaro_winkler),
            MetricScore("phonetic", phonetic_similarity(transcribed, target), w.phonetic),
            MetricScore("length", length_penalty(ratio, self.config.lexical_length), w.length),
        )

    def score(self, transcribed: str | None, target: str | None) -> tuple[float, ScoreBreakdown]:
        """Return (score 0-100 as a whole number, breakdown).

        None counts as empty. Empty input scores 0; an exact match scores 100
        without computing any metric.
        """
        transcribed = normalize_word(transcribed)
        target = normalize_word(target)

        if not transcribed or not target:
            return 0.0, ScoreBreakdown(self.strategy, transcribed, target, (), 0.0)
        if transcribed == target:
            return 100.0, ScoreBreakdown(self.strategy, transcribed, target, (), 100.0)

        metrics = self.metrics(transcribed, target)
        raw = 100.0 * weighted_sum([m.value for m in metrics], [m.weight for m in metrics])
        # round off float noise so e.g. 62.00000000000001 does not ceil to 63
        score = float(min(100, math.ceil(round(max(0.0, raw), 9))))

        logger.debug(
            f"{transcribed:<10} vs {target:<10} -> "
            + "  ".join(f"{m.name}={m.value:6.2f}" for m in metrics)
            + f"  score={score:5.1f}"
        )
        return score, ScoreBreakdown(self.strategy, transcribed, target, metrics, score)

    def breakdown(self, transcribed: str | None, target: str | None) -> ScoreBreakdown:
        """Every sub-metric with its weight, even for exact matches."""
        score, result = self.score(transcribed, target)
        if result.metrics or not result.predicted or not result.target:
            return result
        metrics = self.metrics(result.predicted, result.target)
        return ScoreBreakdown(self.strategy, result.predicted, result.target, metrics, score)


def score_lexical(
    transcribed: str | None,
    target: str | None,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> tuple[float, ScoreBreakdown]:
    return LexicalScorer(config).score(transcribed, target)


def lexical_breakdown(
    transcribed: str | None,
    target: str | None,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> ScoreBreakdown:
    return LexicalScorer(config).breakdown(transcribed, target)
