"""Configuration constants and scoring policies.

The weights and length-penalty thresholds below were tuned by hand against
children's practice recordings. They are calibration knobs: every scorer
accepts a ScoringConfig so they can be re-tuned without code changes.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

# Audio
EXPECTED_SAMPLE_RATE = 16000  # Hz, acoustic model input rate
PCM16_SCALE = 32768.0

# CTC vocabulary
BLANK_TOKEN = "[PAD]"
UNKNOWN_TOKEN = "[UNK]"
WORD_BOUNDARY_TOKEN = "|"
RESERVED_TOKENS = frozenset({BLANK_TOKEN, UNKNOWN_TOKEN, WORD_BOUNDARY_TOKEN})

# Pronunciation dictionary
DICT_COMMENT_MARKER = ";;;"
DICT_COLUMN_SEPARATOR = "  "
DICT_PATH_ENV = "SAYSCORE_DICT"
BUNDLED_DICT_PATH = Path(__file__).parent / "data" / "starter.dict"


def dictionary_path() -> Path:
    """Dictionary resource path, honouring the SAYSCORE_DICT override."""
    override = os.environ.get(DICT_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return BUNDLED_DICT_PATH


# Vowel symbols of the reduced phoneme vocabulary
VOWEL_TOKENS = frozenset({
    "a", "aw", "ay", "e", "ee", "i", "o",
    "oau", "oh", "oi", "oo", "or", "u", "uoh",
})

# Benchmark
BENCH_BUDGET_MS = 5.0  # per comparison
BENCH_WARMUP_ITERATIONS = 200


@dataclass(frozen=True)
class LengthPenaltyPolicy:
    """Penalty for attempts much shorter or longer than the target.

    Ratios below ``low`` score ``low_value``, ratios above ``high`` score
    ``high_value``; in between the penalty is ``1 - |1 - ratio| * slope``.
    """
    low: float
    high: float
    low_value: float
    high_value: float
    slope: float = 0.5


@dataclass(frozen=True)
class PhonemeWeights:
    """Weights need not sum to 1."""
    edit: float = 0.70
    vowel: float = 0.15
    length: float = 0.15


@dataclass(frozen=True)
class LexicalWeights:
    levenshtein: float = 0.3
    jaro_winkler: float = 0.3
    phonetic: float = 0.2
    length: float = 0.2


PHONEME_LENGTH_POLICY = LengthPenaltyPolicy(low=0.5, high=1.8, low_value=0.4, high_value=0.4)
LEXICAL_LENGTH_POLICY = LengthPenaltyPolicy(low=0.3, high=2.0, low_value=0.3, high_value=0.5)

# Jaro-Winkler prefix boost
JW_PREFIX_LIMIT = 4
JW_PREFIX_SCALE = 0.1

SOUNDEX_LENGTH = 4


@dataclass(frozen=True)
class ScoringConfig:
    """All tunable scoring policy in one place."""
    phoneme_weights: PhonemeWeights = field(default_factory=PhonemeWeights)
    lexical_weights: LexicalWeights = field(default_factory=LexicalWeights)
    phoneme_length: LengthPenaltyPolicy = PHONEME_LENGTH_POLICY
    lexical_length: LengthPenaltyPolicy = LEXICAL_LENGTH_POLICY
    vowels: frozenset[str] = VOWEL_TOKENS


DEFAULT_CONFIG = ScoringConfig()
