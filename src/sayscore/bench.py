"""Determinism, ranking, range and throughput checks for the lexical scorer."""

import logging
import time
from dataclasses import dataclass

from sayscore.config import BENCH_BUDGET_MS, BENCH_WARMUP_ITERATIONS
from sayscore.scoring.lexical import LexicalScorer

logger = logging.getLogger(__name__)

# Realistic transcription/target pairs from practice sessions
DEFAULT_PAIRS: list[tuple[str, str]] = [
    # Exact matches
    ("apple", "apple"),
    ("baby", "baby"),
    # One letter off
    ("aple", "apple"),
    ("babi", "baby"),
    ("acordion", "accordion"),
    # Partial attempts
    ("app", "apple"),
    ("ba", "baby"),
    ("acc", "accordion"),
    # Phonetically similar
    ("nite", "night"),
    ("fone", "phone"),
    ("ruff", "rough"),
    # Very short attempts
    ("a", "apple"),
    ("b", "baby"),
    ("aa", "ant"),
    # Child speech patterns
    ("tat", "cat"),
    ("wabbit", "rabbit"),
    ("pasketti", "spaghetti"),
    # Unrelated
    ("zebra", "apple"),
    ("xyz", "baby"),
    # Repeated sounds
    ("aaaa", "ant"),
    ("bbb", "baby"),
    # Longer words
    ("artist", "artist"),
    ("artis", "artist"),
    ("avocado", "avocado"),
    ("avacado", "avocado"),
]

# Expected to score in non-increasing order
RANKING_PAIRS: list[tuple[str, str]] = [
    ("apple", "apple"),
    ("aple", "apple"),
    ("app", "apple"),
    ("dog", "apple"),
]


@dataclass
class BenchmarkResult:
    iterations: int
    pairs: int
    total_ms: float
    budget_ms: float = BENCH_BUDGET_MS

    @property
    def comparisons(self) -> int:
        return self.iterations * self.pairs

    @property
    def mean_ms(self) -> float:
        return self.total_ms / self.comparisons if self.comparisons else 0.0

    @property
    def throughput(self) -> float:
        """Comparisons per second."""
        return self.comparisons / (self.total_ms / 1000) if self.total_ms > 0 else 0.0

    @property
    def passed(self) -> bool:
        return self.mean_ms < self.budget_ms

    def summary(self) -> str:
        verdict = "PASS" if self.passed else "FAIL"
        return (
            f"Iterations: {self.iterations:,} x {self.pairs} pairs = {self.comparisons:,} comparisons\n"
            f"Total time: {self.total_ms:.2f} ms\n"
            f"Avg per comparison: {self.mean_ms:.4f} ms\n"
            f"Throughput: {self.throughput:.0f} comparisons/second\n"
            f"Performance {verdict}: budget {self.budget_ms} ms per comparison"
        )


def check_determinism(
    transcribed: str, target: str, runs: int = 3, scorer: LexicalScorer | None = None,
) -> bool:
    scorer = scorer or LexicalScorer()
    scores = [scorer.score(transcribed, target)[0] for _ in range(runs)]
    return all(s == scores[0] for s in scores)


def check_ranking(
    pairs: list[tuple[str, str]] = RANKING_PAIRS, scorer: LexicalScorer | None = None,
) -> tuple[bool, list[float]]:
    """True if scores are non-increasing in the given order."""
    scorer = scorer or LexicalScorer()
    scores = [scorer.score(t, target)[0] for t, target in pairs]
    ordered = all(b <= a for a, b in zip(scores, scores[1:]))
    if not ordered:
        logger.warning(f"Ranking out of order: {scores}")
    return ordered, scores


def check_range(
    pairs: list[tuple[str | None, str | None]], scorer: LexicalScorer | None = None,
) -> bool:
    scorer = scorer or LexicalScorer()
    return all(0.0 <= scorer.score(t, target)[0] <= 100.0 for t, target in pairs)


def run_benchmark(
    pairs: list[tuple[str, str]] = DEFAULT_PAIRS,
    iterations: int = 1000,
    scorer: LexicalScorer | None = None,
    warmup: int = BENCH_WARMUP_ITERATIONS,
) -> BenchmarkResult:
    scorer = scorer or LexicalScorer()
    for _ in range(warmup):
        scorer.score("test", "test")

    start = time.perf_counter()
    for _ in range(iterations):
        for transcribed, target in pairs:
            scorer.score(transcribed, target)
    total_ms = (time.perf_counter() - start) * 1000

    result = BenchmarkResult(iterations=iterations, pairs=len(pairs), total_ms=total_ms)
    logger.info(f"Benchmark: {result.mean_ms:.4f} ms/comparison over {result.comparisons} runs")
    return result
