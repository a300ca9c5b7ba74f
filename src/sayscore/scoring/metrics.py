"""Sequence metrics shared by the phoneme and lexical scorers.

Everything here is generic over sequences: phoneme token lists and plain
strings go through the same code, with an optional equality comparator.
"""

import operator
from collections.abc import Callable, Sequence
from typing import Any

from sayscore.config import LengthPenaltyPolicy

Comparator = Callable[[Any, Any], bool]


def levenshtein(a: Sequence, b: Sequence, eq: Comparator = operator.eq) -> int:
    """Unit-cost edit distance between two sequences."""
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    prev = list(range(len(b) + 1))
    for i, x in enumerate(a, start=1):
        cur = [i] + [0] * len(b)
        for j, y in enumerate(b, start=1):
            cost = 0 if eq(x, y) else 1
            cur[j] = min(
                prev[j] + 1,         # deletion
                cur[j - 1] + 1,      # insertion
                prev[j - 1] + cost,  # substitution
            )
        prev = cur
    return prev[-1]


def edit_similarity(a: Sequence, b: Sequence, eq: Comparator = operator.eq) -> float:
    """``1 - levenshtein / max_len``; two empty sequences are identical."""
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return 1.0 - levenshtein(a, b, eq) / max_len


def length_ratio(predicted: Sequence, target: Sequence) -> float:
    if len(target) == 0:
        return float("inf") if len(predicted) else 1.0
    return len(predicted) / len(target)


def length_penalty(ratio: float, policy: LengthPenaltyPolicy) -> float:
    if ratio < policy.low:
        return policy.low_value
    if ratio > policy.high:
        return policy.high_value
    return 1.0 - abs(1.0 - ratio) * policy.slope


def positional_match(a: Sequence, b: Sequence, eq: Comparator = operator.eq) -> float:
    """Fraction of equal items over the shorter length, compared index by index.

    No alignment is attempted: an early insertion shifts every later item.
    Returns 0 if either sequence is empty.
    """
    n = min(len(a), len(b))
    if n == 0:
        return 0.0
    matches = sum(1 for x, y in zip(a[:n], b[:n]) if eq(x, y))
    return matches / n


def weighted_sum(values: Sequence[float], weights: Sequence[float]) -> float:
    return sum(v * w for v, w in zip(values, weights))
