"""Similarity scoring strategies: phoneme sequences and raw spellings."""

from sayscore.scoring.lexical import LexicalScorer, lexical_breakdown, score_lexical
from sayscore.scoring.phoneme import PhonemeScorer, score_phoneme

_STRATEGIES = {
    PhonemeScorer.strategy: PhonemeScorer,
    LexicalScorer.strategy: LexicalScorer,
}


def get_scorer(strategy: str, **kwargs):
    """Get a scorer by strategy name ("phoneme" or "lexical")."""
    if strategy not in _STRATEGIES:
        raise ValueError(
            f"Unknown scoring strategy: {strategy!r}. Available: {list(_STRATEGIES)}"
        )
    return _STRATEGIES[strategy](**kwargs)


__all__ = [
    "LexicalScorer",
    "PhonemeScorer",
    "get_scorer",
    "lexical_breakdown",
    "score_lexical",
    "score_phoneme",
]
