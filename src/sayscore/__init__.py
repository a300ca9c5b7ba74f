"""sayscore: score how well a spoken word matches a target word."""

from sayscore.engine import ScoringOrchestrator
from sayscore.scoring import score_lexical, score_phoneme

__all__ = ["ScoringOrchestrator", "score_lexical", "score_phoneme"]
