"""Core data types for sayscore."""

from dataclasses import dataclass, field

import numpy as np


@dataclass
class AudioBuffer:
    """Float PCM samples in [-1, 1], interleaved when channels > 1."""
    samples: np.ndarray
    sample_rate: int    # Hz
    channels: int = 1

    @property
    def frames(self) -> int:
        return len(self.samples) // max(self.channels, 1)

    @property
    def duration(self) -> float:
        """Length in seconds."""
        if self.sample_rate <= 0:
            return 0.0
        return self.frames / self.sample_rate


@dataclass(frozen=True)
class MetricScore:
    """One weighted sub-metric of a similarity score."""
    name: str
    value: float     # 0-1
    weight: float

    @property
    def percent(self) -> float:
        return self.value * 100.0


@dataclass(frozen=True)
class ScoreBreakdown:
    """Sub-metrics, their weights and the combined 0-100 score."""
    strategy: str                  # "phoneme" or "lexical"
    predicted: str
    target: str
    metrics: tuple[MetricScore, ...]
    score: float

    def metric(self, name: str) -> MetricScore:
        for m in self.metrics:
            if m.name == name:
                return m
        raise KeyError(name)

    def to_dict(self) -> dict:
        return {
            "strategy": self.strategy,
            "predicted": self.predicted,
            "target": self.target,
            "metrics": {
                m.name: {"value": m.value, "weight": m.weight}
                for m in self.metrics
            },
            "score": self.score,
        }

    def format(self) -> str:
        """Human-readable breakdown for tuning sessions."""
        lines = [f"Transcribed: '{self.predicted}' -> Target: '{self.target}'"]
        for m in self.metrics:
            label = m.name.replace("_", "-").title()
            lines.append(f"{label}: {m.percent:.1f}% (weight: {m.weight})")
        lines.append(f"TOTAL SCORE: {self.score:.1f}/100")
        return "\n".join(lines)


@dataclass
class Evaluation:
    """Outcome of one scoring call through the orchestrator.

    A failed evaluation carries ``score == -1.0`` and an error message so it
    can never be confused with a legitimate score of zero.
    """
    target_word: str
    status: str                               # "ok" or "error"
    score: float
    breakdown: ScoreBreakdown | None = None
    predicted_tokens: list[str] = field(default_factory=list)
    target_tokens: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def to_dict(self) -> dict:
        return {
            "target_word": self.target_word,
            "status": self.status,
            "score": self.score,
            "breakdown": self.breakdown.to_dict() if self.breakdown else None,
            "predicted_tokens": self.predicted_tokens,
            "target_tokens": self.target_tokens,
            "error": self.error,
        }
