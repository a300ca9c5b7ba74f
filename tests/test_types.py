"""Tests for core data types and the error hierarchy."""

import numpy as np
import pytest

from sayscore.errors import (
    AudioFormatError,
    DecodingError,
    SayScoreError,
    UnsupportedBitDepthError,
    VocabularyMismatchError,
)
from sayscore.types import AudioBuffer, Evaluation, MetricScore, ScoreBreakdown


def _breakdown():
    return ScoreBreakdown(
        strategy="lexical",
        predicted="aple",
        target="apple",
        metrics=(
            MetricScore("levenshtein", 0.8, 0.3),
            MetricScore("jaro_winkler", 0.94, 0.3),
        ),
        score=91.0,
    )


def test_audio_buffer_duration():
    buffer = AudioBuffer(samples=np.zeros(32000), sample_rate=16000, channels=2)
    assert buffer.frames == 16000
    assert buffer.duration == 1.0


def test_audio_buffer_zero_rate():
    assert AudioBuffer(np.zeros(10), sample_rate=0).duration == 0.0


def test_metric_percent():
    assert MetricScore("edit", 0.5, 0.7).percent == 50.0


def test_breakdown_lookup():
    breakdown = _breakdown()
    assert breakdown.metric("levenshtein").value == 0.8
    with pytest.raises(KeyError):
        breakdown.metric("phonetic")


def test_breakdown_is_frozen():
    with pytest.raises(AttributeError):
        _breakdown().score = 50.0


def test_breakdown_to_dict():
    d = _breakdown().to_dict()
    assert d["strategy"] == "lexical"
    assert d["metrics"]["jaro_winkler"] == {"value": 0.94, "weight": 0.3}
    assert d["score"] == 91.0


def test_breakdown_format():
    lines = _breakdown().format().splitlines()
    assert lines[0] == "Transcribed: 'aple' -> Target: 'apple'"
    assert lines[1] == "Levenshtein: 80.0% (weight: 0.3)"
    assert lines[2] == "Jaro-Winkler: 94.0% (weight: 0.3)"
    assert lines[-1] == "TOTAL SCORE: 91.0/100"


def test_evaluation_to_dict():
    evaluation = Evaluation("apple", "ok", 91.0, breakdown=_breakdown())
    assert evaluation.ok
    d = evaluation.to_dict()
    assert d["breakdown"]["score"] == 91.0
    assert d["error"] is None


def test_failed_evaluation():
    evaluation = Evaluation("apple", "error", -1.0, error="boom")
    assert not evaluation.ok
    assert evaluation.to_dict()["breakdown"] is None


def test_error_hierarchy():
    assert issubclass(UnsupportedBitDepthError, AudioFormatError)
    assert issubclass(VocabularyMismatchError, DecodingError)
    assert issubclass(DecodingError, SayScoreError)


def test_vocabulary_mismatch_message():
    err = VocabularyMismatchError(40, 43)
    assert err.logit_width == 40
    assert err.vocab_size == 43
    assert "40" in str(err) and "43" in str(err)
