"""Whisper transcription of a single spoken word, for the lexical scorer."""

import logging
import string

import numpy as np

from sayscore.config import EXPECTED_SAMPLE_RATE

logger = logging.getLogger(__name__)

_model_cache: dict[str, object] = {}


def _load_model(model_name: str):
    try:
        import whisper
    except ImportError as e:
        raise ImportError(
            "Transcription requires 'openai-whisper': pip install 'sayscore[whisper]'"
        ) from e
    if model_name not in _model_cache:
        logger.info(f"Loading Whisper model {model_name}")
        _model_cache[model_name] = whisper.load_model(model_name)
    return _model_cache[model_name]


def first_word(text: str) -> str:
    """Lower-cased first word of ``text`` with surrounding punctuation removed."""
    for token in text.split():
        word = token.strip(string.punctuation + "“”‘’").lower()
        if word:
            return word
    return ""


def transcribe_word(
    samples: np.ndarray,
    sample_rate: int = EXPECTED_SAMPLE_RATE,
    model_name: str = "tiny",
    language: str = "en",
) -> str:
    """Transcribe mono audio and return the first word, or "" if none.

    Args:
        samples: Mono float samples.
        sample_rate: Must be 16 kHz; Whisper does not resample arrays.
        model_name: Whisper model size.
        language: Language code.
    """
    if sample_rate != EXPECTED_SAMPLE_RATE:
        raise ValueError(
            f"Whisper expects {EXPECTED_SAMPLE_RATE} Hz audio, got {sample_rate} Hz"
        )
    if len(samples) == 0:
        return ""

    model = _load_model(model_name)
    result = model.transcribe(
        np.asarray(samples, dtype=np.float32),
        language=language,
        fp16=False,
    )
    word = first_word(result.get("text", ""))
    logger.debug(f"Whisper heard {result.get('text', '')!r} -> {word!r}")
    return word
