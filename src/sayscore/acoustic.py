"""Acoustic model interface and backends.

The core treats the acoustic model as an opaque capability: mono float PCM
at a fixed rate in, a (1, T, V) logit tensor out.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

import numpy as np

from sayscore.config import EXPECTED_SAMPLE_RATE

logger = logging.getLogger(__name__)


class AcousticModel(ABC):
    """Abstract base for acoustic-model backends."""

    name: str = "base"
    sample_rate: int = EXPECTED_SAMPLE_RATE

    @abstractmethod
    def infer(self, samples: np.ndarray) -> np.ndarray:
        """Run the model on mono float32 samples at ``sample_rate``.

        Returns:
            Logits shaped (1, time_steps, vocab_size).
        """


class CallableAcousticModel(AcousticModel):
    """Wraps any ``samples -> logits`` callable (an ONNX session, a test fake...)."""

    name = "callable"

    def __init__(self, fn: Callable[[np.ndarray], np.ndarray], sample_rate: int = EXPECTED_SAMPLE_RATE):
        self.fn = fn
        self.sample_rate = sample_rate

    def infer(self, samples: np.ndarray) -> np.ndarray:
        return np.asarray(self.fn(samples))


class Wav2Vec2AcousticModel(AcousticModel):
    """HuggingFace wav2vec2 CTC model (requires torch + transformers).

    The model's output vocabulary must match the VocabularyTable handed to
    the decoder.
    """

    name = "wav2vec2"

    def __init__(self, model_id: str, device: str = "cpu"):
        try:
            import torch
            from transformers import Wav2Vec2FeatureExtractor, Wav2Vec2ForCTC
        except ImportError as e:
            raise ImportError(
                "wav2vec2 backend requires 'torch' and 'transformers': "
                "pip install 'sayscore[wav2vec2]'"
            ) from e

        self._torch = torch
        self.model_id = model_id
        self.device = device
        logger.info(f"Loading wav2vec2 model {model_id} ({device})")
        self.feature_extractor = Wav2Vec2FeatureExtractor.from_pretrained(model_id)
        self.model = Wav2Vec2ForCTC.from_pretrained(model_id).to(device)
        self.model.eval()

    def infer(self, samples: np.ndarray) -> np.ndarray:
        inputs = self.feature_extractor(
            samples, sampling_rate=self.sample_rate, return_tensors="pt",
        ).input_values.to(self.device)
        with self._torch.no_grad():
            logits = self.model(inputs).logits
        return logits.cpu().numpy()


_BACKENDS = {
    "callable": CallableAcousticModel,
    "wav2vec2": Wav2Vec2AcousticModel,
}


def get_acoustic_model(name: str, **kwargs) -> AcousticModel:
    """Get an acoustic-model backend by name.

    Modes:
        "wav2vec2": transformers Wav2Vec2ForCTC; needs ``model_id``.
        "callable": wraps ``fn``, any callable from samples to logits.
    """
    if name not in _BACKENDS:
        raise ValueError(
            f"Unknown acoustic model: {name!r}. Available: {list(_BACKENDS.keys())}"
        )
    return _BACKENDS[name](**kwargs)
