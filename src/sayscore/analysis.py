"""Audio normalization: downmix, resample, peak-normalize, plus WAV file I/O.

All transforms operate on numpy arrays (float64, nominally in [-1, 1]) and
are total: any finite array, including an empty one, is accepted.
"""

import logging
from pathlib import Path

import numpy as np

from sayscore.config import EXPECTED_SAMPLE_RATE
from sayscore.types import AudioBuffer
from sayscore.wav import decode_wav, encode_wav

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Transforms
# ---------------------------------------------------------------------------

def downmix_to_mono(samples: np.ndarray, channels: int) -> np.ndarray:
    """Average interleaved channels into one mono channel.

    Mono input is returned unchanged. A trailing partial frame is dropped,
    so the output length is ``len(samples) // channels``.
    """
    if channels <= 1:
        return samples
    samples = np.asarray(samples, dtype=np.float64)
    n_frames = len(samples) // channels
    frames = samples[: n_frames * channels].reshape(n_frames, channels)
    return frames.sum(axis=1) / channels


def resample(samples: np.ndarray, from_rate: int, to_rate: int) -> np.ndarray:
    """Linear-interpolation resampling.

    Output sample ``i`` reads fractional source index ``i * from_rate / to_rate``
    and interpolates between its floor and ceiling neighbours, clamping to
    the last sample at the end of the buffer.
    """
    if from_rate == to_rate:
        return samples
    samples = np.asarray(samples, dtype=np.float64)
    if len(samples) == 0:
        return samples

    ratio = from_rate / to_rate
    n_out = int(round(len(samples) / ratio))
    src_idx = np.arange(n_out) * ratio
    # np.interp holds the right edge value past the last index
    return np.interp(src_idx, np.arange(len(samples)), samples)


def peak_normalize(samples: np.ndarray) -> np.ndarray:
    """Scale so the loudest sample has magnitude 1. Silence is untouched."""
    if len(samples) == 0:
        return samples
    samples = np.asarray(samples, dtype=np.float64)
    peak = np.max(np.abs(samples))
    if peak > 0:
        return samples / peak
    return samples


def prepare_for_model(
    buffer: AudioBuffer,
    target_rate: int = EXPECTED_SAMPLE_RATE,
    normalize: bool = True,
) -> np.ndarray:
    """Downmix, resample and (optionally) peak-normalize for inference."""
    mono = downmix_to_mono(buffer.samples, buffer.channels)
    mono = resample(mono, buffer.sample_rate, target_rate)
    if normalize:
        mono = peak_normalize(mono)
    logger.debug(
        f"Prepared {buffer.duration:.2f}s of audio: {buffer.channels}ch "
        f"{buffer.sample_rate}Hz -> {len(mono)} mono samples @ {target_rate}Hz"
    )
    return np.asarray(mono, dtype=np.float32)


# ---------------------------------------------------------------------------
# WAV I/O
# ---------------------------------------------------------------------------

def read_wav(path: str | Path) -> AudioBuffer:
    """Read a canonical 16- or 32-bit PCM WAV file.

    Raises:
        FileNotFoundError: if the file does not exist.
        AudioFormatError: if the header declares an unsupported bit depth.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return decode_wav(path.read_bytes())


def write_wav(path: str | Path, buffer: AudioBuffer) -> None:
    """Write a buffer as 16-bit PCM WAV, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(encode_wav(buffer.samples, buffer.channels, buffer.sample_rate))
