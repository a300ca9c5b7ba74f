"""In-memory RIFF/WAVE codec for the canonical 44-byte PCM header layout."""

import io
import struct

import numpy as np
import scipy.io.wavfile as wavfile

from sayscore.config import PCM16_SCALE
from sayscore.errors import AudioFormatError, UnsupportedBitDepthError
from sayscore.types import AudioBuffer

HEADER_SIZE = 44

# Fixed header offsets
_CHANNELS_OFFSET = 22
_SAMPLE_RATE_OFFSET = 24
_BITS_OFFSET = 34


def encode_wav(samples: np.ndarray, channels: int, sample_rate: int) -> bytes:
    """Encode float samples as a 16-bit little-endian PCM WAV byte string.

    Samples are clamped to [-1, 1] and scaled to the full int16 range.
    ``samples`` is interleaved when ``channels > 1``.
    """
    data = np.clip(np.asarray(samples, dtype=np.float64), -1.0, 1.0)
    pcm = np.clip(np.round(data * PCM16_SCALE), -32768, 32767).astype("<i2")
    if channels > 1:
        n_frames = len(pcm) // channels
        pcm = pcm[: n_frames * channels].reshape(n_frames, channels)

    out = io.BytesIO()
    wavfile.write(out, sample_rate, pcm)
    return out.getvalue()


def read_header(wav_bytes: bytes) -> tuple[int, int, int]:
    """Return (channels, sample_rate, bits_per_sample) from the fixed offsets."""
    if len(wav_bytes) < HEADER_SIZE:
        raise AudioFormatError(
            f"WAV data is {len(wav_bytes)} bytes, shorter than the {HEADER_SIZE}-byte header"
        )
    if wav_bytes[0:4] != b"RIFF" or wav_bytes[8:12] != b"WAVE":
        raise AudioFormatError("Missing RIFF/WAVE signature")
    (channels,) = struct.unpack_from("<h", wav_bytes, _CHANNELS_OFFSET)
    (sample_rate,) = struct.unpack_from("<i", wav_bytes, _SAMPLE_RATE_OFFSET)
    (bits,) = struct.unpack_from("<h", wav_bytes, _BITS_OFFSET)
    if channels < 1:
        raise AudioFormatError(f"Invalid channel count: {channels}")
    if sample_rate <= 0:
        raise AudioFormatError(f"Invalid sample rate: {sample_rate}")
    return channels, sample_rate, bits


def decode_wav(wav_bytes: bytes) -> AudioBuffer:
    """Decode a canonical PCM WAV byte string into float samples.

    16-bit data is scaled by 1/32768; 32-bit data is read as IEEE float.
    Any other bit depth raises UnsupportedBitDepthError and no samples are
    returned.
    """
    channels, sample_rate, bits = read_header(wav_bytes)
    payload = memoryview(wav_bytes)[HEADER_SIZE:]

    if bits == 16:
        usable = len(payload) - len(payload) % 2
        raw = np.frombuffer(payload[:usable], dtype="<i2")
        samples = raw.astype(np.float64) / PCM16_SCALE
    elif bits == 32:
        usable = len(payload) - len(payload) % 4
        samples = np.frombuffer(payload[:usable], dtype="<f4").astype(np.float64)
    else:
        raise UnsupportedBitDepthError(bits)

    return AudioBuffer(samples=samples, sample_rate=sample_rate, channels=channels)
