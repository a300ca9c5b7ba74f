"""Exceptions for sayscore.

Input absence (empty text, unknown words, empty token sequences) is never an
error. These exceptions cover data whose shape makes a scoring call
impossible; the orchestrator turns them into a failed Evaluation.
"""


class SayScoreError(Exception):
    """Base exception for sayscore errors."""

    pass


class AudioFormatError(SayScoreError):
    """Exception raised for malformed or unsupported WAV data."""

    pass


class UnsupportedBitDepthError(AudioFormatError):
    """Exception raised when a WAV uses a bit depth other than 16 or 32."""

    def __init__(self, bits_per_sample: int):
        super().__init__(f"Unsupported bits per sample: {bits_per_sample}")
        self.bits_per_sample = bits_per_sample


class DecodingError(SayScoreError):
    """Exception raised when acoustic-model output cannot be decoded."""

    pass


class VocabularyMismatchError(DecodingError):
    """Exception raised when the logit width differs from the vocabulary size."""

    def __init__(self, logit_width: int, vocab_size: int):
        super().__init__(
            f"Logit vocabulary dimension {logit_width} does not match "
            f"vocabulary size {vocab_size}"
        )
        self.logit_width = logit_width
        self.vocab_size = vocab_size


class VocabularyError(SayScoreError):
    """Exception raised for an invalid vocabulary table."""

    pass
