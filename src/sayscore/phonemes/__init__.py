"""Phoneme tokens: CTC vocabulary, greedy decoding and the pronunciation dictionary."""

from sayscore.phonemes.ctc import CTCDecoder, greedy_decode
from sayscore.phonemes.dictionary import ARPABET_TO_TOKEN, PronunciationDictionary
from sayscore.phonemes.vocabulary import DEFAULT_VOCABULARY, VocabularyTable

__all__ = [
    "ARPABET_TO_TOKEN",
    "CTCDecoder",
    "DEFAULT_VOCABULARY",
    "PronunciationDictionary",
    "VocabularyTable",
    "greedy_decode",
]
