"""Scoring pipeline: audio -> acoustic model -> CTC tokens -> similarity score."""

import asyncio
import inspect
import logging

import numpy as np

from sayscore.acoustic import AcousticModel
from sayscore.analysis import prepare_for_model
from sayscore.config import DEFAULT_CONFIG, ScoringConfig
from sayscore.errors import SayScoreError
from sayscore.phonemes.ctc import CTCDecoder
from sayscore.phonemes.dictionary import PronunciationDictionary
from sayscore.phonemes.vocabulary import DEFAULT_VOCABULARY, VocabularyTable
from sayscore.scoring.lexical import LexicalScorer
from sayscore.scoring.phoneme import PhonemeScorer
from sayscore.types import AudioBuffer, Evaluation
from sayscore.wav import decode_wav

logger = logging.getLogger(__name__)

FAILED_SCORE = -1.0


def _failure(target_word: str, error: Exception) -> Evaluation:
    logger.error(f"Could not evaluate '{target_word}': {error}")
    return Evaluation(
        target_word=target_word,
        status="error",
        score=FAILED_SCORE,
        error=str(error),
    )


class ScoringOrchestrator:
    """Runs one utterance through the full scoring pipeline.

    The dictionary and vocabulary are built once by the caller and passed in;
    the orchestrator holds no per-call state, so one instance can serve
    concurrent calls.
    """

    def __init__(
        self,
        model: AcousticModel,
        dictionary: PronunciationDictionary,
        vocab: VocabularyTable = DEFAULT_VOCABULARY,
        config: ScoringConfig = DEFAULT_CONFIG,
        normalize_audio: bool = True,
    ):
        self.model = model
        self.dictionary = dictionary
        self.decoder = CTCDecoder(vocab)
        self.phoneme_scorer = PhonemeScorer(config)
        self.lexical_scorer = LexicalScorer(config)
        self.normalize_audio = normalize_audio

    # --- stages ---

    def prepare(self, buffer: AudioBuffer) -> np.ndarray:
        return prepare_for_model(buffer, self.model.sample_rate, self.normalize_audio)

    def score_logits(self, logits: np.ndarray, target_word: str) -> Evaluation:
        """Decode logits and score them against the target word's phonemes.

        Decoding failures come back as a failed Evaluation (score -1).
        """
        try:
            predicted = self.decoder.decode(logits)
        except SayScoreError as e:
            return _failure(target_word, e)

        target_tokens = self.dictionary.word_to_phoneme_tokens(target_word)
        if not target_tokens:
            logger.warning(f"No pronunciation for '{target_word}', scoring 0")

        score, breakdown = self.phoneme_scorer.score(predicted, target_tokens)
        logger.info(
            f"'{target_word}': predicted [{' '.join(predicted)}] "
            f"target [{' '.join(target_tokens)}] -> {score:.1f}"
        )
        return Evaluation(
            target_word=target_word,
            status="ok",
            score=score,
            breakdown=breakdown,
            predicted_tokens=predicted,
            target_tokens=target_tokens,
        )

    # --- synchronous entry points ---

    def evaluate_audio(self, buffer: AudioBuffer, target_word: str) -> Evaluation:
        samples = self.prepare(buffer)
        logits = self.model.infer(samples)
        return self.score_logits(logits, target_word)

    def evaluate_wav(self, wav_bytes: bytes, target_word: str) -> Evaluation:
        try:
            buffer = decode_wav(wav_bytes)
        except SayScoreError as e:
            return _failure(target_word, e)
        return self.evaluate_audio(buffer, target_word)

    def evaluate_transcript(self, transcribed: str | None, target_word: str) -> Evaluation:
        """Lexical scoring of an already-transcribed word."""
        score, breakdown = self.lexical_scorer.score(transcribed, target_word)
        return Evaluation(
            target_word=target_word,
            status="ok",
            score=score,
            breakdown=breakdown,
        )

    # --- async entry points ---

    async def _infer_async(self, samples: np.ndarray) -> np.ndarray:
        infer = self.model.infer
        if inspect.iscoroutinefunction(infer):
            return await infer(samples)
        return await asyncio.to_thread(infer, samples)

    async def aevaluate_audio(self, buffer: AudioBuffer, target_word: str) -> Evaluation:
        """Like evaluate_audio, but awaits the model off the event loop.

        Decoding and scoring only start once the logits are available.
        """
        samples = self.prepare(buffer)
        logits = await self._infer_async(samples)
        return self.score_logits(logits, target_word)

    async def aevaluate_wav(self, wav_bytes: bytes, target_word: str) -> Evaluation:
        try:
            buffer = decode_wav(wav_bytes)
        except SayScoreError as e:
            return _failure(target_word, e)
        return await self.aevaluate_audio(buffer, target_word)
