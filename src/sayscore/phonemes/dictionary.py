"""CMUdict-format pronunciation dictionary and ARPABET -> phoneme token mapping."""

import logging
from pathlib import Path
from types import MappingProxyType

from sayscore.config import DICT_COLUMN_SEPARATOR, DICT_COMMENT_MARKER, dictionary_path

logger = logging.getLogger(__name__)

# Stress-stripped ARPABET -> token of the reduced vocabulary the acoustic
# model emits. ZH has no counterpart and is dropped.
ARPABET_TO_TOKEN: dict[str, str] = {
    # Consonants
    "B":  "b",
    "CH": "ch",
    "D":  "d",
    "DH": "th",
    "F":  "f",
    "G":  "g",
    "HH": "h",
    "JH": "j",
    "K":  "k",
    "L":  "l",
    "M":  "m",
    "N":  "n",
    "NG": "ng",
    "P":  "p",
    "R":  "r",
    "S":  "s",
    "SH": "sh",
    "T":  "t",
    "TH": "th",
    "V":  "v",
    "W":  "w",
    "Y":  "y",
    "Z":  "z",
    # Vowels
    "AA": "a",
    "AE": "e",
    "AH": "u",
    "AO": "aw",
    "AW": "oau",
    "AY": "ay",
    "EH": "e",
    "ER": "or",
    "EY": "ay",
    "IH": "i",
    "IY": "ee",
    "OW": "oh",
    "OY": "oi",
    "UH": "uoh",
    "UW": "oo",
}


def strip_stress(code: str) -> str:
    """Keep only the letters of an ARPABET code ("AE1" -> "AE")."""
    return "".join(ch for ch in code if ch.isalpha())


def parse_line(line: str) -> tuple[str, list[str]] | None:
    """Parse one ``WORD  PH1 PH2 ...`` line, or return None to skip it."""
    if not line.strip() or line.startswith(DICT_COMMENT_MARKER):
        return None
    parts = line.split(DICT_COLUMN_SEPARATOR, 1)
    if len(parts) < 2:
        return None
    word = parts[0].strip().lower()
    if not word:
        return None
    codes = [strip_stress(p) for p in parts[1].strip().split(" ")]
    return word, [c for c in codes if c]


def to_phoneme_tokens(codes: list[str]) -> list[str]:
    """Map ARPABET codes to vocabulary tokens, silently dropping unmapped codes."""
    return [ARPABET_TO_TOKEN[c] for c in codes if c in ARPABET_TO_TOKEN]


class PronunciationDictionary:
    """Load-once, read-many word -> ARPABET table.

    Safe to share across threads once constructed; nothing mutates it.
    """

    def __init__(self, entries: dict[str, list[str]] | None = None):
        frozen = {w: tuple(codes) for w, codes in (entries or {}).items()}
        self._entries = MappingProxyType(frozen)

    @classmethod
    def load(cls, text: str) -> "PronunciationDictionary":
        """Parse dictionary text. Comments and malformed lines are skipped."""
        entries: dict[str, list[str]] = {}
        skipped = 0
        for lineno, line in enumerate(text.splitlines(), start=1):
            if not line.strip() or line.startswith(DICT_COMMENT_MARKER):
                continue
            parsed = parse_line(line)
            if parsed is None:
                skipped += 1
                logger.debug(f"Skipping malformed dictionary line {lineno}: {line!r}")
                continue
            word, codes = parsed
            entries[word] = codes  # later duplicates win
        logger.info(f"Loaded {len(entries)} pronunciations ({skipped} malformed lines skipped)")
        return cls(entries)

    @classmethod
    def from_file(cls, path: str | Path) -> "PronunciationDictionary":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        # CMUdict releases are mostly ASCII with a few latin-1 entries
        return cls.load(path.read_text(encoding="utf-8", errors="replace"))

    @classmethod
    def default(cls) -> "PronunciationDictionary":
        """The bundled starter dictionary, or the file named by SAYSCORE_DICT."""
        return cls.from_file(dictionary_path())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.lower().strip() in self._entries

    def words(self) -> list[str]:
        return sorted(self._entries)

    def lookup(self, word: str | None) -> list[str] | None:
        """Exact, case-insensitive lookup. None when the word is unknown."""
        if word is None:
            return None
        codes = self._entries.get(word.lower().strip())
        return list(codes) if codes is not None else None

    def to_phoneme_tokens(self, codes: list[str]) -> list[str]:
        return to_phoneme_tokens(codes)

    def word_to_phoneme_tokens(self, word: str | None) -> list[str]:
        """Tokens for ``word``; empty for unknown words, never an exception."""
        codes = self.lookup(word)
        if codes is None:
            return []
        return to_phoneme_tokens(codes)
