"""Token id <-> token string table for the CTC acoustic model."""

import json
from pathlib import Path
from types import MappingProxyType

from sayscore.config import BLANK_TOKEN, RESERVED_TOKENS
from sayscore.errors import VocabularyError

# Output vocabulary of the children's wav2vec2 phoneme model.
# 0 is the word boundary, 41 unknown, 42 the CTC blank/pad.
_CHILD_PHONEME_VOCAB: dict[int, str] = {
    0: "|",
    1: "I", 2: "ow", 3: "b", 4: "d", 5: "j", 6: "ay", 7: "f", 8: "h",
    9: "ee", 10: "y", 11: "k", 12: "l", 13: "m", 14: "n", 15: "oh",
    16: "p", 17: "s", 18: "t", 19: "ch", 20: "oo", 21: "v", 22: "w",
    23: "z", 24: "a", 25: "bth", 26: "ng", 27: "o", 28: "oau", 29: "oi",
    30: "aw", 31: "or", 32: "e", 33: "g", 34: "i", 35: "r", 36: "sh",
    37: "uoh", 38: "u", 39: "E", 40: "th",
    41: "[UNK]",
    42: "[PAD]",
}


class VocabularyTable:
    """Read-only mapping from contiguous token ids ``0..size-1`` to tokens."""

    def __init__(self, tokens: dict[int, str], reserved: frozenset[str] = RESERVED_TOKENS):
        if not tokens:
            raise VocabularyError("Vocabulary is empty")
        expected = set(range(len(tokens)))
        if set(tokens) != expected:
            missing = sorted(expected - set(tokens))
            raise VocabularyError(
                f"Vocabulary ids must be contiguous from 0; missing {missing[:5]}"
            )
        self._tokens = MappingProxyType(dict(tokens))
        self.reserved = frozenset(reserved)

    @classmethod
    def from_json(cls, path: str | Path, **kwargs) -> "VocabularyTable":
        """Load a HuggingFace-style ``vocab.json`` (``{token: id}``)."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise VocabularyError(f"Invalid vocabulary JSON in {path}: {e}") from e
        if not isinstance(data, dict):
            raise VocabularyError(f"Vocabulary JSON in {path} must be an object")

        tokens: dict[int, str] = {}
        for token, token_id in data.items():
            if not isinstance(token_id, int) or token_id < 0:
                raise VocabularyError(f"Invalid id {token_id!r} for token {token!r}")
            if token_id in tokens:
                raise VocabularyError(
                    f"Duplicate id {token_id} for {tokens[token_id]!r} and {token!r}"
                )
            tokens[token_id] = token
        return cls(tokens, **kwargs)

    def __len__(self) -> int:
        return len(self._tokens)

    def __getitem__(self, token_id: int) -> str:
        return self._tokens[token_id]

    def __contains__(self, token_id: object) -> bool:
        return token_id in self._tokens

    def id_of(self, token: str) -> int:
        for token_id, t in self._tokens.items():
            if t == token:
                return token_id
        raise KeyError(token)

    @property
    def blank_id(self) -> int:
        """Id of the ``[PAD]`` token, which doubles as the CTC blank."""
        return self.id_of(BLANK_TOKEN)

    def is_reserved(self, token: str) -> bool:
        return token in self.reserved

    def tokens(self) -> list[str]:
        return [self._tokens[i] for i in range(len(self._tokens))]


DEFAULT_VOCABULARY = VocabularyTable(_CHILD_PHONEME_VOCAB)
