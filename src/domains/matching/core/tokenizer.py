"""Whitespace tokenization with character-offset to word-index mapping."""

from __future__ import annotations

import re
from bisect import bisect_left
from dataclasses import dataclass

_TOKEN_PATTERN = re.compile(r"\S+")


@dataclass(frozen=True)
class TokenizedText:
    """Word view of a text, built once per document and shared across configurations.

    ``starts[i]`` is the character offset where word ``i`` begins.
    """

    text: str
    words: tuple[str, ...]
    starts: tuple[int, ...]

    def __len__(self) -> int:
        return len(self.words)

    def word_index_at(self, position: int) -> int:
        """Number of words that begin before ``position``.

        Equal to ``len(text[:position].split())``.
        """
        return bisect_left(self.starts, position)

    def words_before(self, index: int, count: int) -> list[str]:
        """Up to ``count`` words immediately preceding word ``index``."""
        return list(self.words[max(0, index - count) : index])

    def words_after(self, index: int, count: int) -> list[str]:
        """Up to ``count`` words starting at word ``index``."""
        return list(self.words[index : index + count])


def tokenize(text: str) -> TokenizedText:
    """Split text on runs of whitespace, recording each word's start offset."""
    words: list[str] = []
    starts: list[int] = []
    for match in _TOKEN_PATTERN.finditer(text):
        words.append(match.group())
        starts.append(match.start())
    return TokenizedText(text=text, words=tuple(words), starts=tuple(starts))
