"""Sentence splitting and tokenization of raw transcripts."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9\s]")

MIN_SENTENCE_LENGTH = 4
MIN_TOKEN_LENGTH = 3


def iter_sentences(text: str) -> Iterator[str]:
    """Yield trimmed sentences, skipping fragments of 3 characters or fewer."""
    for piece in _SENTENCE_SPLIT_RE.split(text):
        piece = piece.strip()
        if len(piece) >= MIN_SENTENCE_LENGTH:
            yield piece


def iter_tokens(text: str) -> Iterator[str]:
    """Yield lowercase alphanumeric tokens of 3 characters or more."""
    for token in _NON_ALNUM_RE.sub(" ", text.lower()).split():
        if len(token) >= MIN_TOKEN_LENGTH:
            yield token


@dataclass(frozen=True)
class NormalizedText:
    """A transcript with restartable sentence and token views."""

    raw: str

    @property
    def lower(self) -> str:
        return self.raw.lower()

    def sentences(self) -> Iterator[str]:
        return iter_sentences(self.raw)

    def tokens(self) -> Iterator[str]:
        return iter_tokens(self.raw)


def normalize(transcript: str) -> NormalizedText:
    return NormalizedText(transcript or "")
