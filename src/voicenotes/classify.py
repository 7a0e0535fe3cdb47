"""Lexicon-based sentiment and topic classification."""

from __future__ import annotations

from collections.abc import Iterable

from voicenotes.lexicon import Lexicon, load_lexicon

GENERAL_TOPIC = "General"


def classify_sentiment(tokens: Iterable[str], lexicon: Lexicon | None = None) -> str:
    """Return positive, negative or neutral; ties are neutral."""
    lexicon = lexicon or load_lexicon()
    positive = 0
    negative = 0
    for token in tokens:
        if token in lexicon.positive_words:
            positive += 1
        elif token in lexicon.negative_words:
            negative += 1

    if positive > negative:
        return "positive"
    if negative > positive:
        return "negative"
    return "neutral"


def classify_topics(keywords: Iterable[str], lexicon: Lexicon | None = None) -> list[str]:
    """Return every topic sharing at least one keyword, or ["General"]."""
    lexicon = lexicon or load_lexicon()
    lowered = {keyword.lower() for keyword in keywords}
    topics = [topic for topic, words in lexicon.topics if lowered.intersection(words)]
    return topics or [GENERAL_TOPIC]
