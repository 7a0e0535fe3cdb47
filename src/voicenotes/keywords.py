"""Keyword and entity extraction for transcripts.

Keywords come from four independent strategies that are merged in a fixed
order: contextual cues, action verbs, known entities, then plain word
frequency to fill whatever room is left.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable, Iterator

from voicenotes.lexicon import Lexicon, load_lexicon
from voicenotes.text import NormalizedText, normalize

PLACEHOLDER_KEYWORD = "Voice note"
MAX_KEYWORDS = 8

CONTEXTUAL_LIMIT = 3
ACTION_LIMIT = 2
ENTITY_LIMIT = 3
FREQUENCY_TARGET = 5
FREQUENCY_MINIMUM = 2
MIN_FREQUENCY_WORD_LENGTH = 4

_NON_ALPHA_RE = re.compile(r"[^A-Za-z]")
_APOSTROPHE_RE = re.compile(r"['’]")


def dedupe(words: Iterable[str]) -> list[str]:
    """Drop case-insensitive repeats, keeping the first spelling seen."""
    seen = set()
    kept = []
    for word in words:
        key = word.lower()
        if key not in seen:
            seen.add(key)
            kept.append(word)
    return kept


def _bare_word(piece: str) -> str:
    """Letters of a word before any apostrophe: "John's" -> "John", "I'll" -> "I"."""
    return _NON_ALPHA_RE.sub("", _APOSTROPHE_RE.split(piece, maxsplit=1)[0])


def _matching(table, lower_text: str) -> list[str]:
    return [name for name, triggers in table if any(t in lower_text for t in triggers)]


def contextual_keywords(text: NormalizedText, lexicon: Lexicon) -> list[str]:
    return _matching(lexicon.contextual_keywords, text.lower)


def action_keywords(text: NormalizedText, lexicon: Lexicon) -> list[str]:
    return _matching(lexicon.action_keywords, text.lower)


def _is_plain_word(word: str, lexicon: Lexicon) -> bool:
    lowered = word.lower()
    return (
        lowered in lexicon.stopwords
        or lowered in lexicon.common_words
        or lowered in lexicon.capitalized_ignore
    )


def _capitalized_words(raw: str, lexicon: Lexicon) -> Iterator[str]:
    for piece in raw.split():
        word = _bare_word(piece)
        if len(word) > 2 and word[0].isupper() and not _is_plain_word(word, lexicon):
            yield word


def entity_keywords(text: NormalizedText, lexicon: Lexicon) -> list[str]:
    """Gazetteer hits in table order, then proper-noun-like words in text order."""
    found = [entry for entry in lexicon.gazetteer if entry in text.lower]
    found.extend(_capitalized_words(text.raw, lexicon))
    return dedupe(found)


def frequency_keywords(text: NormalizedText, lexicon: Lexicon) -> list[str]:
    """Content words by descending count; ties keep first-occurrence order."""
    counts = Counter(
        token
        for token in text.tokens()
        if len(token) >= MIN_FREQUENCY_WORD_LENGTH
        and token not in lexicon.stopwords
        and token not in lexicon.common_words
    )
    return sorted(counts, key=lambda word: -counts[word])


def extract_keywords(transcript: str, lexicon: Lexicon | None = None) -> list[str]:
    """Extract up to eight distinct keywords, never returning an empty list.

    Args:
        transcript: Raw transcript text
        lexicon: Word tables; the bundled lexicon when omitted

    Returns:
        Keywords in strategy order (contextual, action, entity, frequency)
    """
    lexicon = lexicon or load_lexicon()
    text = normalize(transcript)

    merged = dedupe(
        contextual_keywords(text, lexicon)[:CONTEXTUAL_LIMIT]
        + action_keywords(text, lexicon)[:ACTION_LIMIT]
        + entity_keywords(text, lexicon)[:ENTITY_LIMIT]
    )

    room = MAX_KEYWORDS - len(merged)
    if room > 0:
        taken = {word.lower() for word in merged}
        candidates = [w for w in frequency_keywords(text, lexicon) if w not in taken]
        wanted = max(FREQUENCY_MINIMUM, FREQUENCY_TARGET - len(merged))
        merged.extend(candidates[: min(room, wanted)])

    return merged[:MAX_KEYWORDS] or [PLACEHOLDER_KEYWORD]


def extract_entities(transcript: str, lexicon: Lexicon | None = None) -> dict[str, list[str]]:
    """Find people, organizations and locations with capitalization rules.

    A capitalized word is a PERSON after an honorific or when it is a known
    first name, an ORGANIZATION when it carries a company suffix, and a
    LOCATION after a place preposition.
    """
    lexicon = lexicon or load_lexicon()
    people: list[str] = []
    organizations: list[str] = []
    locations: list[str] = []

    words = (transcript or "").split()
    for i, piece in enumerate(words):
        word = _bare_word(piece)
        if len(word) <= 2 or not word[0].isupper():
            continue

        previous = _bare_word(words[i - 1]).lower() if i > 0 else ""
        if previous in lexicon.honorifics:
            people.append(word)
        elif word.endswith(lexicon.organization_suffixes):
            organizations.append(word)
        elif previous in lexicon.location_prepositions:
            locations.append(word)
        elif word in lexicon.first_names:
            people.append(word)

    return {
        "PERSON": dedupe(people),
        "ORGANIZATION": dedupe(organizations),
        "LOCATION": dedupe(locations),
    }
