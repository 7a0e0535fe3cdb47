"""Extractive summaries, one-line headlines and titles."""

from __future__ import annotations

from enum import Enum

from voicenotes.keywords import PLACEHOLDER_KEYWORD, extract_keywords
from voicenotes.lexicon import Lexicon, load_lexicon
from voicenotes.text import iter_sentences

NO_CONTENT = "No content to summarize"
ELLIPSIS = "..."
DEFAULT_ONE_LINER_CHARS = 80
SUMMARY_KEYWORDS = 5
MAX_SUMMARY_SENTENCES = 2
HEADLINE_KEYWORDS = 3
LENGTH_BONUS = 2

QUICK_NOTE_WORDS = 10
MEMO_WORDS = 30


class SummaryMode(str, Enum):
    STANDARD = "standard"
    ONE_LINER = "one_liner"


def truncate(text: str, max_chars: int = DEFAULT_ONE_LINER_CHARS) -> str:
    """Cut text to max_chars, ending in an ellipsis when shortened."""
    if len(text) <= max_chars:
        return text
    return text[: max(0, max_chars - len(ELLIPSIS))] + ELLIPSIS


def _score(sentence: str, keywords: list[str]) -> int:
    lower = sentence.lower()
    return sum(1 for keyword in keywords if keyword.lower() in lower)


def _as_sentence(text: str) -> str:
    return text + "."


def _standard(transcript: str, sentences: list[str], keywords: list[str]) -> str:
    if not sentences:
        return transcript.strip()

    top = keywords[:SUMMARY_KEYWORDS]
    scored = [(i, s, _score(s, top)) for i, s in enumerate(sentences)]
    ranked = sorted((entry for entry in scored if entry[2] > 0), key=lambda entry: -entry[2])
    chosen = sorted(ranked[:MAX_SUMMARY_SENTENCES])
    if not chosen:
        return _as_sentence(sentences[0])
    return " ".join(_as_sentence(s) for _, s, _ in chosen)


def _one_liner(transcript: str, sentences: list[str], keywords: list[str], max_chars: int) -> str:
    if sentences:
        first = sentences[0]
        if len(first) <= max_chars:
            return first

        def score(sentence: str) -> int:
            bonus = LENGTH_BONUS if len(sentence) <= max_chars else 0
            return _score(sentence, keywords) + bonus

        return truncate(max(sentences, key=score), max_chars)

    if keywords:
        return truncate("Note about " + ", ".join(keywords[:HEADLINE_KEYWORDS]), max_chars)

    return truncate(transcript.strip(), max_chars)


def summarize(
    transcript: str,
    mode: SummaryMode = SummaryMode.STANDARD,
    keywords: list[str] | None = None,
    max_chars: int = DEFAULT_ONE_LINER_CHARS,
    lexicon: Lexicon | None = None,
) -> str:
    """
    Build an extractive summary from the transcript's own sentences.

    Args:
        transcript: Raw transcript text
        mode: STANDARD picks up to two keyword-rich sentences,
            ONE_LINER picks a single headline of about max_chars
        keywords: Ranked keywords; extracted from the transcript when omitted
        max_chars: Target headline length for ONE_LINER
        lexicon: Word tables used when keywords must be extracted

    Returns:
        Summary text; "No content to summarize" for an empty transcript
    """
    transcript = transcript or ""
    if not transcript.strip():
        return NO_CONTENT

    if keywords is None:
        keywords = extract_keywords(transcript, lexicon)
    keywords = [k for k in keywords if k != PLACEHOLDER_KEYWORD]
    sentences = list(iter_sentences(transcript))

    if mode == SummaryMode.ONE_LINER:
        return _one_liner(transcript, sentences, keywords, max_chars)
    return _standard(transcript, sentences, keywords)


def generate_title(transcript: str, lexicon: Lexicon | None = None) -> str:
    """Pick a short title from the transcript's length and content cues."""
    lexicon = lexicon or load_lexicon()
    transcript = transcript or ""
    word_count = len(transcript.split())
    if word_count < QUICK_NOTE_WORDS:
        return "Quick Note"
    if word_count < MEMO_WORDS:
        return "Voice Memo"

    lower = transcript.lower()
    for cue, title in lexicon.title_rules:
        if cue in lower:
            return title
    return "Voice Recording"
