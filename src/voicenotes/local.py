"""Rule-based local analysis: no network, no model, fully deterministic."""

from voicenotes.actions import extract_action_items
from voicenotes.classify import classify_sentiment, classify_topics
from voicenotes.keywords import extract_entities, extract_keywords
from voicenotes.lexicon import Lexicon, load_lexicon
from voicenotes.models import AnalysisResult, SourceTier
from voicenotes.speaking import analyze_speaking_patterns
from voicenotes.summarize import DEFAULT_ONE_LINER_CHARS, SummaryMode, generate_title, summarize
from voicenotes.text import normalize

READING_WORDS_PER_MINUTE = 200


def describe(word_count: int, topics: list[str]) -> str:
    """One-line observation about length and focus of a note."""
    if word_count == 0:
        return "Empty recording."
    reading_minutes = max(1, word_count // READING_WORDS_PER_MINUTE)
    return f"{word_count} words, about {reading_minutes} min to read; mostly {topics[0]}."


def analyze_local(
    transcript: str,
    duration_ms: int = 0,
    *,
    lexicon: Lexicon | None = None,
    one_liner_max_chars: int = DEFAULT_ONE_LINER_CHARS,
) -> AnalysisResult:
    """Analyze a transcript with the rule-based pipeline.

    Args:
        transcript: Raw transcript text, may be empty
        duration_ms: Recording length in milliseconds, 0 when unknown
        lexicon: Word tables; the bundled lexicon when omitted
        one_liner_max_chars: Target length of the one-line headline

    Returns:
        AnalysisResult tagged with the Local tier
    """
    lexicon = lexicon or load_lexicon()
    text = normalize(transcript)

    keywords = extract_keywords(text.raw, lexicon)
    topics = classify_topics(keywords, lexicon)
    tokens = list(text.tokens())

    return AnalysisResult(
        title=generate_title(text.raw, lexicon),
        summary=summarize(text.raw, SummaryMode.STANDARD, keywords),
        one_liner=summarize(text.raw, SummaryMode.ONE_LINER, keywords, one_liner_max_chars),
        keywords=keywords,
        action_items=extract_action_items(text.raw, lexicon),
        speaking_patterns=analyze_speaking_patterns(text.raw, duration_ms),
        sentiment=classify_sentiment(tokens, lexicon),
        topics=topics,
        entities=extract_entities(text.raw, lexicon),
        insights=describe(len(tokens), topics),
        source_tier=SourceTier.LOCAL,
    )
