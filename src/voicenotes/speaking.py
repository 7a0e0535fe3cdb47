"""Speech-delivery metrics estimated from a transcript and its duration."""

import re

from voicenotes.models import SpeakingPatterns

_PAUSE_SPLIT_RE = re.compile(r"[.!?]")

# Share of the recording assumed to be silence between sentences
PAUSE_SHARE = 0.1

CONFIDENCE_BUCKETS = (
    (180, "High (Fast speaker)"),
    (120, "Medium (Normal pace)"),
    (80, "Medium (Thoughtful pace)"),
)
LOWEST_CONFIDENCE = "Low (Slow/hesitant)"


def confidence_label(words_per_minute: int) -> str:
    for threshold, label in CONFIDENCE_BUCKETS:
        if words_per_minute > threshold:
            return label
    return LOWEST_CONFIDENCE


def analyze_speaking_patterns(transcript: str, duration_ms: int = 0) -> SpeakingPatterns:
    """Estimate pace and pauses.

    Pauses are approximated from sentence boundaries, not measured from audio.
    A duration of zero means unknown and yields zero words per minute.
    """
    transcript = transcript or ""
    duration_ms = max(0, int(duration_ms or 0))
    word_count = len(transcript.split())

    minutes = duration_ms / 60000
    words_per_minute = round(word_count / minutes) if minutes > 0 else 0

    sentences = [s for s in _PAUSE_SPLIT_RE.split(transcript) if s.strip()]
    pause_count = max(0, len(sentences) - 1)
    average_pause = duration_ms * PAUSE_SHARE / pause_count if pause_count > 0 else 0.0

    return SpeakingPatterns(
        words_per_minute=words_per_minute,
        pause_count=pause_count,
        average_pause_length=average_pause,
        total_speaking_time_ms=duration_ms,
        confidence_label=confidence_label(words_per_minute),
    )
