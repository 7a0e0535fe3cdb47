"""Tests for the rule-based local analyzer."""

import pytest

from voicenotes.keywords import MAX_KEYWORDS, PLACEHOLDER_KEYWORD
from voicenotes.local import analyze_local, describe
from voicenotes.models import Priority, SourceTier
from voicenotes.summarize import NO_CONTENT

EXAMPLE = "I need to call John about the meeting tomorrow and don't forget to buy milk."


class TestAnalyzeLocal:
    """Tests for analyze_local function."""

    def test_example_transcript(self):
        result = analyze_local(EXAMPLE, 5000)

        assert result.source_tier == SourceTier.LOCAL
        assert {"call", "meeting", "buy"} <= set(result.keywords)
        assert "Work" in result.topics
        priorities = {item.priority for item in result.action_items}
        assert Priority.HIGH in priorities
        assert Priority.MEDIUM in priorities
        assert result.summary == EXAMPLE
        assert result.entities["PERSON"] == ["John"]
        assert result.sentiment == "neutral"
        assert result.title == "Voice Memo"
        assert result.insights == "12 words, about 1 min to read; mostly Work."

    def test_empty_transcript(self):
        """Verify an empty transcript still yields a complete result."""
        result = analyze_local("", 0)

        assert result.keywords == [PLACEHOLDER_KEYWORD]
        assert result.action_items == []
        assert result.summary == NO_CONTENT
        assert result.one_liner == NO_CONTENT
        assert result.sentiment == "neutral"
        assert result.topics == ["General"]
        assert result.title == "Quick Note"
        assert result.insights == "Empty recording."
        assert result.speaking_patterns.words_per_minute == 0

    def test_zero_duration_lowest_confidence(self):
        result = analyze_local(EXAMPLE, 0)
        assert result.speaking_patterns.words_per_minute == 0
        assert result.speaking_patterns.confidence_label == "Low (Slow/hesitant)"

    def test_deterministic(self):
        first = analyze_local(EXAMPLE, 5000)
        second = analyze_local(EXAMPLE, 5000)
        assert first.model_dump_json() == second.model_dump_json()

    def test_one_liner_limit(self):
        result = analyze_local(EXAMPLE, one_liner_max_chars=20)
        assert len(result.one_liner) <= 20
        assert result.one_liner.endswith("...")

    @pytest.mark.parametrize(
        "transcript",
        [
            "",
            "?!...",
            "Okay.",
            EXAMPLE,
            "Urgent! Call the bank asap. Must email Sarah. Should buy bread. Need to schedule the dentist.",
            "Lorem ipsum dolor sit amet " * 40,
        ],
    )
    def test_bounds(self, transcript):
        result = analyze_local(transcript)
        assert 1 <= len(result.keywords) <= MAX_KEYWORDS
        assert len(result.action_items) <= 3


class TestDescribe:

    def test_empty(self):
        assert describe(0, ["General"]) == "Empty recording."

    def test_long_note(self):
        assert describe(450, ["Work"]) == "450 words, about 2 min to read; mostly Work."
