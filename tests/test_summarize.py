"""Tests for summaries, headlines and titles."""

from voicenotes.summarize import (
    NO_CONTENT,
    SummaryMode,
    generate_title,
    summarize,
    truncate,
)

BUDGET = "The budget is tight. We met the client today. The client wants a new budget."


class TestStandardSummary:
    """Tests for the two-sentence extractive summary."""

    def test_empty_transcript(self):
        assert summarize("") == NO_CONTENT
        assert summarize("   ") == NO_CONTENT

    def test_picks_best_sentences_in_original_order(self):
        """Verify the highest scoring sentences are kept in transcript order."""
        result = summarize(BUDGET, keywords=["budget", "client"])
        assert result == "The budget is tight. The client wants a new budget."

    def test_first_sentence_when_no_keyword_matches(self):
        assert summarize(BUDGET, keywords=["zebra"]) == "The budget is tight."

    def test_short_transcript_returned_as_is(self):
        assert summarize(" Hi ", keywords=[]) == "Hi"

    def test_extracts_keywords_when_omitted(self):
        transcript = "I need to call John about the meeting tomorrow and don't forget to buy milk."
        assert summarize(transcript) == transcript


class TestOneLiner:
    """Tests for the one-line headline."""

    def test_short_first_sentence(self):
        result = summarize("Call mom tonight. Then fix the sink.", SummaryMode.ONE_LINER, keywords=[])
        assert result == "Call mom tonight"

    def test_long_first_sentence_prefers_fitting_keyword_sentence(self):
        transcript = "This sentence " + "x" * 90 + ". Budget review is due Friday."
        result = summarize(transcript, SummaryMode.ONE_LINER, keywords=["budget"])
        assert result == "Budget review is due Friday"

    def test_truncates_when_nothing_fits(self):
        result = summarize("A" * 100, SummaryMode.ONE_LINER, keywords=[])
        assert result == "A" * 77 + "..."
        assert len(result) == 80

    def test_max_chars_is_configurable(self):
        result = summarize("Call mom tonight", SummaryMode.ONE_LINER, keywords=[], max_chars=10)
        assert result == "Call mo..."

    def test_keyword_headline_without_sentences(self):
        result = summarize("Hi!", SummaryMode.ONE_LINER, keywords=["milk", "eggs", "bread", "coffee"])
        assert result == "Note about milk, eggs, bread"

    def test_placeholder_keyword_ignored(self):
        assert summarize("Hi", SummaryMode.ONE_LINER, keywords=["Voice note"]) == "Hi"


class TestTruncate:

    def test_short_text_unchanged(self):
        assert truncate("short", 10) == "short"

    def test_long_text_ends_with_ellipsis(self):
        assert truncate("abcdefghijkl", 8) == "abcde..."


class TestGenerateTitle:

    def test_quick_note(self):
        assert generate_title("") == "Quick Note"
        assert generate_title("Buy milk") == "Quick Note"

    def test_voice_memo(self):
        assert generate_title(" ".join(["word"] * 15)) == "Voice Memo"

    def test_meeting_notes(self):
        assert generate_title(" ".join(["word"] * 29 + ["meeting"])) == "Meeting Notes"

    def test_ideas(self):
        assert generate_title(" ".join(["word"] * 29 + ["idea"])) == "Ideas & Thoughts"

    def test_default_long_title(self):
        assert generate_title(" ".join(["word"] * 30)) == "Voice Recording"
