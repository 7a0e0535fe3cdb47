"""Tests for the result models."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from voicenotes.models import (
    ActionItem,
    AnalysisOutcome,
    AnalysisResult,
    Priority,
    ReminderRequest,
    SourceTier,
    SpeakingPatterns,
)


@pytest.fixture
def result():
    return AnalysisResult(
        title="Quick Note",
        summary="Buy milk.",
        keywords=["milk"],
        action_items=[ActionItem(task="Buy milk", priority=Priority.LOW, category="Shopping")],
        speaking_patterns=SpeakingPatterns(words_per_minute=120),
        source_tier=SourceTier.LOCAL,
    )


class TestImmutability:
    """Results cannot be reassigned once built."""

    def test_result_fields(self, result):
        with pytest.raises(ValidationError):
            result.title = "Changed"

    def test_action_item_fields(self, result):
        with pytest.raises(ValidationError):
            result.action_items[0].priority = Priority.URGENT

    def test_speaking_patterns_fields(self, result):
        with pytest.raises(ValidationError):
            result.speaking_patterns.words_per_minute = 0

    def test_reminder_and_outcome(self, result):
        reminder = ReminderRequest(task_text="Buy milk", delay=timedelta(hours=72))
        outcome = AnalysisOutcome(result=result, reminders=[reminder])
        with pytest.raises(ValidationError):
            reminder.delay = timedelta(hours=1)
        with pytest.raises(ValidationError):
            outcome.result = result

    def test_copy_with_update(self, result):
        """Verify model_copy still produces changed variants."""
        changed = result.model_copy(update={"title": "Voice Memo"})
        assert changed.title == "Voice Memo"
        assert result.title == "Quick Note"


class TestDefaults:

    def test_action_item_defaults(self):
        item = ActionItem(task="Do it")
        assert item.priority == Priority.MEDIUM
        assert item.category == "General"
        assert item.due_date is None

    def test_speaking_patterns_reject_negative(self):
        with pytest.raises(ValidationError):
            SpeakingPatterns(words_per_minute=-1)
