"""Pattern-based action item extraction with priority and category rules."""

from __future__ import annotations

from voicenotes.lexicon import Lexicon, load_lexicon
from voicenotes.models import ActionItem, Priority

MAX_ACTION_ITEMS = 3
CONTEXT_BEFORE = 20
CONTEXT_AFTER = 40
DEFAULT_CATEGORY = "General"


def categorize(text: str, lexicon: Lexicon | None = None) -> str:
    """Return the first category whose cue word appears in the text."""
    lexicon = lexicon or load_lexicon()
    lower = text.lower()
    for category, cues in lexicon.categories:
        if any(cue in lower for cue in cues):
            return category
    return DEFAULT_CATEGORY


def find_due_date(text: str, lexicon: Lexicon) -> str | None:
    lower = text.lower()
    for hint in lexicon.due_date_hints:
        if hint in lower:
            return hint
    return None


def _context_window(transcript: str, start: int, end: int) -> str:
    lo = max(0, start - CONTEXT_BEFORE)
    hi = min(len(transcript), end + CONTEXT_AFTER)
    return transcript[lo:hi].strip()


def extract_action_items(transcript: str, lexicon: Lexicon | None = None) -> list[ActionItem]:
    """Extract at most three action items from a transcript.

    Triggers are checked in their declared order, so stronger phrases such as
    "don't forget" or "urgent" outrank softer ones when the list is cut.
    When nothing matches, one generic item may be built from a coarse cue.

    Args:
        transcript: Raw transcript text
        lexicon: Word tables; the bundled lexicon when omitted

    Returns:
        List of ActionItem, possibly empty
    """
    lexicon = lexicon or load_lexicon()
    transcript = transcript or ""
    lower = transcript.lower()
    category = categorize(transcript, lexicon)

    items: list[ActionItem] = []
    for phrase, priority in lexicon.action_triggers:
        index = lower.find(phrase)
        if index == -1:
            continue
        task = _context_window(transcript, index, index + len(phrase))
        if not task:
            continue
        items.append(
            ActionItem(
                task=task,
                priority=priority,
                category=category,
                due_date=find_due_date(task, lexicon),
            )
        )

    if not items:
        for rule in lexicon.fallback_actions:
            if rule.trigger in lower:
                items.append(
                    ActionItem(task=rule.task, priority=rule.priority, category=rule.category)
                )
                break

    return items[:MAX_ACTION_ITEMS]


def determine_priority(text: str, lexicon: Lexicon | None = None) -> Priority:
    lexicon = lexicon or load_lexicon()
    lower = text.lower()
    for cue, priority in lexicon.item_priority_rules:
        if cue in lower:
            return priority
    return Priority.LOW


def item_from_text(text: str, lexicon: Lexicon | None = None) -> ActionItem:
    """Classify a free-text action item, e.g. one written by a remote provider."""
    lexicon = lexicon or load_lexicon()
    task = text.strip()
    return ActionItem(
        task=task,
        priority=determine_priority(task, lexicon),
        category=categorize(task, lexicon),
        due_date=find_due_date(task, lexicon),
    )
