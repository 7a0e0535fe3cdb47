"""Loading of the shared word tables used by the rule-based analyzer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from voicenotes.models import Priority

logger = logging.getLogger(__name__)

BUNDLED_LEXICON = Path(__file__).parent / "lexicon.yaml"


@dataclass(frozen=True)
class FallbackAction:
    trigger: str
    task: str
    priority: Priority
    category: str


@dataclass(frozen=True)
class Lexicon:
    """Read-only word tables. Tuple order is evaluation order."""

    version: str
    contextual_keywords: tuple[tuple[str, tuple[str, ...]], ...]
    action_keywords: tuple[tuple[str, tuple[str, ...]], ...]
    gazetteer: tuple[str, ...]
    first_names: frozenset[str]
    honorifics: frozenset[str]
    organization_suffixes: tuple[str, ...]
    location_prepositions: frozenset[str]
    stopwords: frozenset[str]
    common_words: frozenset[str]
    capitalized_ignore: frozenset[str]
    action_triggers: tuple[tuple[str, Priority], ...]
    categories: tuple[tuple[str, tuple[str, ...]], ...]
    fallback_actions: tuple[FallbackAction, ...]
    item_priority_rules: tuple[tuple[str, Priority], ...]
    due_date_hints: tuple[str, ...]
    positive_words: frozenset[str]
    negative_words: frozenset[str]
    topics: tuple[tuple[str, tuple[str, ...]], ...]
    title_rules: tuple[tuple[str, str], ...]


def _table(data: dict[str, Any], key: str) -> tuple[tuple[str, tuple[str, ...]], ...]:
    mapping = data.get(key) or {}
    return tuple((str(name), tuple(str(t) for t in triggers)) for name, triggers in mapping.items())


def _words(data: dict[str, Any], key: str, lower: bool = True) -> frozenset[str]:
    return frozenset(str(w).lower() if lower else str(w) for w in data.get(key) or [])


def _pairs(data: dict[str, Any], key: str) -> tuple[tuple[str, str], ...]:
    return tuple((str(a), str(b)) for a, b in data.get(key) or [])


def parse_lexicon(data: dict[str, Any]) -> Lexicon:
    """Build a Lexicon from a parsed YAML document.

    Raises:
        ValueError: If a priority name is not one of Low/Medium/High/Urgent.
    """
    return Lexicon(
        version=str(data.get("version", "")),
        contextual_keywords=_table(data, "contextual_keywords"),
        action_keywords=_table(data, "action_keywords"),
        gazetteer=tuple(str(w).lower() for w in data.get("gazetteer") or []),
        first_names=_words(data, "first_names", lower=False),
        honorifics=_words(data, "honorifics"),
        organization_suffixes=tuple(str(s) for s in data.get("organization_suffixes") or []),
        location_prepositions=_words(data, "location_prepositions"),
        stopwords=_words(data, "stopwords"),
        common_words=_words(data, "common_words"),
        capitalized_ignore=_words(data, "capitalized_ignore"),
        action_triggers=tuple(
            (phrase, Priority(priority)) for phrase, priority in _pairs(data, "action_triggers")
        ),
        categories=_table(data, "categories"),
        fallback_actions=tuple(
            FallbackAction(
                trigger=str(rule["trigger"]),
                task=str(rule["task"]),
                priority=Priority(rule.get("priority", Priority.MEDIUM.value)),
                category=str(rule.get("category", "General")),
            )
            for rule in data.get("fallback_actions") or []
        ),
        item_priority_rules=tuple(
            (cue, Priority(priority)) for cue, priority in _pairs(data, "item_priority_rules")
        ),
        due_date_hints=tuple(str(h).lower() for h in data.get("due_date_hints") or []),
        positive_words=_words(data, "positive_words"),
        negative_words=_words(data, "negative_words"),
        topics=_table(data, "topics"),
        title_rules=_pairs(data, "title_rules"),
    )


def _read(path: Path) -> Lexicon:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Lexicon {path} is not a mapping")
    return parse_lexicon(data)


@lru_cache(maxsize=None)
def load_lexicon(path: str = "") -> Lexicon:
    """
    Load the word tables, once per path.

    Args:
        path: Optional YAML file overriding the bundled lexicon

    Returns:
        Lexicon instance. A custom path that is missing or malformed
        falls back to the bundled lexicon with a warning.
    """
    if path:
        custom = Path(path).expanduser()
        if not custom.exists():
            logger.warning(f"Lexicon file not found: {path}, using bundled lexicon")
        else:
            try:
                return _read(custom)
            except (yaml.YAMLError, ValueError, KeyError, TypeError) as e:
                logger.warning(f"Error loading lexicon from {path}: {e}, using bundled lexicon")

    return _read(BUNDLED_LEXICON)
