"""Tier selection and fallback for transcript analysis.

Selection is evaluated once per call, in fixed precedence:

1. Local, when enabled. It always produces a result.
2. Remote, when enabled and a credential is present. Any provider error
   falls back to Local if enabled, otherwise to Mock.
3. Mock, a static exemplar, when nothing else is configured or reachable.

Fallback only ever moves down this list. analyze() never raises to its
caller, except for cancellation, which propagates without falling back.
"""

from __future__ import annotations

import asyncio
import logging

from voicenotes.config import AnalysisConfig
from voicenotes.lexicon import load_lexicon
from voicenotes.local import analyze_local
from voicenotes.models import (
    ActionItem,
    AnalysisOutcome,
    AnalysisResult,
    Priority,
    ProviderError,
    ProviderErrorKind,
    SourceTier,
)
from voicenotes.reminders import LoggingReminderSink, ReminderSink, derive_reminders
from voicenotes.remote import RemoteAdapter

logger = logging.getLogger(__name__)

MOCK_RESULT = AnalysisResult(
    title="Voice Recording",
    summary=(
        "This is a sample summary of the voice recording. The speaker discussed "
        "project updates, meeting schedules, and action items."
    ),
    one_liner="Project updates, meeting schedules and action items",
    keywords=["project", "meeting", "deadline", "client", "team", "documentation"],
    action_items=[
        ActionItem(task="Follow up with team about project deadline", priority=Priority.HIGH, category="Work"),
        ActionItem(task="Schedule meeting with client for next week", priority=Priority.MEDIUM, category="Work"),
        ActionItem(task="Review and update project documentation", priority=Priority.LOW, category="Work"),
    ],
    sentiment="neutral",
    topics=["Work"],
    insights="The recording shows organized planning with clear follow-up tasks.",
    source_tier=SourceTier.MOCK,
)

_FALLBACK_REASONS = {
    ProviderErrorKind.NETWORK: "provider unreachable",
    ProviderErrorKind.AUTH: "credential rejected, not retrying",
    ProviderErrorKind.MALFORMED: "unreadable provider response",
    ProviderErrorKind.UNAVAILABLE: "remote tier unavailable",
    ProviderErrorKind.UNKNOWN: "unexpected provider failure",
}


def mock_result() -> AnalysisResult:
    return MOCK_RESULT.model_copy(deep=True)


def _run_local(transcript: str, duration_ms: int, config: AnalysisConfig) -> AnalysisResult:
    try:
        return analyze_local(
            transcript,
            duration_ms,
            lexicon=load_lexicon(config.lexicon_path),
            one_liner_max_chars=config.one_liner_max_chars,
        )
    except Exception:
        logger.exception("Local analysis failed, using mock result")
        return mock_result()


def _fall_back(error: ProviderError, transcript: str, duration_ms: int,
               config: AnalysisConfig) -> AnalysisResult:
    target = SourceTier.LOCAL if config.local_enabled else SourceTier.MOCK
    logger.warning(
        f"Remote analysis failed ({_FALLBACK_REASONS[error.kind]}: {error.message}); "
        f"falling back to {target.value}"
    )
    if target == SourceTier.LOCAL:
        return _run_local(transcript, duration_ms, config)
    return mock_result()


async def _select_and_run(transcript: str, duration_ms: int, config: AnalysisConfig,
                          adapter: RemoteAdapter | None) -> AnalysisResult:
    if config.local_enabled:
        logger.debug("Using local analysis")
        return _run_local(transcript, duration_ms, config)

    if config.remote_available:
        logger.debug(f"Using remote analysis via {config.remote_provider.value}")
        adapter = adapter or RemoteAdapter(config)
        try:
            outcome = await adapter.analyze(transcript, duration_ms)
        except Exception as e:
            logger.exception("Remote adapter raised instead of returning an error")
            outcome = ProviderError(kind=ProviderErrorKind.UNKNOWN, message=str(e))

        if isinstance(outcome, AnalysisResult):
            return outcome
        return _fall_back(outcome, transcript, duration_ms, config)

    if config.remote_enabled:
        logger.info("Remote analysis enabled but no credential configured, using mock result")
    else:
        logger.debug("No analysis tier configured, using mock result")
    return mock_result()


def _deliver(sink: ReminderSink, reminders) -> None:
    try:
        sink.schedule(reminders)
    except Exception as e:
        logger.warning(f"Reminder hand-off failed: {e}")


def _hand_off(reminders, sink: ReminderSink | None) -> None:
    """Pass reminders to the sink on a worker thread without waiting for it."""
    if not reminders:
        return
    sink = sink or LoggingReminderSink()
    asyncio.get_running_loop().run_in_executor(None, _deliver, sink, list(reminders))


async def analyze(
    transcript: str,
    duration_ms: int = 0,
    config: AnalysisConfig | None = None,
    *,
    adapter: RemoteAdapter | None = None,
    reminder_sink: ReminderSink | None = None,
) -> AnalysisOutcome:
    """
    Analyze a transcript with the best available tier.

    Args:
        transcript: Transcript text, may be empty
        duration_ms: Recording length in milliseconds, 0 when unknown
        config: Tier configuration; local-only defaults when omitted
        adapter: Remote adapter to use instead of one built from config
        reminder_sink: Receives reminder requests; they are logged when omitted

    Returns:
        AnalysisOutcome with the result (tagged with its source tier) and
        the reminder requests derived from its action items
    """
    config = config or AnalysisConfig()
    transcript = transcript or ""

    result = await _select_and_run(transcript, duration_ms, config, adapter)
    reminders = derive_reminders(result.action_items)
    _hand_off(reminders, reminder_sink)

    if config.verbose:
        logger.info(
            f"Analysis produced by {result.source_tier.value} tier: "
            f"{len(result.keywords)} keywords, {len(result.action_items)} action items"
        )
    return AnalysisOutcome(result=result, reminders=reminders)


def analyze_sync(
    transcript: str,
    duration_ms: int = 0,
    config: AnalysisConfig | None = None,
    **kwargs,
) -> AnalysisOutcome:
    """Blocking wrapper around analyze() for callers without an event loop."""
    return asyncio.run(analyze(transcript, duration_ms, config, **kwargs))
