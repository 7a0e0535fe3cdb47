"""Reminder requests for action items and their hand-off to a notifier."""

from __future__ import annotations

import logging
import os
from datetime import timedelta
from typing import Protocol

import requests

from voicenotes.models import ActionItem, Priority, ReminderRequest

logger = logging.getLogger(__name__)

REMINDER_DELAYS = {
    Priority.URGENT: timedelta(hours=1),
    Priority.HIGH: timedelta(hours=4),
    Priority.MEDIUM: timedelta(hours=24),
    Priority.LOW: timedelta(hours=72),
}


def derive_reminders(action_items: list[ActionItem]) -> list[ReminderRequest]:
    """One reminder per action item, delayed according to its priority."""
    return [
        ReminderRequest(task_text=item.task, delay=REMINDER_DELAYS[item.priority])
        for item in action_items
    ]


class ReminderSink(Protocol):
    """Anything that can take reminder requests off our hands."""

    def schedule(self, reminders: list[ReminderRequest]) -> object: ...


class LoggingReminderSink:
    """Default sink: records the requests in the log and nothing else."""

    def schedule(self, reminders: list[ReminderRequest]) -> None:
        for reminder in reminders:
            logger.info(f"Reminder in {reminder.delay}: {reminder.task_text}")


class WebhookReminderSink:
    """POST reminders to a notification service.

    Reads REMINDER_ENDPOINT and REMINDER_API_KEY from the environment unless
    given explicitly. Does nothing if not configured.
    """

    def __init__(self, endpoint: str | None = None, api_key: str | None = None, timeout: float = 10):
        self.endpoint = (endpoint if endpoint is not None else os.getenv("REMINDER_ENDPOINT", "")).rstrip("/")
        self.api_key = api_key if api_key is not None else os.getenv("REMINDER_API_KEY", "")
        self.timeout = timeout

    def schedule(self, reminders: list[ReminderRequest]) -> dict:
        if not self.endpoint or not self.api_key:
            logger.debug("Reminder endpoint not configured, skipping hand-off")
            return {"status": "skipped", "reason": "not configured"}

        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}
        url = f"{self.endpoint}/reminders"
        sent = 0
        errors = 0

        for reminder in reminders:
            payload = {
                "task": reminder.task_text,
                "delay_seconds": int(reminder.delay.total_seconds()),
                "source": "voicenotes",
            }
            try:
                resp = requests.post(url, headers=headers, json=payload, timeout=self.timeout)
                resp.raise_for_status()
                sent += 1
            except Exception as e:
                logger.warning("Failed to hand off reminder: %s", e)
                errors += 1

        return {"status": "complete", "sent": sent, "errors": errors}
