"""Command-line entry point: analyze a transcript file and print JSON."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from voicenotes.config import PROVIDER_KEY_VARS, load_config
from voicenotes.models import ProviderId
from voicenotes.orchestrator import analyze_sync
from voicenotes.reminders import LoggingReminderSink, WebhookReminderSink


def read_transcript(path: str | None) -> str:
    """Read a transcript from a text file, or from stdin when path is None or "-".

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    if path is None or path == "-":
        return sys.stdin.read()

    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return file_path.read_text(encoding="utf-8")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="voicenotes", description="Analyze a voice-note transcript"
    )
    parser.add_argument("file", nargs="?", help="Transcript text file (stdin if omitted)")
    parser.add_argument("--duration-ms", type=int, default=0, help="Recording length in ms")
    parser.add_argument("--local", dest="local", action="store_true", default=None,
                        help="Enable the rule-based local tier")
    parser.add_argument("--no-local", dest="local", action="store_false",
                        help="Disable the local tier")
    parser.add_argument("--remote", action="store_true", default=None,
                        help="Enable the remote provider tier")
    parser.add_argument("--provider", choices=[p.value for p in ProviderId],
                        help="Remote provider")
    parser.add_argument("--one-liner-max", type=int, help="Headline length target")
    parser.add_argument("--webhook", action="store_true",
                        help="Send reminders to REMINDER_ENDPOINT instead of logging them")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config()

    if args.local is not None:
        config.local_enabled = args.local
    if args.remote:
        config.remote_enabled = True
    if args.provider:
        config.remote_provider = ProviderId(args.provider)
        if not os.getenv("REMOTE_API_KEY"):
            config.credential = os.getenv(PROVIDER_KEY_VARS[config.remote_provider]) or None
    if args.one_liner_max:
        config.one_liner_max_chars = args.one_liner_max
    config.verbose = config.verbose or args.verbose

    logging.basicConfig(
        level=logging.INFO if config.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        transcript = read_transcript(args.file)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sink = WebhookReminderSink() if args.webhook else LoggingReminderSink()
    outcome = analyze_sync(transcript, args.duration_ms, config, reminder_sink=sink)
    print(outcome.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
