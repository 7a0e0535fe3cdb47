"""Tests for the voicenotes command-line entry point."""

import io
import json
from unittest.mock import patch

import pytest

from voicenotes.cli import build_parser, main, read_transcript

EXAMPLE = "I need to call John about the meeting tomorrow and don't forget to buy milk."


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in [
        "LOCAL_AI_ENABLED",
        "REMOTE_AI_ENABLED",
        "REMOTE_PROVIDER",
        "REMOTE_API_KEY",
        "OPENAI_API_KEY",
        "ANTHROPIC_API_KEY",
        "GOOGLE_API_KEY",
        "GATEWAY_API_KEY",
        "ONE_LINER_MAX_CHARS",
        "LEXICON_PATH",
        "VERBOSE",
    ]:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def transcript_file(tmp_path):
    path = tmp_path / "note.txt"
    path.write_text(EXAMPLE)
    return path


class TestReadTranscript:

    def test_reads_file(self, transcript_file):
        assert read_transcript(str(transcript_file)) == EXAMPLE

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="File not found"):
            read_transcript(str(tmp_path / "nope.txt"))

    def test_dash_reads_stdin(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("from stdin"))
        assert read_transcript("-") == "from stdin"


class TestBuildParser:

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.file is None
        assert args.duration_ms == 0
        assert args.local is None
        assert args.remote is None
        assert args.webhook is False

    def test_no_local(self):
        assert build_parser().parse_args(["--no-local"]).local is False

    def test_rejects_unknown_provider(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--provider", "carrier-pigeon"])


class TestMain:
    """Tests for main function."""

    def test_prints_local_outcome(self, transcript_file, capsys):
        code = main([str(transcript_file), "--duration-ms", "5000"])

        assert code == 0
        outcome = json.loads(capsys.readouterr().out)
        assert outcome["result"]["source_tier"] == "Local"
        assert "call" in outcome["result"]["keywords"]
        assert len(outcome["reminders"]) == len(outcome["result"]["action_items"])

    def test_missing_file_returns_1(self, tmp_path, capsys):
        code = main([str(tmp_path / "missing.txt")])
        assert code == 1
        assert "Error:" in capsys.readouterr().err

    def test_no_local_without_remote_gives_mock(self, transcript_file, capsys):
        main([str(transcript_file), "--no-local"])
        outcome = json.loads(capsys.readouterr().out)
        assert outcome["result"]["source_tier"] == "Mock"

    def test_remote_without_key_gives_mock(self, transcript_file, capsys):
        main([str(transcript_file), "--no-local", "--remote", "--provider", "google"])
        outcome = json.loads(capsys.readouterr().out)
        assert outcome["result"]["source_tier"] == "Mock"

    def test_provider_switch_picks_provider_key(self, transcript_file, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "google-key")
        with patch("voicenotes.cli.analyze_sync") as mock_analyze:
            mock_analyze.return_value.model_dump_json.return_value = "{}"
            main([str(transcript_file), "--no-local", "--remote", "--provider", "google"])

        config = mock_analyze.call_args.args[2]
        assert config.remote_provider.value == "google"
        assert config.credential == "google-key"
        assert config.remote_available is True

    def test_reads_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(EXAMPLE))
        assert main([]) == 0
        outcome = json.loads(capsys.readouterr().out)
        assert outcome["result"]["summary"] == EXAMPLE
