"""Configuration management for the transcript analyzer."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from voicenotes.models import ProviderId

logger = logging.getLogger(__name__)


# Built-in defaults
DEFAULT_SYSTEM_PROMPT = """You are an AI assistant that analyzes voice recordings and provides
structured summaries. Be accurate and concise. Only report tasks, topics and keywords that
the speaker actually mentions."""

DEFAULT_ANALYSIS_PROMPT = """Please analyze the following voice recording transcript.

TRANSCRIPT:
"{transcript}"

Respond with ONLY a JSON object in the following structure:
{schema}

Focus on being accurate, concise, and extracting actionable information."""

ANALYSIS_SCHEMA = """{
    "summary": "A concise 2-3 sentence summary of the main content",
    "action_items": ["List of specific action items or tasks mentioned"],
    "keywords": ["Key terms and topics discussed"],
    "sentiment": "positive/negative/neutral",
    "topics": ["Main topics or categories discussed"],
    "insights": "Any notable patterns, insights, or observations"
}"""

# Provider-specific credential variables, consulted when REMOTE_API_KEY is unset
PROVIDER_KEY_VARS = {
    ProviderId.OPENAI: "OPENAI_API_KEY",
    ProviderId.ANTHROPIC: "ANTHROPIC_API_KEY",
    ProviderId.GOOGLE: "GOOGLE_API_KEY",
    ProviderId.GATEWAY: "GATEWAY_API_KEY",
}


def _resolve_prompt(env_var_name: str, default: str) -> str:
    """
    Resolve a prompt value from environment variable.

    If env var is set to a file path that exists, read its contents.
    Otherwise use the string value directly.
    If unset, use the provided default.
    """
    value = os.getenv(env_var_name)
    if value is None:
        return default

    path = Path(value).expanduser()
    if path.exists() and path.is_file():
        return path.read_text()

    return value


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """Parse boolean from environment variable."""
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def _parse_number(env_var_name: str, default, cast):
    """Parse a numeric env var, keeping the default on garbage."""
    value = os.getenv(env_var_name)
    if value is None or not value.strip():
        return default
    try:
        return cast(value)
    except ValueError:
        logger.warning(f"Ignoring invalid {env_var_name}={value!r}, using {default}")
        return default


@dataclass
class AnalysisConfig:
    """Which tiers may run and how the remote provider is reached."""

    local_enabled: bool = True
    remote_enabled: bool = False
    remote_provider: ProviderId = ProviderId.OPENAI
    credential: str | None = None
    request_timeout: float = 60.0
    remote_model: str = ""
    gateway_url: str = "http://localhost:8800/v1"
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    analysis_prompt: str = DEFAULT_ANALYSIS_PROMPT
    one_liner_max_chars: int = 80
    lexicon_path: str = ""
    verbose: bool = False

    @property
    def remote_available(self) -> bool:
        """Remote runs only when it is enabled and a credential is present."""
        return self.remote_enabled and bool(self.credential)


def load_config() -> AnalysisConfig:
    """
    Load configuration from environment variables and .env file.

    Returns:
        AnalysisConfig instance with all settings loaded.
    """
    load_dotenv()

    remote_enabled = _parse_bool(os.getenv("REMOTE_AI_ENABLED"))
    provider_name = os.getenv("REMOTE_PROVIDER", ProviderId.OPENAI.value).strip().lower()
    try:
        provider = ProviderId(provider_name)
    except ValueError:
        logger.warning(f"Unknown REMOTE_PROVIDER {provider_name!r}, remote analysis disabled")
        provider = ProviderId.OPENAI
        remote_enabled = False

    credential = os.getenv("REMOTE_API_KEY") or os.getenv(PROVIDER_KEY_VARS[provider]) or None

    config = AnalysisConfig(
        local_enabled=_parse_bool(os.getenv("LOCAL_AI_ENABLED"), default=True),
        remote_enabled=remote_enabled,
        remote_provider=provider,
        credential=credential,
        request_timeout=_parse_number("REQUEST_TIMEOUT", 60.0, float),
        remote_model=os.getenv("REMOTE_MODEL", ""),
        gateway_url=os.getenv("GATEWAY_URL", "http://localhost:8800/v1"),
        one_liner_max_chars=_parse_number("ONE_LINER_MAX_CHARS", 80, int),
        lexicon_path=os.getenv("LEXICON_PATH", ""),
        verbose=_parse_bool(os.getenv("VERBOSE")),
    )

    config.system_prompt = _resolve_prompt("SYSTEM_PROMPT", DEFAULT_SYSTEM_PROMPT)
    config.analysis_prompt = _resolve_prompt("ANALYSIS_PROMPT", DEFAULT_ANALYSIS_PROMPT)

    return config
