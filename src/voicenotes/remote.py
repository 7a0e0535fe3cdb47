"""Remote LLM analysis with typed failures instead of exceptions."""

from __future__ import annotations

import asyncio
import json
import logging

import httpx
import openai
from pydantic import BaseModel, ValidationError, ValidationInfo, field_validator

from voicenotes.actions import MAX_ACTION_ITEMS, item_from_text
from voicenotes.classify import GENERAL_TOPIC
from voicenotes.config import ANALYSIS_SCHEMA, AnalysisConfig
from voicenotes.keywords import MAX_KEYWORDS, PLACEHOLDER_KEYWORD, dedupe, extract_entities
from voicenotes.lexicon import Lexicon, load_lexicon
from voicenotes.models import (
    AnalysisResult,
    ProviderError,
    ProviderErrorKind,
    ProviderId,
    SourceTier,
)
from voicenotes.speaking import analyze_speaking_patterns
from voicenotes.summarize import SummaryMode, generate_title, summarize

logger = logging.getLogger(__name__)

ANTHROPIC_API_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
GOOGLE_AI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

DEFAULT_MODELS = {
    ProviderId.OPENAI: "gpt-4o-mini",
    ProviderId.ANTHROPIC: "claude-3-haiku-20240307",
    ProviderId.GOOGLE: "gemini-1.5-flash",
    ProviderId.GATEWAY: "qwen3-4b",
}

MAX_TOKENS = 1000
AUTH_STATUS_CODES = (401, 403)


class MalformedResponse(ValueError):
    """The provider answered, but not with anything we can read."""


# --- Response parsing ---


class RemoteAnalysis(BaseModel):
    """The JSON document the provider is asked to return.

    Every field has a safe default so a partially well-formed answer is
    recovered field by field.
    """

    summary: str = "Summary not available"
    action_items: list[str] = []
    keywords: list[str] = []
    sentiment: str = "neutral"
    topics: list[str] = []
    insights: str = "No specific insights available"

    @field_validator("summary", "sentiment", "insights", mode="before")
    @classmethod
    def _text_or_default(cls, value, info: ValidationInfo):
        if isinstance(value, str) and value.strip():
            text = value.strip()
            return text.lower() if info.field_name == "sentiment" else text
        return cls.model_fields[info.field_name].default

    @field_validator("action_items", "keywords", "topics", mode="before")
    @classmethod
    def _strings_or_empty(cls, value):
        if not isinstance(value, list):
            return []
        items = []
        for entry in value:
            if isinstance(entry, dict):
                entry = entry.get("task") or entry.get("description") or entry.get("text") or ""
            if isinstance(entry, (str, int, float)) and str(entry).strip():
                items.append(str(entry).strip())
        return items


def extract_json_object(text: str) -> str:
    """Return the span from the first "{" to the last "}" in a response.

    Providers often wrap the JSON in prose or code fences.

    Raises:
        MalformedResponse: If the text holds no such span
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        raise MalformedResponse("No JSON object in provider response")
    return text[start : end + 1]


def parse_remote_response(text: str) -> RemoteAnalysis:
    """Parse the provider's answer, filling in defaults for missing fields.

    Raises:
        MalformedResponse: If no JSON object can be parsed at all
    """
    try:
        data = json.loads(extract_json_object(text or ""))
    except json.JSONDecodeError as e:
        raise MalformedResponse(f"Invalid JSON in provider response: {e}") from e
    if not isinstance(data, dict):
        raise MalformedResponse("Provider response is not a JSON object")
    return RemoteAnalysis(**data)


# --- Backends ---


class OpenAIBackend:
    """Chat completions through the openai SDK (OpenAI or an OpenAI-compatible gateway)."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        timeout: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.client = openai.AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )
        self.model = model
        self._owns_client = http_client is None

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            max_tokens=MAX_TOKENS,
        )
        try:
            content = response.choices[0].message.content
        except (IndexError, AttributeError, TypeError) as e:
            raise MalformedResponse(f"Unreadable completion: {e}") from e
        if not content:
            raise MalformedResponse("Empty completion")
        return content

    async def close(self) -> None:
        if self._owns_client:
            await self.client.close()


class _HttpBackend:
    """Shared plumbing for providers reached over plain HTTP."""

    def __init__(self, api_key: str, model: str, timeout: float = 60.0,
                 http_client: httpx.AsyncClient | None = None):
        self.api_key = api_key
        self.model = model
        self.client = http_client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = http_client is None

    async def _post(self, url: str, headers: dict, payload: dict) -> dict:
        response = await self.client.post(url, headers=headers, json=payload)
        response.raise_for_status()
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponse(f"Provider returned non-JSON body: {e}") from e

    async def close(self) -> None:
        if self._owns_client:
            await self.client.aclose()


class AnthropicBackend(_HttpBackend):
    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        body = await self._post(
            ANTHROPIC_API_URL,
            headers={"x-api-key": self.api_key, "anthropic-version": ANTHROPIC_VERSION},
            payload={
                "model": self.model,
                "max_tokens": MAX_TOKENS,
                "system": system_prompt,
                "messages": [{"role": "user", "content": user_prompt}],
            },
        )
        try:
            return body["content"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise MalformedResponse(f"Unreadable Anthropic response: {e!r}") from e


class GoogleBackend(_HttpBackend):
    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        body = await self._post(
            GOOGLE_AI_URL.format(model=self.model),
            headers={"x-goog-api-key": self.api_key},
            payload={
                "systemInstruction": {"parts": [{"text": system_prompt}]},
                "contents": [{"role": "user", "parts": [{"text": user_prompt}]}],
            },
        )
        try:
            return body["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise MalformedResponse(f"Unreadable Google response: {e!r}") from e


def get_backend(config: AnalysisConfig, http_client: httpx.AsyncClient | None = None):
    """Build the backend for the configured provider.

    Args:
        config: Configuration with provider, credential and timeout
        http_client: Optional client to send requests through

    Returns:
        Backend exposing async generate() and close()
    """
    provider = config.remote_provider
    model = config.remote_model or DEFAULT_MODELS[provider]
    api_key = config.credential or ""

    if provider == ProviderId.ANTHROPIC:
        return AnthropicBackend(api_key, model, config.request_timeout, http_client)
    if provider == ProviderId.GOOGLE:
        return GoogleBackend(api_key, model, config.request_timeout, http_client)

    base_url = config.gateway_url if provider == ProviderId.GATEWAY else None
    return OpenAIBackend(api_key, model, base_url, config.request_timeout, http_client)


# --- Error classification ---


def _status_error(status_code: int, message: str) -> ProviderError:
    if status_code in AUTH_STATUS_CODES:
        return ProviderError(kind=ProviderErrorKind.AUTH, message=message)
    return ProviderError(kind=ProviderErrorKind.UNKNOWN, message=message)


def classify_error(exc: Exception) -> ProviderError:
    """Map a failure from the request or its parsing onto ProviderError."""
    if isinstance(exc, (asyncio.TimeoutError, openai.APITimeoutError, httpx.TimeoutException)):
        return ProviderError(kind=ProviderErrorKind.NETWORK, message="Request timed out")
    if isinstance(exc, (openai.APIConnectionError, httpx.TransportError)):
        return ProviderError(kind=ProviderErrorKind.NETWORK, message=f"Network error: {exc}")
    if isinstance(exc, openai.APIStatusError):
        return _status_error(exc.status_code, f"Provider error: HTTP {exc.status_code}")
    if isinstance(exc, httpx.HTTPStatusError):
        code = exc.response.status_code
        return _status_error(code, f"Provider error: HTTP {code}")
    if isinstance(exc, (MalformedResponse, ValidationError, openai.APIResponseValidationError)):
        return ProviderError(kind=ProviderErrorKind.MALFORMED, message=str(exc))
    return ProviderError(kind=ProviderErrorKind.UNKNOWN, message=f"{type(exc).__name__}: {exc}")


# --- Adapter ---


class RemoteAdapter:
    """One provider request per call, mapped into an AnalysisResult."""

    def __init__(
        self,
        config: AnalysisConfig,
        http_client: httpx.AsyncClient | None = None,
        lexicon: Lexicon | None = None,
    ):
        self.config = config
        self.http_client = http_client
        self.lexicon = lexicon or load_lexicon(config.lexicon_path)

    def build_prompt(self, transcript: str) -> str:
        return self.config.analysis_prompt.format(schema=ANALYSIS_SCHEMA, transcript=transcript)

    def to_result(self, analysis: RemoteAnalysis, transcript: str, duration_ms: int = 0) -> AnalysisResult:
        keywords = dedupe(analysis.keywords)[:MAX_KEYWORDS] or [PLACEHOLDER_KEYWORD]
        action_items = [item_from_text(text, self.lexicon) for text in analysis.action_items]
        return AnalysisResult(
            title=generate_title(transcript, self.lexicon),
            summary=analysis.summary,
            one_liner=summarize(
                transcript, SummaryMode.ONE_LINER, keywords, self.config.one_liner_max_chars
            ),
            keywords=keywords,
            action_items=action_items[:MAX_ACTION_ITEMS],
            speaking_patterns=analyze_speaking_patterns(transcript, duration_ms),
            sentiment=analysis.sentiment,
            topics=analysis.topics or [GENERAL_TOPIC],
            entities=extract_entities(transcript, self.lexicon),
            insights=analysis.insights,
            source_tier=SourceTier.REMOTE,
        )

    async def analyze(self, transcript: str, duration_ms: int = 0) -> AnalysisResult | ProviderError:
        """Ask the configured provider to analyze the transcript.

        Returns:
            AnalysisResult on success, ProviderError describing the failure
            otherwise. Cancellation is not a failure and propagates.
        """
        if not self.config.credential:
            return ProviderError(
                kind=ProviderErrorKind.UNAVAILABLE, message="No credential configured"
            )

        transcript = transcript or ""
        backend = get_backend(self.config, self.http_client)
        try:
            prompt = self.build_prompt(transcript)
            text = await asyncio.wait_for(
                backend.generate(self.config.system_prompt, prompt),
                timeout=self.config.request_timeout or None,
            )
            analysis = parse_remote_response(text)
        except Exception as e:
            error = classify_error(e)
            logger.warning(
                f"{self.config.remote_provider.value} analysis failed "
                f"({error.kind.value}): {error.message}"
            )
            return error
        finally:
            await backend.close()

        if self.config.verbose:
            logger.info(f"{self.config.remote_provider.value} analysis succeeded")
        return self.to_result(analysis, transcript, duration_ms)
