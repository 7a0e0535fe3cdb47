"""Pydantic models for transcript analysis results."""

from datetime import timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Priority(str, Enum):
    """How soon an action item needs attention."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


class SourceTier(str, Enum):
    """Which analysis tier produced a result."""

    LOCAL = "Local"
    REMOTE = "Remote"
    MOCK = "Mock"


class ProviderId(str, Enum):
    """Remote text-understanding providers."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    GATEWAY = "gateway"


class ProviderErrorKind(str, Enum):
    NETWORK = "Network"
    AUTH = "Auth"
    MALFORMED = "Malformed"
    UNAVAILABLE = "Unavailable"
    UNKNOWN = "Unknown"


class ProviderError(BaseModel):
    """A typed failure returned by the remote adapter instead of a result."""

    model_config = ConfigDict(frozen=True)

    kind: ProviderErrorKind
    message: str = ""


class ActionItem(BaseModel):
    """Something the speaker needs to do."""

    model_config = ConfigDict(frozen=True)

    task: str = Field(description="What to do")
    priority: Priority = Field(default=Priority.MEDIUM)
    category: str = Field(default="General", description="Work|Personal|Health|Shopping|...")
    due_date: str | None = Field(default=None, description="When, as spoken")


class SpeakingPatterns(BaseModel):
    """Delivery metrics estimated from the transcript and its duration."""

    model_config = ConfigDict(frozen=True)

    words_per_minute: int = Field(default=0, ge=0)
    pause_count: int = Field(default=0, ge=0)
    average_pause_length: float = Field(default=0.0, ge=0)
    total_speaking_time_ms: int = Field(default=0, ge=0)
    confidence_label: str = ""


class AnalysisResult(BaseModel):
    """The complete analysis of one transcript."""

    model_config = ConfigDict(frozen=True)

    title: str
    summary: str
    one_liner: str = ""
    keywords: list[str] = Field(default_factory=list)
    action_items: list[ActionItem] = Field(default_factory=list)
    speaking_patterns: SpeakingPatterns | None = None
    sentiment: str = "neutral"
    topics: list[str] = Field(default_factory=list)
    entities: dict[str, list[str]] = Field(default_factory=dict)
    insights: str = ""
    source_tier: SourceTier


class ReminderRequest(BaseModel):
    """A reminder for the notification collaborator to schedule."""

    model_config = ConfigDict(frozen=True)

    task_text: str
    delay: timedelta


class AnalysisOutcome(BaseModel):
    """What the orchestrator hands back: the result and its reminders."""

    model_config = ConfigDict(frozen=True)

    result: AnalysisResult
    reminders: list[ReminderRequest] = Field(default_factory=list)
