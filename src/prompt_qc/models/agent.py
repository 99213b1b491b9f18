"""Pydantic models for records owned by the external agent service."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

PromptStatus = Literal["draft", "review", "approved", "published", "rejected", "failed"]
PROMPT_STATUSES: tuple[str, ...] = (
    "draft", "review", "approved", "published", "rejected", "failed",
)


class Agent(BaseModel):
    """Agent descriptor as returned by ``GET /agent/{id}``."""

    model_config = ConfigDict(extra="allow")

    id: str = ""
    name: str | None = ""
    owner_id: str | None = None
    team_id: str | None = None
    mode: str | None = None  # "autonomous" | "review"
    is_active: bool | None = None
    temperature: float | None = None
    quality_threshold: float | None = None
    created_at: str | None = None
    updated_at: str | None = None


class AgentPrompt(BaseModel):
    """A single generated content item. Read-only from this package's view."""

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    agent_id: str = ""
    prompt_id: str | None = None
    topic: str | None = None
    keyword: str | None = None
    raw_input: str | None = None
    raw_output: str | None = None  # JSON-encoded candidate content
    quality_score: float | None = None
    status: PromptStatus | None = None
    error_message: str | None = None
    metadata: dict[str, Any] | None = None
    created_at: str | None = None
    updated_at: str | None = None


class AgentStats(BaseModel):
    """Status breakdown and average quality across an agent's prompts."""

    total: int = 0
    draft: int = 0
    review: int = 0
    approved: int = 0
    published: int = 0
    rejected: int = 0
    failed: int = 0
    average_quality: float = 0.0
    by_keyword: dict[str, int] = Field(default_factory=dict)
