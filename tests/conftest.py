"""Shared test fixtures."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from prompt_qc.clients.agent_client import AgentServiceClient
from prompt_qc.models.agent import Agent, AgentPrompt
from prompt_qc.models.quality import (
    BrandGuidelines,
    QualityConfig,
    QualityExamples,
    QualityStandards,
)


@pytest.fixture
def full_quality_config() -> QualityConfig:
    return QualityConfig(
        brand_guidelines=BrandGuidelines(
            brand_voice="Friendly and practical",
            brand_values=["clarity", "honesty"],
            do_use=["you can", "try this"],
            dont_use=["revolutionary"],
        ),
        quality_standards=QualityStandards(min_word_count=5, max_word_count=50),
        required_elements={"example": "A worked example", "steps": "Numbered steps"},
        key_phrases=["step by step"],
        forbidden_phrases=["game changer", "synergy"],
        style_guide="Short sentences.",
        examples=QualityExamples(good_example="Try this prompt.", bad_example="Unlock synergy!"),
    )


@pytest.fixture
def sample_agent() -> Agent:
    return Agent(
        id="agent-1",
        name="SEO Writer",
        mode="review",
        is_active=True,
        temperature=0.7,
        quality_threshold=80,
    )


def make_prompt(
    *,
    id: str = "p1",
    topic: str | None = "blog",
    keyword: str | None = "seo",
    quality_score: float | None = 85,
    status: str | None = "review",
    raw_input: str | None = "input",
    raw_output: str | dict | None = None,
) -> AgentPrompt:
    if isinstance(raw_output, dict):
        raw_output = json.dumps(raw_output)
    if raw_output is None:
        raw_output = json.dumps({"name": topic, "prompt_text": "x" * 60})
    return AgentPrompt(
        id=id,
        agent_id="agent-1",
        topic=topic,
        keyword=keyword,
        quality_score=quality_score,
        status=status,
        raw_input=raw_input,
        raw_output=raw_output,
    )


@pytest.fixture
def prompt_factory():
    return make_prompt


@pytest.fixture
def mock_agent_client(sample_agent) -> AgentServiceClient:
    """Create a mock agent service client for a healthy agent."""
    client = AsyncMock(spec=AgentServiceClient)
    client.get_agent = AsyncMock(return_value=sample_agent)
    client.generate = AsyncMock(
        return_value={"success": True, "generated": 3, "results": [{"keyword": "photography"}]}
    )
    client.list_prompts = AsyncMock(
        return_value=[make_prompt(id=f"p{i}", topic=f"topic {i}") for i in range(5)]
    )
    return client
