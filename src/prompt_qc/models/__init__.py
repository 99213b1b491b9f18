"""Data models for the prompt quality-control pipeline."""

from prompt_qc.models.agent import Agent, AgentPrompt, AgentStats, PromptStatus
from prompt_qc.models.quality import (
    BrandGuidelines,
    QualityConfig,
    QualityExamples,
    QualityResult,
    QualityStandards,
)
from prompt_qc.models.report import (
    AgentTestReport,
    QualityMetrics,
    TestResult,
    TestStatus,
)

__all__ = [
    "Agent",
    "AgentPrompt",
    "AgentStats",
    "AgentTestReport",
    "BrandGuidelines",
    "PromptStatus",
    "QualityConfig",
    "QualityExamples",
    "QualityMetrics",
    "QualityResult",
    "QualityStandards",
    "TestResult",
    "TestStatus",
]
