"""Pydantic models for agent test results and reports."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

TestStatus = Literal["pass", "fail", "warning"]


class QualityMetrics(BaseModel):
    """Four 0-100 component scores plus their weighted overall."""

    model_config = ConfigDict(populate_by_name=True)

    clarity: float = 0  # weight 30%
    usefulness: float = 0  # weight 30%
    uniqueness: float = 0  # weight 20%
    seo_optimization: float = Field(default=0, alias="seoOptimization")  # weight 20%
    overall: float = 0


class TestResult(BaseModel):
    __test__ = False  # not a pytest test class

    test: str
    status: TestStatus
    message: str
    details: Any | None = None


class AgentTestReport(BaseModel):
    __test__ = False

    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    agent_id: str
    tests_run: int
    passed: int
    failed: int
    warnings: int
    results: list[TestResult]
    quality_metrics: QualityMetrics | None = None
    recommendations: list[str] = Field(default_factory=list)
