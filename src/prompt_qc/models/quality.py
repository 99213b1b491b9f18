"""Pydantic models for quality-control rules and validation results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BrandGuidelines(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    brand_voice: str | None = None
    brand_values: list[str] | None = None
    do_use: list[str] | None = None
    dont_use: list[str] | None = None


class QualityStandards(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    min_word_count: int | None = None
    max_word_count: int | None = None
    readability_level: str | None = None
    # Accepted but not enforced by QualityValidator.validate()
    must_include_examples: bool | None = None
    must_include_actionable_steps: bool | None = None
    must_include_statistics: bool | None = None


class QualityExamples(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    good_example: str | None = None
    bad_example: str | None = None
    good_headline: str | None = None
    bad_headline: str | None = None


class QualityConfig(BaseModel):
    """Declarative brand/quality rules for one agent. Every section is optional."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    brand_guidelines: BrandGuidelines | None = None
    quality_standards: QualityStandards | None = None
    required_elements: dict[str, str] | None = None
    key_phrases: list[str] | None = None
    forbidden_phrases: list[str] | None = None
    style_guide: str | None = None
    examples: QualityExamples | None = None


class QualityResult(BaseModel):
    issues: list[str]
    score: float  # 0.5-0.9
    passed: bool
