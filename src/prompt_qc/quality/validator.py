"""Rule-based content validator compiled once from a QualityConfig."""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from prompt_qc.models.quality import QualityConfig, QualityResult

logger = logging.getLogger(__name__)

PERFECT_SCORE = 0.9  # never 1.0
ISSUE_PENALTY = 0.15
MAX_DEDUCTION = 0.4
SCORE_FLOOR = 0.5

CONFIG_SECTIONS = (
    "brand_guidelines",
    "quality_standards",
    "required_elements",
    "key_phrases",
    "forbidden_phrases",
    "style_guide",
    "examples",
)


class QualityValidator:
    """Validates generated content against an agent's quality rules.

    The forbidden-phrase pattern and the instruction block are built once in
    ``__init__``. ``validate()`` only reads them, so a single instance can be
    shared across concurrent generations.
    """

    __slots__ = ("_config", "_forbidden_pattern", "_instructions")

    def __init__(self, config: QualityConfig):
        self._config = config
        self._forbidden_pattern = _compile_forbidden(config.forbidden_phrases)
        self._instructions = _build_instructions(config)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> QualityValidator:
        """Build a validator from a raw agent configuration row."""
        data = data or {}
        sections = {k: data.get(k) for k in CONFIG_SECTIONS if data.get(k) is not None}
        return cls(QualityConfig.model_validate(sections))

    @property
    def config(self) -> QualityConfig:
        return self._config

    def get_quality_instructions(self) -> str:
        """Return the precompiled instruction block for generation prompts."""
        return self._instructions

    def validate(self, content: str) -> QualityResult:
        """Check content against forbidden phrases, word counts, and required elements."""
        issues: list[str] = []

        if self._forbidden_pattern is not None:
            matches = self._forbidden_pattern.findall(content)
            if matches:
                unique = list(dict.fromkeys(m.lower() for m in matches))
                issues.append('Contains forbidden phrases: "' + '", "'.join(unique) + '"')

        standards = self._config.quality_standards
        if standards and (standards.min_word_count or standards.max_word_count):
            word_count = count_words(content)
            if standards.min_word_count and word_count < standards.min_word_count:
                issues.append(
                    f"Content too short: {word_count} words "
                    f"(minimum: {standards.min_word_count})"
                )
            if standards.max_word_count and word_count > standards.max_word_count:
                issues.append(
                    f"Content too long: {word_count} words "
                    f"(maximum: {standards.max_word_count})"
                )

        # Substring match on the element name only
        if self._config.required_elements:
            lowered = content.lower()
            for element, description in self._config.required_elements.items():
                if element.lower() not in lowered:
                    issues.append(f"Missing required element: {element} ({description})")

        if issues:
            logger.debug("Validation found %d issue(s)", len(issues))

        return QualityResult(
            issues=issues,
            score=calculate_score(len(issues)),
            passed=not issues,
        )

    def get_summary(self) -> str:
        """One-line description of which controls are active."""
        config = self._config
        parts: list[str] = []
        if config.forbidden_phrases:
            parts.append(f"{len(config.forbidden_phrases)} forbidden phrases")
        if config.key_phrases:
            parts.append(f"{len(config.key_phrases)} key phrases")
        if config.quality_standards and config.quality_standards.min_word_count:
            parts.append(f"min {config.quality_standards.min_word_count} words")
        if config.style_guide:
            parts.append("style guide enforced")
        return ", ".join(parts) if parts else "No quality controls"


def count_words(content: str) -> int:
    return len(content.split())


def calculate_score(issue_count: int) -> float:
    """0.9 for clean content, minus 0.15 per issue down to 0.5."""
    if issue_count == 0:
        return PERFECT_SCORE
    deduction = min(issue_count * ISSUE_PENALTY, MAX_DEDUCTION)
    return round(max(SCORE_FLOOR, PERFECT_SCORE - deduction), 2)


def _compile_forbidden(phrases: list[str] | None) -> re.Pattern[str] | None:
    # Empty phrases would match at every position
    phrases = [p for p in phrases or [] if p]
    if not phrases:
        return None
    return re.compile("|".join(re.escape(p) for p in phrases), re.IGNORECASE)


def _build_instructions(config: QualityConfig) -> str:
    brand = config.brand_guidelines
    examples = config.examples
    instructions = ""

    if brand and brand.brand_voice:
        instructions += f"\n\nBRAND VOICE: {brand.brand_voice}"
    if brand and brand.brand_values:
        instructions += f"\n\nBRAND VALUES: {', '.join(brand.brand_values)}"
    if brand and brand.do_use:
        instructions += f"\n\nPREFERRED LANGUAGE: {', '.join(brand.do_use)}"
    if config.key_phrases:
        instructions += (
            f"\n\nKEY PHRASES TO INCLUDE (use naturally): {', '.join(config.key_phrases)}"
        )
    if config.forbidden_phrases:
        instructions += (
            f"\n\nFORBIDDEN PHRASES (never use): {', '.join(config.forbidden_phrases)}"
        )
    if config.style_guide:
        instructions += f"\n\nSTYLE GUIDE:\n{config.style_guide}"
    if config.required_elements:
        lines = "\n".join(f"- {k}: {v}" for k, v in config.required_elements.items())
        instructions += f"\n\nREQUIRED ELEMENTS:\n{lines}"
    if examples and examples.good_example:
        instructions += f"\n\nGOOD EXAMPLE:\n{examples.good_example}"
    if examples and examples.bad_example:
        instructions += f"\n\nBAD EXAMPLE (avoid this style):\n{examples.bad_example}"

    return instructions
