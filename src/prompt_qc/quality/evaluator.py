"""Per-item quality evaluation of generated agent prompts."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from prompt_qc.models.agent import PROMPT_STATUSES, AgentPrompt, AgentStats
from prompt_qc.models.report import QualityMetrics

logger = logging.getLogger(__name__)

WEIGHTS = {
    "clarity": 0.3,
    "usefulness": 0.3,
    "uniqueness": 0.2,
    "seo_optimization": 0.2,
}
CLEAR_TEXT_MIN_CHARS = 50
SPECIFIC_TEXT_MIN_CHARS = 200
MIN_SEO_TAGS = 3


@dataclass(frozen=True)
class ParsedOutput:
    """Result of decoding ``raw_output``: the payload, or the reason it is empty."""

    data: dict[str, Any] = field(default_factory=dict)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_raw_output(raw_output: str | None) -> ParsedOutput:
    if not raw_output:
        return ParsedOutput(error="empty")
    try:
        data = json.loads(raw_output)
    except (json.JSONDecodeError, TypeError) as exc:
        return ParsedOutput(error=str(exc))
    if not isinstance(data, dict):
        return ParsedOutput(error=f"expected object, got {type(data).__name__}")
    return ParsedOutput(data=data)


def evaluate_prompt_quality(prompt: AgentPrompt) -> QualityMetrics:
    """Score one generated prompt on clarity, usefulness, uniqueness and SEO.

    Never raises: malformed ``raw_output`` scores as an empty payload and any
    unexpected error yields zeroed metrics.
    """
    try:
        parsed = parse_raw_output(prompt.raw_output)
        if not parsed.ok:
            logger.debug("Unparseable raw_output for prompt %s: %s", prompt.id, parsed.error)
        data = parsed.data
        meta = data.get("metadata")
        if not isinstance(meta, dict):
            meta = {}

        name = data.get("name")
        description = data.get("description")
        text_len = _text_length(data.get("prompt_text"))
        tags = data.get("tags")
        has_tags = isinstance(tags, list) and len(tags) > 0

        clarity = sum([
            25 if (name or prompt.topic) else 0,
            25 if description else 0,
            25 if text_len > CLEAR_TEXT_MIN_CHARS else 0,
            25 if has_tags else 0,
        ])

        use_cases = meta.get("use_cases")
        usefulness = sum([
            33 if isinstance(use_cases, list) and use_cases else 0,
            33 if meta.get("example_output") else 0,
            34 if text_len > SPECIFIC_TEXT_MIN_CHARS else 0,
        ])

        distinct = {v for v in (prompt.keyword, prompt.topic) if v}
        uniqueness = sum([
            50 if prompt.keyword else 0,
            50 if len(distinct) > 1 else 0,
        ])

        seo_optimization = sum([
            33 if _contains_keyword(name, prompt.keyword) else 0,
            33 if _contains_keyword(description, prompt.keyword) else 0,
            34 if has_tags and len(tags) >= MIN_SEO_TAGS else 0,
        ])

        return QualityMetrics(
            clarity=clarity,
            usefulness=usefulness,
            uniqueness=uniqueness,
            seo_optimization=seo_optimization,
            overall=_weighted_overall(clarity, usefulness, uniqueness, seo_optimization),
        )
    except Exception:
        logger.error("Error evaluating prompt quality", exc_info=True)
        return QualityMetrics()


def average_metrics(metrics: Sequence[QualityMetrics]) -> QualityMetrics:
    """Field-wise mean of a metrics sample; zeroed when the sample is empty."""
    if not metrics:
        return QualityMetrics()
    n = len(metrics)
    return QualityMetrics(
        clarity=sum(m.clarity for m in metrics) / n,
        usefulness=sum(m.usefulness for m in metrics) / n,
        uniqueness=sum(m.uniqueness for m in metrics) / n,
        seo_optimization=sum(m.seo_optimization for m in metrics) / n,
        overall=sum(m.overall for m in metrics) / n,
    )


def compute_agent_stats(prompts: Iterable[AgentPrompt]) -> AgentStats:
    """Count prompts per status and average the non-null quality scores."""
    prompts = list(prompts)
    counts = {status: 0 for status in PROMPT_STATUSES}
    by_keyword: dict[str, int] = {}
    scores: list[float] = []

    for p in prompts:
        if p.status in counts:
            counts[p.status] += 1
        if p.keyword:
            by_keyword[p.keyword] = by_keyword.get(p.keyword, 0) + 1
        if p.quality_score is not None:
            scores.append(p.quality_score)

    return AgentStats(
        total=len(prompts),
        average_quality=sum(scores) / len(scores) if scores else 0.0,
        by_keyword=dict(sorted(by_keyword.items(), key=lambda kv: kv[1], reverse=True)),
        **counts,
    )


def _weighted_overall(clarity: float, usefulness: float, uniqueness: float, seo: float) -> float:
    return (
        clarity * WEIGHTS["clarity"]
        + usefulness * WEIGHTS["usefulness"]
        + uniqueness * WEIGHTS["uniqueness"]
        + seo * WEIGHTS["seo_optimization"]
    )


def _text_length(value: Any) -> int:
    return len(value) if isinstance(value, str) else 0


def _contains_keyword(text: Any, keyword: str | None) -> bool:
    if not text or not keyword or not isinstance(text, str):
        return False
    return keyword.lower() in text.lower()
