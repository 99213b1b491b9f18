"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from prompt_qc.models.quality import QualityConfig

BASE_URL_ENV = "PROMPT_QC_BASE_URL"


@dataclass(frozen=True)
class AgentServiceConfig:
    base_url: str = "http://localhost:3000/api"
    timeout: float | None = None  # no timeout: a hung service blocks the run


@dataclass(frozen=True)
class HarnessConfig:
    test_keywords: tuple[str, ...] = ("photography", "marketing", "writing")
    generation_batch_size: int = 3
    storage_limit: int = 10
    metadata_sample_size: int = 5
    report_sample_size: int = 50
    duplicate_rate_threshold: float = 0.10
    recommendation_threshold: float = 70


@dataclass(frozen=True)
class CacheConfig:
    max_size: int = 500
    ttl_minutes: int = 15

    @property
    def ttl_seconds(self) -> int:
        return self.ttl_minutes * 60


@dataclass(frozen=True)
class AppConfig:
    service: AgentServiceConfig = field(default_factory=AgentServiceConfig)
    harness: HarnessConfig = field(default_factory=HarnessConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    service_raw = dict(raw.get("service", {}))
    env_url = os.environ.get(BASE_URL_ENV)
    if env_url:
        service_raw["base_url"] = env_url

    harness_raw = dict(raw.get("harness", {}))
    if "test_keywords" in harness_raw:
        harness_raw["test_keywords"] = tuple(harness_raw["test_keywords"])

    return AppConfig(
        service=AgentServiceConfig(**service_raw),
        harness=HarnessConfig(**harness_raw),
        cache=CacheConfig(**raw.get("cache", {})),
    )


def load_quality_config(path: str | Path) -> QualityConfig:
    """Load a QualityConfig from a YAML (or JSON) rules file."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Quality config not found: {path}")
    with open(p, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return QualityConfig.model_validate(data)
