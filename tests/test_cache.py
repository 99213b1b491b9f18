"""Tests for the compiled validator cache."""

import time

import pytest

from prompt_qc.cache.validator_cache import ValidatorCache
from prompt_qc.config import CacheConfig, load_config
from prompt_qc.models.quality import QualityConfig
from prompt_qc.quality.validator import QualityValidator


@pytest.fixture
def cache():
    return ValidatorCache(max_size=2, ttl_seconds=60)


@pytest.fixture
def validator():
    return QualityValidator(QualityConfig(forbidden_phrases=["synergy"]))


class TestValidatorCache:
    def test_put_and_get(self, cache, validator):
        cache.put("agent-1", validator)
        assert cache.get("agent-1") is validator

    def test_get_nonexistent(self, cache):
        assert cache.get("missing") is None

    def test_get_or_compile_reuses_instance(self, cache):
        first = cache.get_or_compile("agent-1", {"forbidden_phrases": ["hype"]})
        second = cache.get_or_compile("agent-1", {"forbidden_phrases": ["other"]})
        assert first is second
        assert first.get_summary() == "1 forbidden phrases"

    def test_get_or_compile_accepts_model(self, cache):
        v = cache.get_or_compile("agent-1", QualityConfig(key_phrases=["a", "b"]))
        assert v.get_summary() == "2 key phrases"

    def test_invalidate(self, cache, validator):
        cache.put("agent-1", validator)
        cache.invalidate("agent-1")
        assert cache.get("agent-1") is None
        cache.invalidate("never-cached")

    def test_lru_eviction(self, cache, validator):
        cache.put("a", validator)
        cache.put("b", validator)
        cache.get("a")  # a is now most recently used
        cache.put("c", validator)
        assert cache.get("b") is None
        assert cache.get("a") is validator
        assert cache.get("c") is validator

    def test_upsert_does_not_evict(self, cache, validator):
        cache.put("a", validator)
        cache.put("b", validator)
        cache.put("a", validator)
        assert cache.stats()["size"] == 2
        assert cache.get("b") is validator

    def test_clear(self, cache, validator):
        cache.put("a", validator)
        cache.put("b", validator)
        assert cache.clear() == 2
        assert cache.get("a") is None

    def test_ttl_expiration(self, validator):
        """Cache entries expire after TTL."""
        cache = ValidatorCache(ttl_seconds=0)
        cache.put("agent-1", validator)
        time.sleep(0.01)
        assert cache.get("agent-1") is None

    def test_stats(self, cache, validator):
        cache.put("a", validator)
        cache.get("a")
        cache.get("missing")
        stats = cache.stats()
        assert stats == {"size": 1, "max_size": 2, "ttl_seconds": 60, "hit_rate": 0.5}

    def test_from_config(self, validator):
        cache = ValidatorCache.from_config(CacheConfig(max_size=1, ttl_minutes=2))
        assert cache.stats()["max_size"] == 1
        assert cache.stats()["ttl_seconds"] == 120
        cache.put("a", validator)
        cache.put("b", validator)
        assert cache.get("a") is None

    def test_from_loaded_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("cache:\n  max_size: 7\n  ttl_minutes: 1\n")
        cache = ValidatorCache.from_config(load_config(path).cache)
        assert cache.max_size == 7
        assert cache.ttl_seconds == 60
