"""In-process LRU cache of compiled quality validators (TTL 15 minutes)."""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from typing import Any, Mapping

from prompt_qc.config import CacheConfig
from prompt_qc.models.quality import QualityConfig
from prompt_qc.quality.validator import QualityValidator

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 500
DEFAULT_TTL_SECONDS = 15 * 60


class ValidatorCache:
    """Keeps one compiled QualityValidator per agent id.

    Entries expire after ``ttl_seconds``; when full, the least recently used
    entry is evicted. Call ``invalidate()`` whenever an agent's rules change.
    """

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
    ):
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._entries: OrderedDict[str, tuple[QualityValidator, float]] = OrderedDict()
        self._hits = 0
        self._misses = 0

    @classmethod
    def from_config(cls, config: CacheConfig) -> ValidatorCache:
        return cls(max_size=config.max_size, ttl_seconds=config.ttl_seconds)

    def get(self, agent_id: str) -> QualityValidator | None:
        """Get a cached validator if present and not expired."""
        entry = self._entries.get(agent_id)
        if entry is None:
            self._misses += 1
            return None

        validator, cached_at = entry
        if time.monotonic() - cached_at > self.ttl_seconds:
            del self._entries[agent_id]
            self._misses += 1
            return None

        self._entries.move_to_end(agent_id)
        self._hits += 1
        return validator

    def put(self, agent_id: str, validator: QualityValidator) -> None:
        """Cache a validator, evicting the least recently used entry when full."""
        if agent_id in self._entries:
            del self._entries[agent_id]
        elif len(self._entries) >= self.max_size:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted validator for agent %s", evicted)
        self._entries[agent_id] = (validator, time.monotonic())

    def get_or_compile(
        self,
        agent_id: str,
        config: QualityConfig | Mapping[str, Any] | None,
    ) -> QualityValidator:
        """Return the cached validator for an agent, compiling it on a miss."""
        validator = self.get(agent_id)
        if validator is not None:
            return validator
        if isinstance(config, QualityConfig):
            validator = QualityValidator(config)
        else:
            validator = QualityValidator.from_dict(config)
        logger.debug("Compiled validator for agent %s: %s", agent_id, validator.get_summary())
        self.put(agent_id, validator)
        return validator

    def invalidate(self, agent_id: str) -> None:
        self._entries.pop(agent_id, None)

    def clear(self) -> int:
        """Clear all cached entries. Returns count of removed entries."""
        count = len(self._entries)
        self._entries.clear()
        return count

    def stats(self) -> dict:
        """Return cache statistics."""
        total = self._hits + self._misses
        return {
            "size": len(self._entries),
            "max_size": self.max_size,
            "ttl_seconds": self.ttl_seconds,
            "hit_rate": self._hits / total if total else 0.0,
        }
