"""Cache entry and statistics models."""

from __future__ import annotations

import time

from pydantic import BaseModel, Field


class CacheEntry(BaseModel):
    """A cached image payload."""

    key: str
    data: bytes
    created_at: float = Field(default_factory=time.time)

    @property
    def cost(self) -> int:
        return len(self.data)


class CacheStats(BaseModel):
    """Aggregate cache statistics."""

    entries: int = 0
    total_cost: int = 0
    max_cost: int = 0
    max_count: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0
