"""Cache entry and statistics models."""

from __future__ import annotations

import time

from pydantic import BaseModel, Field

from offcache.types import Response


class CacheEntry(BaseModel):
    """A stored response, keyed by normalized request identity."""

    key: str
    response: Response
    created_at: float = Field(default_factory=time.time)

    @property
    def size_bytes(self) -> int:
        return len(self.response.body)


class CacheStats(BaseModel):
    """Aggregate cache statistics."""

    regions: int = 0
    entries: int = 0
    size_mb: float = 0.0
    hits: int = 0
    misses: int = 0
    writes: int = 0
    errors: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0
