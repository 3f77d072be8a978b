"""Cache manager — the region-scoped handle threaded through the engine."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Protocol

from offcache.cache.disk import DiskCacheStore
from offcache.cache.keys import generate_cache_key
from offcache.cache.memory import MemoryCacheStore
from offcache.cache.stats import CacheEntry, CacheStats
from offcache.errors.exceptions import CacheBackendError, ConfigError
from offcache.types import Response

logger = logging.getLogger(__name__)


class CacheStore(Protocol):
    """Backend contract: async, region-partitioned key/value storage."""

    async def open(self, region: str) -> None: ...

    async def match(self, region: str, key: str) -> CacheEntry | None: ...

    async def put(self, region: str, entry: CacheEntry) -> None: ...

    async def delete(self, region: str, key: str) -> bool: ...

    async def keys(self, region: str) -> list[str]: ...

    async def regions(self) -> list[str]: ...

    async def delete_region(self, region: str) -> bool: ...

    async def entry_count(self) -> int: ...

    async def size_bytes(self) -> int: ...

    async def clear(self) -> None: ...

    async def close(self) -> None: ...


class CacheManager:
    """Wraps a ``CacheStore`` with URL keying, fault translation and counters.

    Every backend failure surfaces as ``CacheBackendError`` so strategies
    can treat it as a miss (reads) or a best-effort loss (writes).
    """

    def __init__(self, store: CacheStore | None = None, origin: str | None = None) -> None:
        self._store: CacheStore = store if store is not None else MemoryCacheStore()
        self._origin = origin
        self._stats = CacheStats()

    @property
    def store(self) -> CacheStore:
        return self._store

    def key_for(self, url: str) -> str:
        return generate_cache_key(url, origin=self._origin)

    async def open(self, region: str) -> None:
        with self._guard(region, "open"):
            await self._store.open(region)

    async def match(self, region: str, url: str) -> Response | None:
        """Look up ``url`` in ``region``; returns a copy of the stored response."""
        with self._guard(region, "read"):
            key = self.key_for(url)
            entry = await self._store.match(region, key)
        if entry is None:
            self._stats.misses += 1
            logger.debug("Cache MISS [%s] %s", region, key)
            return None
        self._stats.hits += 1
        logger.debug("Cache HIT [%s] %s", region, key)
        return entry.response.clone()

    async def put(self, region: str, url: str, response: Response) -> None:
        """Replace the entry for ``url`` in ``region`` with ``response``."""
        with self._guard(region, "write"):
            entry = CacheEntry(key=self.key_for(url), response=response.clone())
            await self._store.put(region, entry)
        self._stats.writes += 1
        logger.debug("Cache PUT [%s] %s (%d bytes)", region, entry.key, entry.size_bytes)

    async def delete(self, region: str, url: str) -> bool:
        with self._guard(region, "delete"):
            return await self._store.delete(region, self.key_for(url))

    async def keys(self, region: str) -> list[str]:
        with self._guard(region, "keys"):
            return await self._store.keys(region)

    async def regions(self) -> list[str]:
        with self._guard(None, "regions"):
            return await self._store.regions()

    async def delete_region(self, region: str) -> bool:
        with self._guard(region, "delete_region"):
            return await self._store.delete_region(region)

    async def clear(self) -> None:
        with self._guard(None, "clear"):
            await self._store.clear()
        self._stats = CacheStats()

    async def stats(self) -> CacheStats:
        """Return aggregate cache statistics."""
        with self._guard(None, "stats"):
            regions = await self._store.regions()
            entries = await self._store.entry_count()
            size = await self._store.size_bytes()
        return CacheStats(
            regions=len(regions),
            entries=entries,
            size_mb=size / (1024 * 1024),
            hits=self._stats.hits,
            misses=self._stats.misses,
            writes=self._stats.writes,
            errors=self._stats.errors,
        )

    async def close(self) -> None:
        await self._store.close()

    @contextlib.contextmanager
    def _guard(self, region: str | None, operation: str) -> Iterator[None]:
        try:
            yield
        except CacheBackendError:
            self._stats.errors += 1
            raise
        except Exception as e:
            self._stats.errors += 1
            raise CacheBackendError(
                f"Cache {operation} failed for region '{region}': {e}",
                region=region,
                operation=operation,
                original=e,
            ) from e


def create_store(backend: str = "memory", db_path: Path | None = None) -> CacheStore:
    """Instantiate a store backend by name."""
    if backend == "memory":
        return MemoryCacheStore()
    if backend == "disk":
        return DiskCacheStore(db_path=db_path)
    raise ConfigError(f"Unknown cache backend: '{backend}' (expected 'memory' or 'disk')")
