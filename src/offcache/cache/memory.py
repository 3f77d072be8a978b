"""In-memory region store."""

from __future__ import annotations

from offcache.cache.stats import CacheEntry


class MemoryCacheStore:
    """Regions held in process memory; lost when the process exits.

    Each operation completes without suspending, so per-key writes are
    atomic and concurrent puts to one key are last-write-wins.
    """

    def __init__(self) -> None:
        self._regions: dict[str, dict[str, CacheEntry]] = {}

    async def open(self, region: str) -> None:
        self._regions.setdefault(region, {})

    async def match(self, region: str, key: str) -> CacheEntry | None:
        entries = self._regions.get(region)
        if entries is None:
            return None
        return entries.get(key)

    async def put(self, region: str, entry: CacheEntry) -> None:
        self._regions.setdefault(region, {})[entry.key] = entry

    async def delete(self, region: str, key: str) -> bool:
        entries = self._regions.get(region)
        if entries is None:
            return False
        return entries.pop(key, None) is not None

    async def keys(self, region: str) -> list[str]:
        return list(self._regions.get(region, {}))

    async def regions(self) -> list[str]:
        return list(self._regions)

    async def delete_region(self, region: str) -> bool:
        return self._regions.pop(region, None) is not None

    async def entry_count(self) -> int:
        return sum(len(entries) for entries in self._regions.values())

    async def size_bytes(self) -> int:
        return sum(
            entry.size_bytes
            for entries in self._regions.values()
            for entry in entries.values()
        )

    async def clear(self) -> None:
        self._regions.clear()

    async def close(self) -> None:
        return None
