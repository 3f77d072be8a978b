"""Cache-first strategies — consult the region before touching the network."""

from __future__ import annotations

import asyncio
import logging

from offcache.errors.exceptions import CacheBackendError, NetworkError
from offcache.strategies import fallbacks
from offcache.strategies.base import Strategy
from offcache.types import RequestDescriptor, Response, StrategyName

logger = logging.getLogger(__name__)


class CacheFirstStrategy(Strategy):
    """Serve from cache; on a miss fetch, write through, then respond.

    The write-through is awaited before the response is returned, and is
    shielded so an abandoned request still leaves a complete entry.
    """

    name = StrategyName.CACHE_FIRST

    async def execute(self, request: RequestDescriptor) -> Response:
        cached = await self._lookup(request)
        if cached is not None:
            return cached

        try:
            response = await self._fetcher.fetch(request)
        except NetworkError as e:
            logger.warning("Offline for %s (%s), using fallback", request.url, e.error_type)
            return self.fallback()

        write = self._tasks.spawn(
            self._write_through(request, response.clone()),
            name=f"write-through:{request.url}",
        )
        await asyncio.shield(write)
        return response

    def fallback(self) -> Response:
        return fallbacks.asset_error()

    async def _lookup(self, request: RequestDescriptor) -> Response | None:
        try:
            return await self._cache.match(self._region, request.url)
        except CacheBackendError as e:
            logger.warning("Cache lookup failed, treating as miss: %s", e)
            return None

    async def _write_through(self, request: RequestDescriptor, response: Response) -> None:
        try:
            await self._cache.put(self._region, request.url, response)
        except CacheBackendError as e:
            logger.error("Write-through to '%s' failed for %s: %s", self._region, request.url, e)


class ImageFallbackStrategy(CacheFirstStrategy):
    """Cache-first for images; offline misses get a placeholder image, not an error."""

    name = StrategyName.CACHE_FIRST_IMAGE_FALLBACK

    def fallback(self) -> Response:
        return fallbacks.image_placeholder()
