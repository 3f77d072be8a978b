"""Network-first strategies — the cache is only a failure fallback."""

from __future__ import annotations

import logging

from offcache.errors.exceptions import CacheBackendError, NetworkError
from offcache.strategies import fallbacks
from offcache.strategies.base import Strategy
from offcache.types import RequestDescriptor, Response, StrategyName

logger = logging.getLogger(__name__)

_CACHEABLE_STATUS = 200


class NetworkFirstStrategy(Strategy):
    """Fetch first; persist 200s in the background; fall back to cache offline."""

    name = StrategyName.NETWORK_FIRST

    async def execute(self, request: RequestDescriptor) -> Response:
        try:
            response = await self._fetcher.fetch(request)
        except NetworkError as e:
            logger.info("Network failed for %s (%s), trying cache", request.url, e.error_type)
            return await self._from_cache(request)

        if response.status == _CACHEABLE_STATUS:
            self._tasks.spawn(
                self._cache.put(self._region, request.url, response.clone()),
                name=f"persist:{request.url}",
            )
        else:
            logger.debug("Not caching %s: HTTP %d", request.url, response.status)
        return response

    def fallback(self) -> Response:
        return fallbacks.offline_use_cache()

    async def _from_cache(self, request: RequestDescriptor) -> Response:
        try:
            cached = await self._cache.match(self._region, request.url)
        except CacheBackendError as e:
            logger.warning("Cache fallback failed for %s: %s", request.url, e)
            return self.fallback()
        if cached is None:
            return self.fallback()
        return cached


class DefaultNetworkFirstStrategy(NetworkFirstStrategy):
    """Network-first for unclassified requests, with the short offline message."""

    name = StrategyName.NETWORK_FIRST_DEFAULT

    def fallback(self) -> Response:
        return fallbacks.offline()
