"""Background refresh — overwrite one cached resource when its tag fires."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from offcache.errors.exceptions import OffcacheError, RefreshError
from offcache.types import RequestDescriptor, Response

if TYPE_CHECKING:
    from offcache.cache.manager import CacheManager
    from offcache.network.client import Fetcher

logger = logging.getLogger(__name__)


class BackgroundRefresh:
    """Re-fetches ``url`` as JSON and stores it in ``region`` on ``tag``."""

    def __init__(
        self,
        cache: CacheManager,
        fetcher: Fetcher,
        region: str,
        tag: str,
        url: str,
    ) -> None:
        self._cache = cache
        self._fetcher = fetcher
        self._region = region
        self._tag = tag
        self._url = url

    @property
    def tag(self) -> str:
        return self._tag

    async def on_tag(self, tag: str) -> bool:
        """Handle a sync signal. Returns True when the entry was overwritten.

        Failures are logged and swallowed; an unknown tag is a no-op.
        """
        logger.info("Background sync: %s", tag)
        if tag != self._tag:
            logger.debug("Ignoring unrecognized sync tag '%s'", tag)
            return False

        try:
            await self._refresh()
        except OffcacheError as e:
            logger.warning("Sync '%s' failed: %s", tag, e)
            return False
        return True

    async def _refresh(self) -> None:
        response = await self._fetcher.fetch(RequestDescriptor(url=self._url))
        if not response.ok:
            raise RefreshError(
                f"{self._url} returned HTTP {response.status}", tag=self._tag, url=self._url
            )
        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise RefreshError(
                f"Response from {self._url} is not valid JSON: {e}", tag=self._tag, url=self._url
            ) from e

        fresh = Response(
            headers={"Content-Type": "application/json"},
            body=json.dumps(data, ensure_ascii=False).encode("utf-8"),
        )
        await self._cache.put(self._region, self._url, fresh)
        logger.info("Refreshed %s in '%s'", self._url, self._region)
