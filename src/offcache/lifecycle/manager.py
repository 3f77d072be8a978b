"""Lifecycle manager — region population on install and pruning on activation."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from offcache.errors.exceptions import (
    CacheBackendError,
    NetworkError,
    OffcacheError,
    PopulateError,
)
from offcache.types import RequestDescriptor, Response

if TYPE_CHECKING:
    from offcache.cache.manager import CacheManager
    from offcache.network.client import Fetcher

logger = logging.getLogger(__name__)


class LifecycleManager:
    """Runs the two lifecycle transitions; both are idempotent and retryable."""

    def __init__(
        self,
        cache: CacheManager,
        fetcher: Fetcher,
        seed_region: str,
        seed_manifest: list[str],
        known_regions: frozenset[str],
    ) -> None:
        self._cache = cache
        self._fetcher = fetcher
        self._seed_region = seed_region
        self._seed_manifest = list(seed_manifest)
        self._known_regions = known_regions

    @property
    def known_regions(self) -> frozenset[str]:
        return self._known_regions

    async def populate(self) -> bool:
        """Fetch the seed manifest and store it, all or nothing.

        Best-effort: any failure is logged and reported as ``False``, never
        raised, so startup always proceeds.
        """
        logger.info(
            "Populating '%s' with %d seed resources", self._seed_region, len(self._seed_manifest)
        )
        try:
            await self._populate()
        except OffcacheError as e:
            logger.warning("Seed caching failed, continuing startup: %s", e)
            return False
        logger.info("Seed caching complete")
        return True

    async def prune(self) -> list[str]:
        """Delete every region the current version does not recognize.

        Deletions run independently; one failure never stops the others.
        Returns the names that were deleted.
        """
        try:
            names = await self._cache.regions()
        except CacheBackendError as e:
            logger.error("Could not enumerate regions, skipping prune: %s", e)
            return []

        stale = [name for name in names if name not in self._known_regions]
        if not stale:
            logger.debug("No stale regions to prune")
            return []

        results = await asyncio.gather(
            *(self._delete_region(name) for name in stale),
            return_exceptions=True,
        )
        deleted: list[str] = []
        for name, result in zip(stale, results, strict=True):
            if isinstance(result, Exception):
                logger.warning("Failed to delete stale region '%s': %s", name, result)
            elif result:
                deleted.append(name)
        return deleted

    async def _populate(self) -> None:
        await self._cache.open(self._seed_region)

        results = await asyncio.gather(
            *(self._fetch_seed(url) for url in self._seed_manifest),
            return_exceptions=True,
        )

        failed: list[str] = []
        fetched: list[tuple[str, Response]] = []
        for url, result in zip(self._seed_manifest, results, strict=True):
            if isinstance(result, BaseException):
                logger.debug("Seed %s failed: %s", url, result)
                failed.append(url)
            else:
                fetched.append((url, result))

        if failed:
            raise PopulateError(
                f"{len(failed)} of {len(self._seed_manifest)} seed resources failed: "
                + ", ".join(failed),
                failed_urls=failed,
            )

        written: list[str] = []
        try:
            for url, response in fetched:
                await self._cache.put(self._seed_region, url, response)
                written.append(url)
        except CacheBackendError:
            await self._discard(written)
            raise

    async def _fetch_seed(self, url: str) -> Response:
        response = await self._fetcher.fetch(RequestDescriptor(url=url))
        if not response.ok:
            raise NetworkError(
                f"Seed {url} returned HTTP {response.status}", url=url, error_type="bad_status"
            )
        return response

    async def _delete_region(self, name: str) -> bool:
        logger.info("Deleting stale region: %s", name)
        return await self._cache.delete_region(name)

    async def _discard(self, urls: list[str]) -> None:
        """Remove seed entries from an interrupted write so none survive."""
        for url in urls:
            try:
                await self._cache.delete(self._seed_region, url)
            except CacheBackendError as e:
                logger.error("Could not roll back seed %s: %s", url, e)
