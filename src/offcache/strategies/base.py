"""Strategy contract shared by every caching policy."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from offcache.types import RequestDescriptor, Response, StrategyName

if TYPE_CHECKING:
    from offcache.cache.manager import CacheManager
    from offcache.concurrency.tasks import DetachedTasks
    from offcache.network.client import Fetcher


class Strategy(ABC):
    """A caching policy bound to one region.

    Strategies never raise for network or cache-backend faults: every path
    resolves to a well-formed Response.
    """

    name: StrategyName

    def __init__(
        self,
        cache: CacheManager,
        fetcher: Fetcher,
        region: str,
        tasks: DetachedTasks,
    ) -> None:
        self._cache = cache
        self._fetcher = fetcher
        self._region = region
        self._tasks = tasks

    @property
    def region(self) -> str:
        return self._region

    @abstractmethod
    async def execute(self, request: RequestDescriptor) -> Response:
        """Resolve ``request`` to a live, cached or synthesized response."""
