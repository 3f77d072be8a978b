"""Top-level entry point: the OfflineEngine facade."""

from __future__ import annotations

import logging

from offcache.cache.manager import CacheManager, create_store
from offcache.concurrency.tasks import DetachedTasks
from offcache.config.hierarchy import load_config_hierarchy
from offcache.config.loader import build_engine_config
from offcache.config.schema import EngineConfig
from offcache.lifecycle.manager import LifecycleManager
from offcache.lifecycle.refresh import BackgroundRefresh
from offcache.network.client import AsyncFetcher, Fetcher
from offcache.strategies.classifier import classify
from offcache.strategies.registry import StrategyRegistry
from offcache.types import RegionPurpose, RequestDescriptor, Response, Signal

logger = logging.getLogger(__name__)


class OfflineEngine:
    """Classifies requests, runs caching strategies and manages regions.

    The host calls ``on_install`` once at startup, ``on_activate`` when this
    version takes over, ``handle`` for every intercepted request and
    ``on_sync_tag`` when a refresh signal arrives.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        cache: CacheManager | None = None,
        fetcher: Fetcher | None = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._cache = cache or CacheManager(
            store=create_store(self._config.cache.backend, self._config.cache.db_path),
            origin=self._config.origin,
        )
        self._owns_fetcher = fetcher is None
        self._fetcher: Fetcher = fetcher or AsyncFetcher(
            origin=self._config.origin,
            timeout=self._config.network.timeout_seconds,
            max_attempts=self._config.network.max_attempts,
        )
        self._tasks = DetachedTasks()

        regions = self._config.regions
        self._registry = StrategyRegistry.from_config(
            self._config, self._cache, self._fetcher, self._tasks
        )
        self._lifecycle = LifecycleManager(
            self._cache,
            self._fetcher,
            seed_region=regions.for_purpose(self._config.seed_region),
            seed_manifest=self._config.seed_manifest,
            known_regions=regions.known,
        )
        self._refresh = BackgroundRefresh(
            self._cache,
            self._fetcher,
            region=regions.for_purpose(RegionPurpose.VERSION),
            tag=self._config.refresh.tag,
            url=self._config.refresh.url,
        )

    @classmethod
    def from_config_hierarchy(cls, **runtime_overrides: object) -> OfflineEngine:
        """Build an engine from defaults, config files, env vars and overrides."""
        config = build_engine_config(load_config_hierarchy(**runtime_overrides))
        return cls(config=config)

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def cache(self) -> CacheManager:
        return self._cache

    @property
    def tasks(self) -> DetachedTasks:
        return self._tasks

    @property
    def registry(self) -> StrategyRegistry:
        return self._registry

    async def on_install(self) -> bool:
        logger.info("Engine installing")
        return await self._lifecycle.populate()

    async def on_activate(self) -> list[str]:
        logger.info("Engine activating")
        return await self._lifecycle.prune()

    async def handle(self, request: RequestDescriptor) -> Response | Signal:
        """Resolve a request. Non-GET requests are passed through untouched."""
        if not request.is_get:
            logger.debug("Pass-through %s %s", request.method, request.url)
            return Signal.PASS_THROUGH

        request_class = classify(request)
        strategy = self._registry.get(request_class)
        logger.debug("%s → %s (%s)", request.url, request_class, strategy.name)
        return await strategy.execute(request)

    async def on_sync_tag(self, tag: str) -> bool:
        return await self._refresh.on_tag(tag)

    async def close(self) -> None:
        """Let detached writes finish, then release network and storage."""
        await self._tasks.drain()
        if self._owns_fetcher and isinstance(self._fetcher, AsyncFetcher):
            await self._fetcher.close()
        await self._cache.close()
