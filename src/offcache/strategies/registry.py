"""Strategy registry — binds each request class to a configured strategy."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from offcache.strategies.base import Strategy
from offcache.strategies.cache_first import CacheFirstStrategy, ImageFallbackStrategy
from offcache.strategies.network_first import (
    DefaultNetworkFirstStrategy,
    NetworkFirstStrategy,
)
from offcache.types import RegionPurpose, RequestClass, StrategyName

if TYPE_CHECKING:
    from offcache.cache.manager import CacheManager
    from offcache.concurrency.tasks import DetachedTasks
    from offcache.config.schema import EngineConfig
    from offcache.network.client import Fetcher

logger = logging.getLogger(__name__)

_STRATEGY_TYPES: dict[StrategyName, type[Strategy]] = {
    StrategyName.CACHE_FIRST: CacheFirstStrategy,
    StrategyName.NETWORK_FIRST: NetworkFirstStrategy,
    StrategyName.CACHE_FIRST_IMAGE_FALLBACK: ImageFallbackStrategy,
    StrategyName.NETWORK_FIRST_DEFAULT: DefaultNetworkFirstStrategy,
}

# Region each request class reads from and writes to
_CLASS_REGIONS: dict[RequestClass, RegionPurpose] = {
    RequestClass.STATIC_ASSET: RegionPurpose.ASSETS,
    RequestClass.PAGE_OR_DATA: RegionPurpose.VERSION,
    RequestClass.IMAGE: RegionPurpose.IMAGES,
    RequestClass.OTHER: RegionPurpose.VERSION,
}


class StrategyRegistry:
    """Holds one strategy instance per request class."""

    def __init__(self, strategies: dict[RequestClass, Strategy]) -> None:
        missing = set(RequestClass) - set(strategies)
        if missing:
            raise ValueError(f"No strategy for request classes: {sorted(missing)}")
        self._strategies = dict(strategies)

    @classmethod
    def from_config(
        cls,
        config: EngineConfig,
        cache: CacheManager,
        fetcher: Fetcher,
        tasks: DetachedTasks,
    ) -> StrategyRegistry:
        strategies: dict[RequestClass, Strategy] = {}
        for request_class, strategy_name in config.strategies.items():
            region = config.regions.for_purpose(_CLASS_REGIONS[request_class])
            strategy_type = _STRATEGY_TYPES[strategy_name]
            strategies[request_class] = strategy_type(cache, fetcher, region, tasks)
            logger.debug(
                "Strategy for %s: %s on region '%s'", request_class, strategy_name, region
            )
        return cls(strategies)

    def get(self, request_class: RequestClass) -> Strategy:
        return self._strategies[request_class]

    def names(self) -> dict[RequestClass, StrategyName]:
        return {rc: strategy.name for rc, strategy in self._strategies.items()}
