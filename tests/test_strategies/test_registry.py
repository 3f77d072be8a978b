"""Tests for the strategy registry."""

import pytest

from offcache.config.schema import EngineConfig
from offcache.strategies.cache_first import CacheFirstStrategy, ImageFallbackStrategy
from offcache.strategies.network_first import (
    DefaultNetworkFirstStrategy,
    NetworkFirstStrategy,
)
from offcache.strategies.registry import StrategyRegistry
from offcache.types import RequestClass, StrategyName


class TestStrategyRegistry:
    def test_default_bindings(self, cache, fetcher, tasks):
        registry = StrategyRegistry.from_config(EngineConfig(), cache, fetcher, tasks)
        assert isinstance(registry.get(RequestClass.STATIC_ASSET), CacheFirstStrategy)
        assert isinstance(registry.get(RequestClass.PAGE_OR_DATA), NetworkFirstStrategy)
        assert isinstance(registry.get(RequestClass.IMAGE), ImageFallbackStrategy)
        assert isinstance(registry.get(RequestClass.OTHER), DefaultNetworkFirstStrategy)

    def test_regions(self, cache, fetcher, tasks):
        registry = StrategyRegistry.from_config(EngineConfig(), cache, fetcher, tasks)
        assert registry.get(RequestClass.STATIC_ASSET).region == "techflow-assets-v1"
        assert registry.get(RequestClass.PAGE_OR_DATA).region == "techflow-v1.2"
        assert registry.get(RequestClass.IMAGE).region == "techflow-images-v1"
        assert registry.get(RequestClass.OTHER).region == "techflow-v1.2"

    def test_configured_override(self, cache, fetcher, tasks):
        config = EngineConfig(strategies={RequestClass.OTHER: StrategyName.CACHE_FIRST})
        registry = StrategyRegistry.from_config(config, cache, fetcher, tasks)
        assert registry.names()[RequestClass.OTHER] == StrategyName.CACHE_FIRST
        # Region follows the request class, not the strategy
        assert registry.get(RequestClass.OTHER).region == "techflow-v1.2"

    def test_missing_class_rejected(self, cache, fetcher, tasks):
        strategy = CacheFirstStrategy(cache, fetcher, "r", tasks)
        with pytest.raises(ValueError, match="No strategy"):
            StrategyRegistry({RequestClass.STATIC_ASSET: strategy})
