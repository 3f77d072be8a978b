"""Strategy engine — classification and the caching policies it selects."""

from offcache.strategies.base import Strategy
from offcache.strategies.cache_first import CacheFirstStrategy, ImageFallbackStrategy
from offcache.strategies.classifier import classify
from offcache.strategies.network_first import (
    DefaultNetworkFirstStrategy,
    NetworkFirstStrategy,
)
from offcache.strategies.registry import StrategyRegistry

__all__ = [
    "Strategy",
    "CacheFirstStrategy",
    "ImageFallbackStrategy",
    "NetworkFirstStrategy",
    "DefaultNetworkFirstStrategy",
    "StrategyRegistry",
    "classify",
]
