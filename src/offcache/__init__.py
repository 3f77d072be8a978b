"""offcache — offline-capable resource caching proxy engine."""

from offcache.core import OfflineEngine
from offcache.types import (
    RequestClass,
    RequestDescriptor,
    Response,
    Signal,
    StrategyName,
)

__all__ = [
    "OfflineEngine",
    "RequestClass",
    "RequestDescriptor",
    "Response",
    "Signal",
    "StrategyName",
]
