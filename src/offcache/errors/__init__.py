"""Error handling — exceptions raised and recovered inside the engine."""

from offcache.errors.exceptions import (
    CacheBackendError,
    ConfigError,
    NetworkError,
    OffcacheError,
    PopulateError,
    RefreshError,
)

__all__ = [
    "OffcacheError",
    "NetworkError",
    "CacheBackendError",
    "PopulateError",
    "RefreshError",
    "ConfigError",
]
