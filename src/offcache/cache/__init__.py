"""Cache subsystem — named regions over a memory or SQLite backend."""

from offcache.cache.disk import DiskCacheStore
from offcache.cache.keys import generate_cache_key, normalize_url
from offcache.cache.manager import CacheManager, CacheStore, create_store
from offcache.cache.memory import MemoryCacheStore
from offcache.cache.stats import CacheEntry, CacheStats

__all__ = [
    "CacheManager",
    "CacheStore",
    "CacheEntry",
    "CacheStats",
    "DiskCacheStore",
    "MemoryCacheStore",
    "create_store",
    "generate_cache_key",
    "normalize_url",
]
