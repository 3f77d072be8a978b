"""Network access for the engine."""

from offcache.network.client import AsyncFetcher, Fetcher

__all__ = ["AsyncFetcher", "Fetcher"]
