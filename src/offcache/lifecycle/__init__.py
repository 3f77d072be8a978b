"""Region lifecycle — install-time population, activation pruning, refresh."""

from offcache.lifecycle.manager import LifecycleManager
from offcache.lifecycle.refresh import BackgroundRefresh

__all__ = ["LifecycleManager", "BackgroundRefresh"]
