"""Concurrency helpers for the single-threaded asyncio engine."""

from offcache.concurrency.tasks import DetachedTasks

__all__ = ["DetachedTasks"]
