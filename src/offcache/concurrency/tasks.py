"""Detached tasks — side effects spawned to run to completion on their own."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DetachedTasks:
    """Tracks fire-and-forget tasks spawned by request handling.

    The spawner never joins a detached task. A failure is captured and
    logged from the task's done-callback. Strong references are held until
    completion so the event loop cannot garbage-collect a pending write.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()
        self._failures = 0

    @property
    def pending(self) -> int:
        return len(self._tasks)

    @property
    def failures(self) -> int:
        return self._failures

    def spawn(self, coro: Coroutine[Any, Any, T], name: str | None = None) -> asyncio.Task[T]:
        """Schedule ``coro`` and return its task without awaiting it."""
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    async def drain(self) -> None:
        """Wait for every task spawned so far (used at shutdown and in tests)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning("Detached task %s was cancelled", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            self._failures += 1
            logger.error("Detached task %s failed: %s", task.get_name(), exc)
