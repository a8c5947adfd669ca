"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Per-instance registry of in-flight producer invocations.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

T = TypeVar("T")


class InflightRegistry:
    """
    Collapse concurrent producer calls for one key into a single task.

    Lookup and registration in `start` happen without an intervening await,
    so on one event loop at most one task exists per key. Each task removes
    its own entry when it settles, whether it returned or raised.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, asyncio.Task[Any]] = {}

    def get(self, key: str) -> asyncio.Task[Any] | None:
        return self._tasks.get(key)

    def start(self, key: str, factory: Callable[[], Awaitable[T]]) -> asyncio.Task[T]:
        """Return the running task for `key`, creating it if none exists."""
        existing = self._tasks.get(key)
        if existing is not None:
            return existing

        task: asyncio.Task[T] = asyncio.create_task(self._run(key, factory))
        # An eagerly executed task may already have finished and cleaned up.
        if not task.done():
            self._tasks[key] = task
        return task

    async def _run(self, key: str, factory: Callable[[], Awaitable[T]]) -> T:
        try:
            return await factory()
        finally:
            if self._tasks.get(key) is asyncio.current_task():
                del self._tasks[key]

    def keys(self) -> list[str]:
        return list(self._tasks)

    async def wait_all(self) -> None:
        """Wait for every registered task to settle; outcomes are ignored."""
        while self._tasks:
            await asyncio.wait(list(self._tasks.values()))

    def __contains__(self, key: object) -> bool:
        return key in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)
