"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Stale-while-revalidate memoization in front of an async producer.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from functools import partial
from typing import Any, Literal, TypeVar

from .config import SWRCacheConfig
from .freshness import Freshness, classify
from .inflight import InflightRegistry
from .metrics import (
    INFLIGHT_JOINS,
    LOOKUPS,
    OBSERVER_FAILURES,
    PRODUCER_CALLS,
    PRODUCER_FAILURES,
    CacheMetrics,
    NoOpCacheMetrics,
)
from .storage import InMemoryStorage, StorageAdapter, create_storage_from_env
from .types import CacheRecord, Clock, Producer, UpdateObserver

logger = logging.getLogger("swrcache.cache")

T = TypeVar("T")

_Path = Literal["foreground", "background"]


class SWRCache:
    """
    Serve cached values by age and refresh them through one producer call per key.

    For `wrap(key, producer)`:
    - fresh record: returned as is.
    - stale record: returned as is, and a background refresh is started
      unless one is already running for the key.
    - expired or missing record: the caller waits for a new value, joining
      the running producer call for the key when there is one.

    The in-flight registry, not the record's age, decides whether a producer
    call is already running. Each instance owns its storage (in-memory by
    default) and its registry, so independent caches never share state.
    """

    def __init__(
        self,
        config: SWRCacheConfig,
        *,
        storage: StorageAdapter | None = None,
        on_update: UpdateObserver | None = None,
        metrics: CacheMetrics | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._config = config
        self._storage = storage if storage is not None else InMemoryStorage()
        self._on_update = on_update
        self._metrics = metrics or NoOpCacheMetrics()
        self._clock = clock or time.time
        self._inflight = InflightRegistry()
        self._observer_tasks: set[asyncio.Future[Any]] = set()

    @property
    def config(self) -> SWRCacheConfig:
        return self._config

    @property
    def storage(self) -> StorageAdapter:
        return self._storage

    async def get(self, key: str) -> Any | None:
        """Return the stored value regardless of age, or None when absent."""
        record = await self._storage.get(key)
        if record is None:
            return None
        return record.value

    async def get_record(self, key: str) -> CacheRecord[Any] | None:
        return await self._storage.get(key)

    async def set(self, key: str, value: Any) -> None:
        """Write `value` stamped with the current time and notify the observer."""
        await self._write(key, value)

    async def delete(self, key: str) -> None:
        await self._storage.delete(key)

    async def freshness(self, key: str) -> Freshness:
        return self._classify(await self._storage.get(key))

    def is_inflight(self, key: str) -> bool:
        return key in self._inflight

    async def wrap(self, key: str, producer: Producer[T]) -> T:
        """
        Return the value for `key`, invoking `producer` only when needed.

        Producer failures reach every caller waiting on that invocation.
        Callers served a stale value never see a background refresh failure.
        Storage errors propagate unchanged.
        """
        record = await self._storage.get(key)
        state = self._classify(record)
        self._metrics.incr(LOOKUPS, tags={"state": state})

        if state == "fresh":
            return record.value

        if state == "stale":
            if key not in self._inflight:
                self._spawn(key, producer, "background")
            return record.value

        task = self._inflight.get(key)
        if task is None:
            task = self._spawn(key, producer, "foreground")
        else:
            self._metrics.incr(INFLIGHT_JOINS)
        # Cancelling one waiter must not cancel the shared producer call.
        return await asyncio.shield(task)

    async def drain(self) -> None:
        """Wait for running producer calls and async observers to finish."""
        while len(self._inflight) or self._observer_tasks:
            await self._inflight.wait_all()
            if self._observer_tasks:
                await asyncio.wait(list(self._observer_tasks))

    def _classify(self, record: CacheRecord[Any] | None) -> Freshness:
        return classify(
            record,
            now=self._clock(),
            ttl_s=self._config.ttl_s,
            stale_ttl_s=self._config.stale_ttl_s,
        )

    def _spawn(self, key: str, producer: Producer[T], path: _Path) -> asyncio.Task[T]:
        task = self._inflight.start(key, partial(self._produce, key, producer))
        task.add_done_callback(partial(self._producer_settled, key, path))
        return task

    async def _produce(self, key: str, producer: Producer[T]) -> T:
        self._metrics.incr(PRODUCER_CALLS)
        value = await producer()
        await self._write(key, value)
        return value

    async def _write(self, key: str, value: Any) -> None:
        await self._storage.set(key, CacheRecord(value=value, updated_at=self._clock()))
        self._notify(key, value)

    def _producer_settled(self, key: str, path: _Path, task: asyncio.Task[Any]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        self._metrics.incr(PRODUCER_FAILURES, tags={"path": path})
        if path == "background":
            logger.warning(
                "Background refresh for key %r failed; keeping stale record",
                key,
                exc_info=exc,
            )
        else:
            logger.debug("Producer for key %r failed", key, exc_info=exc)

    def _notify(self, key: str, value: Any) -> None:
        """Fire the update observer without letting it affect the write."""
        if self._on_update is None:
            return
        try:
            result = self._on_update(key, value)
        except Exception:  # noqa: BLE001
            self._metrics.incr(OBSERVER_FAILURES)
            logger.exception("on_update observer failed for key %r", key)
            return
        if inspect.isawaitable(result):
            pending = asyncio.ensure_future(result)
            self._observer_tasks.add(pending)
            pending.add_done_callback(partial(self._observer_settled, key))

    def _observer_settled(self, key: str, pending: asyncio.Future[Any]) -> None:
        self._observer_tasks.discard(pending)
        if pending.cancelled():
            return
        exc = pending.exception()
        if exc is not None:
            self._metrics.incr(OBSERVER_FAILURES)
            logger.error("on_update observer failed for key %r", key, exc_info=exc)


def create_cache(
    *,
    ttl_s: float,
    stale_ttl_s: float = 0.0,
    storage: StorageAdapter | None = None,
    on_update: UpdateObserver | None = None,
    metrics: CacheMetrics | None = None,
    clock: Clock | None = None,
) -> SWRCache:
    """Build a cache from keyword timing options."""
    return SWRCache(
        SWRCacheConfig(ttl_s=ttl_s, stale_ttl_s=stale_ttl_s),
        storage=storage,
        on_update=on_update,
        metrics=metrics,
        clock=clock,
    )


def create_cache_from_env(
    *,
    redis_client: Any | None = None,
    on_update: UpdateObserver | None = None,
    metrics: CacheMetrics | None = None,
) -> SWRCache:
    """Build a cache from `SWR_CACHE_*` timing and backend environment variables."""
    return SWRCache(
        SWRCacheConfig.from_env(),
        storage=create_storage_from_env(redis_client=redis_client),
        on_update=on_update,
        metrics=metrics,
    )
