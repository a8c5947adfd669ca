"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Redis-backed record storage for sharing cached values across processes.
"""

from __future__ import annotations

import json
from typing import Any, Protocol

from ..errors import RecordDecodeError
from ..types import CacheRecord
from .base import StorageAdapter


class SimpleRedis(Protocol):
    """Subset of the `redis.asyncio.Redis` surface the adapter relies on."""

    async def get(self, name: str) -> bytes | str | None: ...

    async def set(self, name: str, value: str) -> Any: ...

    async def delete(self, *names: str) -> Any: ...


class RedisStorage(StorageAdapter):
    """
    Store records as JSON strings under `{prefix}{key}`.

    Values must be JSON-serializable. The prefix namespaces keys so several
    caches can share one Redis database. Transport errors from the client are
    not caught.

    Args:
        redis: A ``redis.asyncio.Redis`` client or any object with async
            ``get``/``set``/``delete``.
        prefix: Key prefix for namespacing.
    """

    backend_id: str = "redis"

    def __init__(self, redis: SimpleRedis, *, prefix: str = "swr:") -> None:
        self._redis = redis
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        return self._prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def _serialize(self, record: CacheRecord[Any]) -> str:
        """Serialize one record to JSON for Redis string storage."""
        return json.dumps(
            {"value": record.value, "updated_at": record.updated_at},
            ensure_ascii=True,
        )

    def _deserialize(self, key: str, raw: str | bytes) -> CacheRecord[Any]:
        """Deserialize one record from JSON stored in Redis."""
        try:
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
            row = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise RecordDecodeError(f"Malformed cache record at '{key}'") from exc
        if not isinstance(row, dict) or "value" not in row or "updated_at" not in row:
            raise RecordDecodeError(f"Cache record at '{key}' is missing fields")
        try:
            updated_at = float(row["updated_at"])
        except (TypeError, ValueError) as exc:
            raise RecordDecodeError(
                f"Cache record at '{key}' has invalid updated_at"
            ) from exc
        return CacheRecord(value=row["value"], updated_at=updated_at)

    async def get(self, key: str) -> CacheRecord[Any] | None:
        name = self._key(key)
        raw = await self._redis.get(name)
        if raw is None:
            return None
        return self._deserialize(name, raw)

    async def set(self, key: str, record: CacheRecord[Any]) -> None:
        await self._redis.set(self._key(key), self._serialize(record))

    async def delete(self, key: str) -> None:
        await self._redis.delete(self._key(key))
