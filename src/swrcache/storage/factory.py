"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Factory helpers for selecting storage backends from environment variables.
"""

from __future__ import annotations

from typing import Any

from ..config import _env_first
from ..errors import StorageBackendError
from .base import StorageAdapter
from .memory import InMemoryStorage


def _redis_url_from_env() -> str:
    url = _env_first("SWR_CACHE_REDIS_URL", "SWR_REDIS_URL")
    if url:
        return url
    host = _env_first("SWR_CACHE_REDIS_HOST", "SWR_REDIS_HOST", default="localhost")
    port = _env_first("SWR_CACHE_REDIS_PORT", "SWR_REDIS_PORT", default="6379")
    db = _env_first("SWR_CACHE_REDIS_DB", "SWR_REDIS_DB", default="0")
    password = _env_first("SWR_CACHE_REDIS_PASSWORD", "SWR_REDIS_PASSWORD", default="")
    if password:
        return f"redis://:{password}@{host}:{port}/{db}"
    return f"redis://{host}:{port}/{db}"


def create_storage_from_env(*, redis_client: Any | None = None) -> StorageAdapter:
    """
    Create a storage backend from `SWR_CACHE_*` environment variables.

    Backends:
    - `inmemory` (default)
    - `redis`

    Redis resolution:
    - Uses the provided `redis_client` when supplied.
    - Otherwise builds a client from `SWR_CACHE_REDIS_URL` (or `SWR_REDIS_URL`).
    - If no URL is set, falls back to host/port/db/password variables.
    """
    backend = (_env_first("SWR_CACHE_BACKEND", default="inmemory") or "inmemory").lower()

    if backend in ("mem", "memory", "inmemory", "in_memory"):
        return InMemoryStorage()

    if backend == "redis":
        from .redis import RedisStorage

        prefix = _env_first("SWR_CACHE_REDIS_PREFIX", default="swr:") or "swr:"

        client = redis_client
        if client is None:
            try:
                import redis.asyncio as redis
            except ModuleNotFoundError as exc:  # pragma: no cover
                raise StorageBackendError(
                    "Redis storage backend requires `redis` to be installed."
                ) from exc
            client = redis.Redis.from_url(_redis_url_from_env())

        return RedisStorage(client, prefix=prefix)

    raise StorageBackendError(f"Unknown SWR_CACHE_BACKEND: {backend}")
