from __future__ import annotations

import asyncio

import pytest

from swrcache import (
    InMemoryStorage,
    RedisStorage,
    StorageBackendError,
    create_cache_from_env,
    create_storage_from_env,
)


class _Client:
    def __init__(self) -> None:
        self.rows: dict[str, str] = {}

    async def get(self, name):
        return self.rows.get(name)

    async def set(self, name, value):
        self.rows[name] = value

    async def delete(self, *names):
        for name in names:
            self.rows.pop(name, None)


def test_defaults_to_in_memory(monkeypatch):
    monkeypatch.delenv("SWR_CACHE_BACKEND", raising=False)
    assert isinstance(create_storage_from_env(), InMemoryStorage)


def test_each_call_builds_a_new_in_memory_store(monkeypatch):
    monkeypatch.setenv("SWR_CACHE_BACKEND", "memory")
    assert create_storage_from_env() is not create_storage_from_env()


def test_redis_backend_uses_supplied_client_and_prefix(monkeypatch):
    monkeypatch.setenv("SWR_CACHE_BACKEND", "Redis")
    monkeypatch.setenv("SWR_CACHE_REDIS_PREFIX", "app:swr:")
    storage = create_storage_from_env(redis_client=_Client())
    assert isinstance(storage, RedisStorage)
    assert storage.prefix == "app:swr:"


def test_redis_backend_builds_client_from_url(monkeypatch):
    pytest.importorskip("redis.asyncio")
    monkeypatch.setenv("SWR_CACHE_BACKEND", "redis")
    monkeypatch.setenv("SWR_CACHE_REDIS_URL", "redis://localhost:6379/3")
    monkeypatch.delenv("SWR_CACHE_REDIS_PREFIX", raising=False)
    storage = create_storage_from_env()
    assert isinstance(storage, RedisStorage)
    assert storage.prefix == "swr:"


def test_unknown_backend_is_rejected(monkeypatch):
    monkeypatch.setenv("SWR_CACHE_BACKEND", "memcached")
    with pytest.raises(StorageBackendError, match="memcached"):
        create_storage_from_env()


def test_create_cache_from_env(monkeypatch):
    monkeypatch.setenv("SWR_CACHE_TTL_S", "60")
    monkeypatch.setenv("SWR_CACHE_STALE_TTL_S", "120")
    monkeypatch.setenv("SWR_CACHE_BACKEND", "redis")
    monkeypatch.delenv("SWR_CACHE_REDIS_PREFIX", raising=False)
    client = _Client()
    cache = create_cache_from_env(redis_client=client)

    assert cache.config.ttl_s == 60.0
    assert cache.config.stale_ttl_s == 120.0

    async def scenario() -> None:
        async def producer() -> dict[str, int]:
            return {"n": 1}

        assert await cache.wrap("k", producer) == {"n": 1}
        assert await cache.wrap("k", producer) == {"n": 1}

    asyncio.run(scenario())
    assert list(client.rows) == ["swr:k"]
