from __future__ import annotations

import os
import uuid

import pytest

from swrcache import CacheRecord, RedisStorage, create_cache


def _redis_url() -> str | None:
    return os.getenv("SWR_TEST_REDIS_URL")


@pytest.mark.skipif(_redis_url() is None, reason="SWR_TEST_REDIS_URL is not set")
@pytest.mark.asyncio
async def test_redis_storage_with_real_redis():
    redis = pytest.importorskip("redis.asyncio")
    client = redis.Redis.from_url(_redis_url())
    prefix = f"itest:swr:{uuid.uuid4().hex}:"
    storage = RedisStorage(client, prefix=prefix)

    await storage.set("k", CacheRecord(value={"a": [1, 2]}, updated_at=10.5))
    assert await storage.get("k") == CacheRecord(value={"a": [1, 2]}, updated_at=10.5)

    await storage.delete("k")
    assert await storage.get("k") is None
    await client.aclose()


@pytest.mark.skipif(_redis_url() is None, reason="SWR_TEST_REDIS_URL is not set")
@pytest.mark.asyncio
async def test_two_caches_share_records_through_redis():
    redis = pytest.importorskip("redis.asyncio")
    client = redis.Redis.from_url(_redis_url())
    prefix = f"itest:swr:{uuid.uuid4().hex}:"
    calls = 0

    async def producer() -> int:
        nonlocal calls
        calls += 1
        return calls

    first = create_cache(ttl_s=60, storage=RedisStorage(client, prefix=prefix))
    second = create_cache(ttl_s=60, storage=RedisStorage(client, prefix=prefix))

    assert await first.wrap("k", producer) == 1
    assert await second.wrap("k", producer) == 1
    assert calls == 1

    await first.delete("k")
    await client.aclose()
