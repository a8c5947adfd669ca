"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Stale-while-revalidate memoization for async producers.

Quick start::

    from swrcache import create_cache

    cache = create_cache(ttl_s=30, stale_ttl_s=300)
    user = await cache.wrap(f"user:{uid}", lambda: fetch_user(uid))
"""

from .cache import SWRCache, create_cache, create_cache_from_env
from .config import SWRCacheConfig
from .errors import (
    CacheConfigError,
    RecordDecodeError,
    StorageBackendError,
    SWRCacheError,
)
from .freshness import Freshness, classify
from .inflight import InflightRegistry
from .metrics import (
    CACHE_COUNTERS,
    CacheMetrics,
    NoOpCacheMetrics,
    PrometheusCacheMetrics,
)
from .storage import (
    InMemoryStorage,
    RedisStorage,
    SimpleRedis,
    StorageAdapter,
    create_storage_from_env,
)
from .types import CacheRecord, Clock, Producer, UpdateObserver

__all__ = [
    "SWRCache",
    "SWRCacheConfig",
    "create_cache",
    "create_cache_from_env",
    "CacheRecord",
    "Producer",
    "UpdateObserver",
    "Clock",
    "Freshness",
    "classify",
    "InflightRegistry",
    "StorageAdapter",
    "InMemoryStorage",
    "RedisStorage",
    "SimpleRedis",
    "create_storage_from_env",
    "CACHE_COUNTERS",
    "CacheMetrics",
    "NoOpCacheMetrics",
    "PrometheusCacheMetrics",
    "SWRCacheError",
    "CacheConfigError",
    "StorageBackendError",
    "RecordDecodeError",
]
