"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Pluggable record storage for the SWR cache.
"""

from .base import StorageAdapter
from .factory import create_storage_from_env
from .memory import InMemoryStorage
from .redis import RedisStorage, SimpleRedis

__all__ = [
    "StorageAdapter",
    "InMemoryStorage",
    "RedisStorage",
    "SimpleRedis",
    "create_storage_from_env",
]
