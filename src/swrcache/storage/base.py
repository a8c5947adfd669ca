"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: storage/base.py.
"""

from __future__ import annotations

from typing import Any, Protocol

from ..types import CacheRecord


class StorageAdapter(Protocol):
    """
    Persistence contract consumed by `SWRCache`.

    Backends store exactly the record they are given and return exactly what
    is stored. No TTL is applied at this layer; freshness is decided by the
    cache. Backend I/O errors propagate to the caller.
    """

    backend_id: str

    async def get(self, key: str) -> CacheRecord[Any] | None: ...

    async def set(self, key: str, record: CacheRecord[Any]) -> None: ...

    async def delete(self, key: str) -> None: ...
