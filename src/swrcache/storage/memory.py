"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: storage/memory.py.
"""

from __future__ import annotations

from typing import Any

from ..types import CacheRecord
from .base import StorageAdapter


class InMemoryStorage(StorageAdapter):
    """Process-local, unbounded record store. Each cache owns its own instance."""

    backend_id: str = "inmemory"

    def __init__(self) -> None:
        self._rows: dict[str, CacheRecord[Any]] = {}

    async def get(self, key: str) -> CacheRecord[Any] | None:
        return self._rows.get(key)

    async def set(self, key: str, record: CacheRecord[Any]) -> None:
        self._rows[key] = record

    async def delete(self, key: str) -> None:
        self._rows.pop(key, None)

    def __len__(self) -> int:
        return len(self._rows)
