"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Core record and callable types shared by the cache and storage backends.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")

Producer = Callable[[], Awaitable[T]]
UpdateObserver = Callable[[str, Any], Awaitable[None] | None]
Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class CacheRecord(Generic[T]):
    """Last produced value for one key and the wall-clock second it was written."""

    value: T
    updated_at: float

    def age(self, now: float) -> float:
        return now - self.updated_at
