"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Freshness classification for cached records.
"""

from __future__ import annotations

from typing import Any, Literal

from .types import CacheRecord

Freshness = Literal["fresh", "stale", "expired"]


def classify(
    record: CacheRecord[Any] | None,
    *,
    now: float,
    ttl_s: float,
    stale_ttl_s: float,
) -> Freshness:
    """
    Classify one record relative to `now`.

    - `fresh`: age <= ttl
    - `stale`: ttl < age <= ttl + stale_ttl (empty when stale_ttl is 0)
    - `expired`: no record, or age > ttl + stale_ttl
    """
    if record is None:
        return "expired"
    age = record.age(now)
    if age <= ttl_s:
        return "fresh"
    if age <= ttl_s + stale_ttl_s:
        return "stale"
    return "expired"
