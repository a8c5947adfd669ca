"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache timing settings and environment loading.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .errors import CacheConfigError

logger = logging.getLogger("swrcache.config")


def _env_first(*names: str, default: str | None = None) -> str | None:
    """
    Return the first non-empty environment variable in `names`.

    Args:
        *names: Environment variable names to check in order.
        default: Value returned if no non-empty variable is found.
    """
    for name in names:
        raw = os.getenv(name)
        if raw is None:
            continue
        value = raw.strip()
        if value:
            return value
    return default


def _parse_seconds(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError as exc:
        raise CacheConfigError(f"{name} must be a number of seconds, got {raw!r}") from exc


@dataclass(frozen=True, slots=True)
class SWRCacheConfig:
    """
    Immutable timing window for one cache instance.

    `ttl_s` is the freshness window. `stale_ttl_s` extends it: records aged
    between `ttl_s` and `ttl_s + stale_ttl_s` are served while a refresh runs.
    Negative durations are clamped to zero.
    """

    ttl_s: float
    stale_ttl_s: float = 0.0

    def __post_init__(self) -> None:
        if self.ttl_s < 0:
            logger.warning("Negative ttl_s=%s clamped to 0", self.ttl_s)
            object.__setattr__(self, "ttl_s", 0.0)
        if self.stale_ttl_s < 0:
            logger.warning("Negative stale_ttl_s=%s clamped to 0", self.stale_ttl_s)
            object.__setattr__(self, "stale_ttl_s", 0.0)

    @property
    def serve_window_s(self) -> float:
        """Age beyond which a record must be recomputed before it is returned."""
        return self.ttl_s + self.stale_ttl_s

    @staticmethod
    def from_env() -> "SWRCacheConfig":
        """Load settings from `SWR_CACHE_TTL_S` and `SWR_CACHE_STALE_TTL_S`."""
        ttl_raw = _env_first("SWR_CACHE_TTL_S")
        if ttl_raw is None:
            raise CacheConfigError("SWR_CACHE_TTL_S is required")
        stale_raw = _env_first("SWR_CACHE_STALE_TTL_S", default="0") or "0"
        return SWRCacheConfig(
            ttl_s=_parse_seconds("SWR_CACHE_TTL_S", ttl_raw),
            stale_ttl_s=_parse_seconds("SWR_CACHE_STALE_TTL_S", stale_raw),
        )
