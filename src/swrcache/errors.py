"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Exceptions raised by swrcache itself.

Producer and transport failures are never wrapped; they reach the caller
unchanged.
"""

from __future__ import annotations


class SWRCacheError(RuntimeError):
    """Base class for errors raised by the cache package."""


class CacheConfigError(SWRCacheError, ValueError):
    """Raised when cache configuration is missing or malformed."""


class StorageBackendError(SWRCacheError):
    """Raised when a storage backend cannot be resolved or constructed."""


class RecordDecodeError(SWRCacheError, ValueError):
    """Raised when a stored payload is not a valid serialized record."""
