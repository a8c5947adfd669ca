"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Metrics adapters for cache observability.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

LOOKUPS = "swr_cache_lookups_total"
PRODUCER_CALLS = "swr_cache_producer_calls_total"
PRODUCER_FAILURES = "swr_cache_producer_failures_total"
INFLIGHT_JOINS = "swr_cache_inflight_joins_total"
OBSERVER_FAILURES = "swr_cache_observer_failures_total"

# Counter name -> (help text, label names).
CACHE_COUNTERS: dict[str, tuple[str, tuple[str, ...]]] = {
    LOOKUPS: ("wrap() lookups by record freshness", ("state",)),
    PRODUCER_CALLS: ("Producer invocations started", ()),
    PRODUCER_FAILURES: ("Producer invocations that raised", ("path",)),
    INFLIGHT_JOINS: ("Expired lookups joined to a running producer call", ()),
    OBSERVER_FAILURES: ("on_update observer invocations that raised", ()),
}


class CacheMetrics(Protocol):
    """Minimal metrics interface for cache instrumentation."""

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        """Increment a counter metric."""


class NoOpCacheMetrics:
    """Default metrics sink when no metrics backend is provided."""

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        return None


class PrometheusCacheMetrics(CacheMetrics):
    """
    Prometheus counters for the cache's fixed metric set.

    All counters in `CACHE_COUNTERS` are registered up front, so unlabeled
    ones are exported as 0 before the first event. Requires
    `prometheus_client` package.
    """

    def __init__(self, *, namespace: str = "swrcache", registry=None) -> None:
        try:
            from prometheus_client import REGISTRY, Counter
        except ModuleNotFoundError as exc:  # pragma: no cover
            raise RuntimeError(
                "PrometheusCacheMetrics requires `prometheus_client` to be installed."
            ) from exc

        self._counters = {
            name: Counter(
                name=name,
                documentation=doc,
                namespace=namespace,
                labelnames=labels,
                registry=registry if registry is not None else REGISTRY,
            )
            for name, (doc, labels) in CACHE_COUNTERS.items()
        }

    def incr(self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None) -> None:
        counter = self._counters.get(name)
        if counter is None:
            raise ValueError(f"Unknown cache metric '{name}'")
        labels = CACHE_COUNTERS[name][1]
        if labels:
            counter.labels(*(str((tags or {})[label]) for label in labels)).inc(value)
        else:
            counter.inc(value)
