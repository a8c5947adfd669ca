from __future__ import annotations

import asyncio
from collections.abc import Mapping

import pytest


class FakeClock:
    """Manually advanced wall clock in seconds."""

    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingMetrics:
    def __init__(self) -> None:
        self.counts: dict[tuple[str, tuple[tuple[str, str], ...]], int] = {}

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        key = (name, tuple(sorted((tags or {}).items())))
        self.counts[key] = self.counts.get(key, 0) + value

    def total(self, name: str, **tags: str) -> int:
        return self.counts.get((name, tuple(sorted(tags.items()))), 0)


class GatedProducer:
    """Producer that blocks until released and counts its invocations."""

    def __init__(self, *values: object) -> None:
        self._values = list(values)
        self.calls = 0
        self.gate = asyncio.Event()
        self.error: BaseException | None = None

    async def __call__(self) -> object:
        self.calls += 1
        await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self._values[min(self.calls, len(self._values)) - 1]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def metrics() -> RecordingMetrics:
    return RecordingMetrics()


@pytest.fixture
def gated_producer():
    """Factory for producers that wait on an event created inside the running loop."""
    return GatedProducer
