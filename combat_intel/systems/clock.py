"""Millisecond clocks injected into every analyzer."""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]


def monotonic_ms() -> int:
    """Process-wide monotonic time in milliseconds."""
    return time.monotonic_ns() // 1_000_000


class ManualClock:
    """Clock that only moves when told to. Used by scenarios and tests."""

    __slots__ = ("_now",)

    def __init__(self, start_ms: int = 0) -> None:
        self._now = start_ms

    def __call__(self) -> int:
        return self._now

    def advance(self, ms: int) -> int:
        if ms < 0:
            raise ValueError("Clock cannot move backwards")
        self._now += ms
        return self._now

    def set(self, ms: int) -> None:
        if ms < self._now:
            raise ValueError("Clock cannot move backwards")
        self._now = ms
