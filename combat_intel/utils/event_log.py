"""Thread-safe bounded log of recent decisions, exposed via the API."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class DecisionEvent:
    """One recommendation as handed to the caller."""

    sequence: int
    timestamp_ms: int
    kind: str
    reason: str
    next_spell: str | None = None
    payload: dict = field(default_factory=dict, compare=False)


class DecisionLog:
    """Ring buffer of the most recent decisions.

    Writes happen once per decide call; reads copy under the lock.
    """

    __slots__ = ("_buffer", "_lock", "_sequence")

    def __init__(self, maxlen: int = 500) -> None:
        self._buffer: deque[DecisionEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()
        self._sequence = 0

    def append(
        self,
        timestamp_ms: int,
        kind: str,
        reason: str,
        next_spell: str | None = None,
        payload: dict | None = None,
    ) -> DecisionEvent:
        with self._lock:
            self._sequence += 1
            event = DecisionEvent(self._sequence, timestamp_ms, kind, reason, next_spell, payload or {})
            self._buffer.append(event)
        return event

    def latest(self, count: int = 50) -> list[DecisionEvent]:
        """Return the *count* most recent events, oldest first."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:] if count > 0 else []

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()
