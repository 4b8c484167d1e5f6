"""Bounded, snapshot-able log of domain events (spawns, deaths, failures)."""

from __future__ import annotations

from collections import Counter, deque
from dataclasses import dataclass, field
from typing import Any, Iterator


@dataclass(frozen=True)
class Event:
    tick: int
    type: str
    data: dict[str, Any] = field(default_factory=dict)


class EventLog:
    """Append-only record of what happened, oldest entries dropped first.

    ``max_entries <= 0`` keeps every event. Event data must be
    JSON-compatible for :meth:`snapshot` to round-trip.
    """

    def __init__(self, max_entries: int = 0) -> None:
        self._events: deque[Event] = deque(maxlen=max_entries if max_entries > 0 else None)

    def emit(self, tick: int, type: str, **data: Any) -> Event:
        event = Event(tick, type, data)
        self._events.append(event)
        return event

    def query(self, *types: str, after: int | None = None) -> list[Event]:
        """Events of any of *types* (all when none given), newer than *after*."""
        return [
            e for e in self._events
            if (not types or e.type in types) and (after is None or e.tick > after)
        ]

    def last(self, type: str) -> Event | None:
        return next((e for e in reversed(self._events) if e.type == type), None)

    def counts(self) -> Counter[str]:
        return Counter(e.type for e in self._events)

    def snapshot(self) -> list[dict[str, Any]]:
        return [{"tick": e.tick, "type": e.type, "data": e.data} for e in self._events]

    def restore(self, data: list[dict[str, Any]]) -> None:
        self._events.clear()
        self._events.extend(Event(d["tick"], d["type"], d.get("data", {})) for d in data)

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)
