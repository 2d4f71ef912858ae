"""RecentEventsSink — keeps the last N outbound events in memory.

Backs the ``/api/events`` observability endpoint and doubles as the
capture sink in tests.
"""

from __future__ import annotations

from collections import deque

from vanara_ops.domain.enums import EventName
from vanara_ops.domain.events import OutboundEvent
from vanara_ops.sinks.base import EventSink


class RecentEventsSink(EventSink):
    def __init__(self, cap: int = 200) -> None:
        self._events: deque[OutboundEvent] = deque(maxlen=cap)

    @property
    def sink_name(self) -> str:
        return "recent_events"

    def deliver(self, event: OutboundEvent) -> None:
        self._events.append(event)

    def events(self, name: EventName | str | None = None) -> list[OutboundEvent]:
        """Delivered events, oldest first, optionally filtered by name."""
        if name is None:
            return list(self._events)
        wanted = EventName(name)
        return [e for e in self._events if e.event == wanted]

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)
