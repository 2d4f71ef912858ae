"""EventEmitter — formats domain events and fans them out to sinks.

The simulation core calls ``emit()`` synchronously from its tick
functions.  The emitter wraps the payload in the outbound envelope and
hands it to every registered sink.  A sink that raises is logged and
skipped; delivery problems never propagate back into the core.
"""

from __future__ import annotations

import logging
from typing import Any

from vanara_ops.domain.enums import EventName
from vanara_ops.domain.events import OutboundEvent
from vanara_ops.sinks.base import EventSink

logger = logging.getLogger(__name__)


class SinkStats:
    """Per-sink delivery statistics for observability."""

    __slots__ = ("sink_name", "delivered_count", "failed_count")

    def __init__(self, sink_name: str) -> None:
        self.sink_name = sink_name
        self.delivered_count: int = 0
        self.failed_count: int = 0

    def to_dict(self) -> dict:
        return {
            "sink_name": self.sink_name,
            "delivered_count": self.delivered_count,
            "failed_count": self.failed_count,
        }


class EventEmitter:
    """Fan-out of outbound events to registered sinks.

    Usage:
        emitter = EventEmitter()
        emitter.register(WebhookSink(settings.webhook_url))
        emitter.emit(EventName.BOT_MOVE, {"botId": "VNR-01", ...})
    """

    def __init__(self, sinks: list[EventSink] | None = None) -> None:
        self._sinks: list[EventSink] = []
        self._stats: dict[str, SinkStats] = {}
        for sink in sinks or []:
            self.register(sink)

    def register(self, sink: EventSink) -> None:
        self._sinks.append(sink)
        self._stats[sink.sink_name] = SinkStats(sink.sink_name)
        logger.info("Registered event sink: %s", sink.sink_name)

    def emit(self, event: EventName | str, payload: dict[str, Any] | None = None) -> OutboundEvent:
        """Build the envelope for *event* and deliver it to every sink.

        Returns the envelope so callers can also record or return it.
        """
        envelope = OutboundEvent(event=EventName(event), payload=payload or {})
        for sink in self._sinks:
            stats = self._stats[sink.sink_name]
            try:
                sink.deliver(envelope)
                stats.delivered_count += 1
            except Exception as exc:
                stats.failed_count += 1
                logger.warning(
                    "Sink '%s' failed to take event %s: %s",
                    sink.sink_name,
                    envelope.event.value,
                    exc,
                )
        logger.debug("Emitted %s", envelope.event.value)
        return envelope

    def close(self) -> None:
        for sink in self._sinks:
            try:
                sink.close()
            except Exception as exc:
                logger.warning("Sink '%s' failed to close: %s", sink.sink_name, exc)

    @property
    def sink_names(self) -> list[str]:
        return [s.sink_name for s in self._sinks]

    @property
    def stats(self) -> list[dict]:
        return [s.to_dict() for s in self._stats.values()]
