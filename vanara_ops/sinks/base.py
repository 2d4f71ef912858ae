"""Abstract base for outbound event sinks.

An event sink is the narrow boundary between the simulation core and
whatever consumes its events (webhook, dashboard sockets, test buffers).

Architectural rules:
    1. deliver() is called synchronously from tick callbacks and must
       return promptly; slow work is handed off, never awaited.
    2. Sinks must NOT mutate the event or reach back into simulation state.
    3. Failures may raise; the EventEmitter catches and logs them so a
       broken sink never affects simulation state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from vanara_ops.domain.events import OutboundEvent


class EventSink(ABC):
    """Base class for consumers of outbound simulation events."""

    @abstractmethod
    def deliver(self, event: OutboundEvent) -> None:
        """Hand *event* off for delivery.  Best-effort, unacknowledged."""
        ...

    @property
    @abstractmethod
    def sink_name(self) -> str:
        """Human-readable name used in logs and stats."""
        ...

    def close(self) -> None:
        """Release any resources.  Default: nothing to release."""
