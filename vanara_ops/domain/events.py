"""OutboundEvent — the envelope handed to external notification sinks.

Wire shape::

    {"event": "bot_move", "payload": {...}, "timestamp": "2026-01-01T12:00:00Z"}
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_serializer

from vanara_ops.domain.enums import EventName
from vanara_ops.foundation.clock import iso_utc, utc_now


class OutboundEvent(BaseModel):
    event: EventName
    payload: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=utc_now)

    model_config = {"frozen": True}

    @field_serializer("timestamp")
    def _serialize_timestamp(self, v: datetime) -> str:
        return iso_utc(v)

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict in the outbound envelope shape."""
        return self.model_dump(mode="json")
