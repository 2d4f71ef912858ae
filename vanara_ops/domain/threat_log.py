"""ThreatLogEntry — a presence-scanner hit pinned to a playback offset."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_serializer

from vanara_ops.foundation.clock import iso_utc, utc_now
from vanara_ops.foundation.identifiers import new_id

# Replays start slightly before the trigger so the movement is visible.
REPLAY_LEAD_SECONDS = 0.3


class ThreatLogEntry(BaseModel):
    id: str = Field(default_factory=new_id)
    bot_id: str
    timestamp: datetime = Field(default_factory=utc_now)
    location: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    seek: float = Field(..., ge=0.0, description="Playback offset in seconds")

    model_config = {"frozen": True}

    @field_serializer("timestamp")
    def _serialize_timestamp(self, v: datetime) -> str:
        return iso_utc(v)

    @property
    def replay_offset(self) -> float:
        """Where a replay of this entry should start."""
        return max(0.0, self.seek - REPLAY_LEAD_SECONDS)
