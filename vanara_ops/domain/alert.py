"""Alert — a human-facing notice derived from a detection or fleet event."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_serializer

from vanara_ops.foundation.clock import iso_utc, utc_now
from vanara_ops.foundation.identifiers import new_id


class Alert(BaseModel):
    """Immutable alert.  Only an explicit acknowledgement removes it."""

    id: str = Field(default_factory=new_id)
    message: str = Field(..., min_length=1)
    timestamp: datetime = Field(default_factory=utc_now)

    model_config = {"frozen": True}

    @field_serializer("timestamp")
    def _serialize_timestamp(self, v: datetime) -> str:
        return iso_utc(v)
