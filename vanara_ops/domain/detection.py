"""Detection — a single sensor event.

Detections are created by the background noise generator, the scripted
anomaly and the presence scanner.  They are appended to a bounded
history and never mutated afterwards.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, field_serializer, field_validator

from vanara_ops.foundation.clock import iso_utc, utc_now

# Below this confidence a detection is shown as "Uncertain".
UNCERTAIN_BELOW = 0.70


class Detection(BaseModel):
    """Immutable sensor detection."""

    timestamp: datetime = Field(default_factory=utc_now)
    type: str = Field(..., min_length=1, max_length=64, description="Free-form category")
    confidence: float = Field(..., ge=0.0, le=1.0)
    source: str = Field(..., min_length=1, max_length=64, description="Sensor channel label")

    model_config = {"frozen": True}

    @field_validator("timestamp")
    @classmethod
    def timestamp_must_be_aware(cls, v: datetime) -> datetime:
        # Naive timestamps are taken to be UTC
        if v.tzinfo is None:
            v = v.replace(tzinfo=timezone.utc)
        return v

    @field_serializer("timestamp")
    def _serialize_timestamp(self, v: datetime) -> str:
        return iso_utc(v)

    def is_uncertain(self, threshold: float = UNCERTAIN_BELOW) -> bool:
        """Read-time classification; not a stored field."""
        return self.confidence < threshold

    def to_record(self) -> dict[str, Any]:
        """Flat dict used by exports and outbound ``detection`` events."""
        return {
            "timestamp": iso_utc(self.timestamp),
            "type": self.type,
            "confidence": self.confidence,
            "source": self.source,
        }
