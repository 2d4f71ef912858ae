"""Ambient health telemetry for the spotlight bot.

Unlike the fleet, this telemetry is not tied to position: it is a set of
bounded random walks and discrete flips advanced on the fast health tick.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from vanara_ops.domain.enums import CameraHealth, MotorState, ThreatLevel


class BotHealth(BaseModel):
    """Mutable telemetry record, replaced wholesale by ``model_copy`` each tick."""

    temperature_c: float = Field(default=42.0, ge=37.0, le=62.0)
    signal_pct: int = Field(default=76, ge=20, le=100)
    camo_sync_pct: int = Field(default=97, ge=90, le=100)
    motor: MotorState = MotorState.STABLE
    camera: CameraHealth = CameraHealth.OPTIMAL
    threat_level: ThreatLevel = Field(
        default=ThreatLevel.LOW,
        description="Fleet-wide aggregate threat level shown on the overview",
    )
