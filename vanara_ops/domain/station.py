"""Station — an immutable charging site."""

from __future__ import annotations

from pydantic import BaseModel, Field

from vanara_ops.domain.enums import StationStatus


class Station(BaseModel):
    """A solar charging station bots route to when their battery runs low.

    ``capacity`` is descriptive only; stations never run out of charge.
    """

    id: str = Field(..., min_length=1, max_length=64)
    name: str
    lat: float
    lon: float
    capacity: float = Field(..., ge=0.0, description="Storage capacity in kWh")
    status: StationStatus = StationStatus.ACTIVE

    model_config = {"frozen": True}

    @property
    def is_active(self) -> bool:
        return self.status == StationStatus.ACTIVE
