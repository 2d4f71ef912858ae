"""REST endpoints for the fleet, stations and spotlight telemetry.

Paths:
    GET   /api/fleet                     — bots, optionally filtered
    GET   /api/fleet/{bot_id}            — one bot
    PUT   /api/fleet/{bot_id}/threat     — operator threat override
    GET   /api/stations                  — stations in registration order
    PUT   /api/stations/{id}/status      — take a station online/offline
    GET   /api/health-telemetry          — spotlight bot health
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from vanara_ops.core.state import UnknownBotError
from vanara_ops.domain.enums import Species, StationStatus, Terrain, ThreatLevel
from vanara_ops.runtime.engine import SimulationEngine


class ThreatUpdate(BaseModel):
    level: ThreatLevel


class StationStatusUpdate(BaseModel):
    status: StationStatus


def create_fleet_router(engine: SimulationEngine) -> APIRouter:
    """Factory that wires the fleet endpoints to a concrete engine."""

    router = APIRouter(prefix="/api", tags=["fleet"])
    state = engine.state

    @router.get("/fleet")
    async def list_bots(
        species: Species | None = None,
        terrain: Terrain | None = None,
        threat: ThreatLevel | None = None,
    ) -> dict[str, Any]:
        bots = state.filter_bots(species=species, terrain=terrain, threat=threat)
        return {"bots": [b.snapshot() for b in bots], "count": len(bots)}

    @router.get("/fleet/{bot_id}")
    async def get_bot(bot_id: str) -> dict[str, Any]:
        try:
            return state.bot(bot_id).snapshot()
        except UnknownBotError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    @router.put("/fleet/{bot_id}/threat")
    async def set_threat(bot_id: str, body: ThreatUpdate) -> dict[str, Any]:
        try:
            return engine.set_bot_threat(bot_id, body.level).snapshot()
        except UnknownBotError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    @router.get("/stations")
    async def list_stations() -> dict[str, Any]:
        stations = state.stations.all()
        return {"stations": [s.model_dump(mode="json") for s in stations], "count": len(stations)}

    @router.put("/stations/{station_id}/status")
    async def set_station_status(station_id: str, body: StationStatusUpdate) -> dict[str, Any]:
        station = engine.set_station_status(station_id, body.status)
        if station is None:
            raise HTTPException(status_code=404, detail=f"Station {station_id} not found")
        return station.model_dump(mode="json")

    @router.get("/health-telemetry")
    async def health_telemetry() -> dict[str, Any]:
        return {
            "botId": state.spotlight_bot_id,
            "anomaly": state.anomaly,
            **state.health.model_dump(mode="json"),
        }

    return router
