"""REST endpoints for detections, the presence threat log and exports.

Paths:
    GET /api/detections              — history, filterable by type and confidence
    GET /api/detections/export.json  — flat JSON array download
    GET /api/detections/export.csv   — CSV download
    GET /api/threat-log              — presence scanner hits, newest first
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query
from fastapi.responses import Response

from vanara_ops.domain.detection import UNCERTAIN_BELOW
from vanara_ops.export.detections import detections_to_csv, detections_to_json
from vanara_ops.runtime.engine import SimulationEngine


def create_detections_router(
    engine: SimulationEngine,
    uncertain_below: float = UNCERTAIN_BELOW,
) -> APIRouter:
    """Factory that wires the detection endpoints to a concrete engine."""

    router = APIRouter(prefix="/api", tags=["detections"])
    state = engine.state

    @router.get("/detections")
    async def list_detections(
        type: str | None = None,
        min_confidence: float = Query(default=0.0, ge=0.0, le=1.0),
        max_confidence: float = Query(default=1.0, ge=0.0, le=1.0),
    ) -> dict[str, Any]:
        detection_type = None if type in (None, "", "All") else type
        found = state.detections.filter(detection_type, min_confidence, max_confidence)
        return {
            "detections": [
                {**d.to_record(), "uncertain": d.is_uncertain(uncertain_below)}
                for d in found
            ],
            "count": len(found),
        }

    @router.get("/detections/export.json")
    async def export_json() -> Response:
        return Response(
            content=detections_to_json(state.detections.items()),
            media_type="application/json",
            headers={"Content-Disposition": 'attachment; filename="detections.json"'},
        )

    @router.get("/detections/export.csv")
    async def export_csv() -> Response:
        return Response(
            content=detections_to_csv(state.detections.items()),
            media_type="text/csv",
            headers={"Content-Disposition": 'attachment; filename="detections.csv"'},
        )

    @router.get("/threat-log")
    async def threat_log() -> dict[str, Any]:
        entries = state.threat_log.items()
        return {
            "entries": [
                {**e.model_dump(mode="json"), "replay_offset": e.replay_offset}
                for e in entries
            ],
            "count": len(entries),
        }

    return router
