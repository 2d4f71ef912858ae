"""REST endpoints for the alert log.

Paths:
    GET    /api/alerts              — alerts, newest first
    DELETE /api/alerts/{alert_id}   — acknowledge (remove) one alert
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from vanara_ops.runtime.engine import SimulationEngine


def create_alerts_router(engine: SimulationEngine) -> APIRouter:
    router = APIRouter(prefix="/api", tags=["alerts"])

    @router.get("/alerts")
    async def list_alerts() -> dict[str, Any]:
        alerts = engine.state.alerts.items()
        return {"alerts": [a.model_dump(mode="json") for a in alerts], "count": len(alerts)}

    @router.delete("/alerts/{alert_id}")
    async def acknowledge(alert_id: str) -> dict[str, Any]:
        # Acknowledging an unknown id is a no-op, not an error
        removed = engine.acknowledge_alert(alert_id)
        return {"alert_id": alert_id, "acknowledged": removed}

    return router
