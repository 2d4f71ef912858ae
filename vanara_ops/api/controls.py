"""REST endpoints for operator actions.

Paths:
    GET  /api/controls           — current species / terrain / stealth
    PUT  /api/controls           — change any of them (emits controls_changed)
    POST /api/stealth            — toggle stealth (emits stealth)
    POST /api/threat-simulation  — force fleet threat to High
    POST /api/register-threat    — report the spotlight assessment
    POST /api/sync-logs          — push a full snapshot to the sinks
    POST /api/feed/replay        — re-arm the scripted anomaly
    POST /api/feed/pause         — cancel the scripted anomaly
    GET  /api/events             — recently emitted outbound events
    GET  /api/webhook            — webhook target and delivery counters
    PUT  /api/webhook            — change the webhook target (empty disables)
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from vanara_ops.domain.enums import EventName, Species, Terrain
from vanara_ops.runtime.engine import SimulationEngine
from vanara_ops.sinks.memory import RecentEventsSink
from vanara_ops.sinks.webhook import WebhookSink


class ControlsUpdate(BaseModel):
    species: Species | None = None
    terrain: Terrain | None = None
    stealth: bool | None = None


class StealthUpdate(BaseModel):
    on: bool


class WebhookUpdate(BaseModel):
    url: str = ""


def create_controls_router(
    engine: SimulationEngine,
    recent_events: RecentEventsSink | None = None,
    webhook: WebhookSink | None = None,
) -> APIRouter:
    router = APIRouter(prefix="/api", tags=["controls"])

    @router.get("/controls")
    async def get_controls() -> dict[str, Any]:
        return engine.state.controls.model_dump(mode="json")

    @router.put("/controls")
    async def update_controls(body: ControlsUpdate) -> dict[str, Any]:
        controls = engine.set_controls(body.species, body.terrain, body.stealth)
        return controls.model_dump(mode="json")

    @router.post("/stealth")
    async def set_stealth(body: StealthUpdate) -> dict[str, Any]:
        return engine.set_controls(stealth=body.on).model_dump(mode="json")

    @router.post("/threat-simulation")
    async def threat_simulation() -> dict[str, Any]:
        return engine.trigger_threat_simulation().to_wire()

    @router.post("/register-threat")
    async def register_threat() -> dict[str, Any]:
        return engine.register_threat().to_wire()

    @router.post("/sync-logs")
    async def sync_logs() -> dict[str, Any]:
        event = engine.sync_logs()
        return {"status": "synced", "timestamp": event.to_wire()["timestamp"]}

    @router.post("/feed/replay")
    async def replay_feed() -> dict[str, Any]:
        engine.replay_feed()
        return {"feed_running": engine.feed_running, "anomaly": engine.state.anomaly}

    @router.post("/feed/pause")
    async def pause_feed() -> dict[str, Any]:
        engine.pause_feed()
        return {"feed_running": engine.feed_running, "anomaly": engine.state.anomaly}

    @router.get("/events")
    async def recent(event: EventName | None = None) -> dict[str, Any]:
        if recent_events is None:
            return {"events": [], "count": 0}
        events = [e.to_wire() for e in recent_events.events(event)]
        return {"events": events, "count": len(events)}

    @router.get("/webhook")
    async def get_webhook() -> dict[str, Any]:
        if webhook is None:
            return {"url": "", "enabled": False}
        return _webhook_status(webhook)

    @router.put("/webhook")
    async def set_webhook(body: WebhookUpdate) -> dict[str, Any]:
        if webhook is None:
            raise HTTPException(status_code=404, detail="Webhook sink not configured")
        try:
            webhook.url = body.url
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _webhook_status(webhook)

    return router


def _webhook_status(webhook: WebhookSink) -> dict[str, Any]:
    return {
        "url": webhook.url,
        "enabled": webhook.enabled,
        "sent_count": webhook.sent_count,
        "failed_count": webhook.failed_count,
        "dropped_count": webhook.dropped_count,
        "pending": webhook.pending,
    }
