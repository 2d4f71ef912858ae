"""vanara-ops — fleet telemetry and autonomous energy management simulation.

This is the application entry point.  It builds the SimulationState, the
EventEmitter with its sinks, the SimulationEngine, and the HTTP/WebSocket
routers, and starts/stops the engine's timers with the app lifespan.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from vanara_ops.api.alerts import create_alerts_router
from vanara_ops.api.controls import create_controls_router
from vanara_ops.api.detections import create_detections_router
from vanara_ops.api.fleet import create_fleet_router
from vanara_ops.api.self_destruct import create_self_destruct_router
from vanara_ops.api.ws_dashboard import create_dashboard_router
from vanara_ops.config import Settings, settings
from vanara_ops.core.bootstrap import build_state
from vanara_ops.core.detection_generator import DetectionConfig
from vanara_ops.core.fleet_simulator import FleetConfig
from vanara_ops.core.health_monitor import HealthConfig
from vanara_ops.core.presence_scanner import PresenceConfig
from vanara_ops.foundation.randomness import make_rng
from vanara_ops.runtime.engine import Cadences, SimulationEngine
from vanara_ops.services.dashboard import DashboardManager, DashboardSink
from vanara_ops.services.event_emitter import EventEmitter
from vanara_ops.sinks.memory import RecentEventsSink
from vanara_ops.sinks.webhook import WebhookSink

# ── Logging ──────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)


def build_engine(cfg: Settings, emitter: EventEmitter) -> SimulationEngine:
    """Assemble a SimulationEngine from settings around *emitter*."""
    state = build_state(
        detection_cap=cfg.detection_history_cap,
        threat_log_cap=cfg.threat_log_cap,
        spotlight_bot_id=cfg.spotlight_bot_id,
    )
    return SimulationEngine(
        state=state,
        emitter=emitter,
        rng=make_rng(cfg.seed),
        cadences=Cadences(
            health=cfg.health_tick_seconds,
            fleet=cfg.fleet_tick_seconds,
            detections=cfg.detection_tick_seconds,
            presence_scan=cfg.presence_scan_seconds,
            anomaly_delay=cfg.anomaly_delay_seconds,
            self_destruct=cfg.self_destruct_tick_seconds,
        ),
        fleet_config=FleetConfig(
            drift_degrees=cfg.drift_degrees,
            low_battery_threshold=cfg.low_battery_threshold,
            arrival_radius_km=cfg.arrival_radius_km,
            charge_step=cfg.charge_step,
            drain_step=cfg.drain_step,
            threat_flip_probability=cfg.bot_threat_flip_probability,
        ),
        health_config=HealthConfig(
            motor_flip_probability=cfg.motor_flip_probability,
            camera_flip_probability=cfg.camera_flip_probability,
            threat_flip_probability=cfg.fleet_threat_flip_probability,
        ),
        detection_config=DetectionConfig(),
        presence_config=PresenceConfig(
            trigger_threshold=cfg.presence_threshold,
            cooldown_seconds=cfg.presence_cooldown_seconds,
        ),
        self_destruct_countdown=cfg.self_destruct_countdown,
    )


# ── Sinks & Emitter ──────────────────────────────────────────────────────────

dashboard_manager = DashboardManager()
recent_events = RecentEventsSink(cap=settings.recent_events_cap)
webhook_sink = WebhookSink(
    settings.webhook_url,
    timeout=settings.webhook_timeout_seconds,
    max_pending=settings.webhook_max_pending,
)

emitter = EventEmitter([recent_events, DashboardSink(dashboard_manager), webhook_sink])

# ── Engine ───────────────────────────────────────────────────────────────────

engine = build_engine(settings, emitter)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    if settings.autostart:
        engine.start()
    try:
        yield
    finally:
        await engine.stop()
        emitter.close()


# ── App ──────────────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.app_name,
    description="Fleet telemetry & autonomous energy management simulation",
    version="0.1.0",
    lifespan=lifespan,
)

# ── Routes ───────────────────────────────────────────────────────────────────

app.include_router(create_fleet_router(engine))
app.include_router(create_detections_router(engine, uncertain_below=settings.uncertain_confidence))
app.include_router(create_alerts_router(engine))
app.include_router(create_controls_router(engine, recent_events, webhook_sink))
app.include_router(create_self_destruct_router(engine))
app.include_router(create_dashboard_router(dashboard_manager))


# ── Health ───────────────────────────────────────────────────────────────────

@app.get("/health")
async def health() -> dict:
    state = engine.state
    return {
        "status": "ok",
        "bots": len(state.bots),
        "charging_bots": sum(1 for b in state.bots if b.charging),
        "routing_bots": sum(1 for b in state.bots if b.is_routing),
        "active_stations": len(state.stations.active()),
        "detections": len(state.detections),
        "alerts": len(state.alerts),
        "threat_level": state.health.threat_level.value,
        "dashboard_clients": dashboard_manager.client_count,
        "webhook_enabled": webhook_sink.enabled,
        "engine": engine.status(),
    }
