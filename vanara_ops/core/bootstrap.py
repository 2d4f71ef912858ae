"""Seed data for a fresh run: northern-border stations and the VNR fleet."""

from __future__ import annotations

from datetime import datetime, timedelta

from vanara_ops.domain.alert import Alert
from vanara_ops.domain.bot import Bot
from vanara_ops.domain.detection import Detection
from vanara_ops.domain.enums import DetectionType, Species, StationStatus, Terrain, ThreatLevel
from vanara_ops.domain.station import Station
from vanara_ops.foundation.clock import utc_now
from vanara_ops.core.state import SimulationState
from vanara_ops.store.alert_log import AlertLog
from vanara_ops.store.history import BoundedHistory, DetectionHistory
from vanara_ops.store.station_registry import StationRegistry

SPOTLIGHT_BOT_ID = "VNR-07"


def default_stations() -> list[Station]:
    return [
        Station(id="Alpha", name="Station Alpha – Pahalgam Sector",
                lat=34.01, lon=75.31, capacity=120, status=StationStatus.ACTIVE),
        Station(id="Bravo", name="Station Bravo – Ladakh Ridge",
                lat=34.1526, lon=77.5771, capacity=150, status=StationStatus.ACTIVE),
        Station(id="Delta", name="Station Delta – Arunachal Valley",
                lat=27.586, lon=91.8766, capacity=110, status=StationStatus.ACTIVE),
        Station(id="Echo", name="Station Echo – Siachen Perimeter",
                lat=35.3716, lon=77.2368, capacity=140, status=StationStatus.OFFLINE),
    ]


def default_fleet() -> list[Bot]:
    return [
        Bot("VNR-01", Species.LANGUR, Terrain.DAY, lat=33.9, lon=75.0, battery=88),
        Bot("VNR-02", Species.CIVET, Terrain.NIGHT, lat=34.3, lon=76.8, battery=64),
        Bot("VNR-03", Species.OWL, Terrain.FOG, lat=32.9, lon=77.2, battery=73,
            threat=ThreatLevel.MEDIUM),
        Bot("VNR-04", Species.BIRDBOT, Terrain.RAIN, lat=28.1, lon=92.1, battery=59),
        Bot("VNR-05", Species.RAIN_MIMIC, Terrain.FOREST, lat=27.7, lon=91.2, battery=91),
        Bot("VNR-06", Species.LANGUR, Terrain.BORDER, lat=34.9, lon=74.5, battery=35,
            threat=ThreatLevel.MEDIUM),
        Bot("VNR-07", Species.CIVET, Terrain.FOREST, lat=34.0876, lon=74.7973, battery=87),
    ]


def seed_detections(now: datetime | None = None) -> list[Detection]:
    """Two detections already on the board when the console opens, newest first."""
    now = now or utc_now()
    return [
        Detection(timestamp=now, type=DetectionType.MOTION.value, confidence=0.62, source="LIDAR"),
        Detection(timestamp=now - timedelta(minutes=2), type=DetectionType.THERMAL.value,
                  confidence=0.71, source="IR-Cam"),
    ]


def seed_alerts() -> list[Alert]:
    return [Alert(message="Boundary breach in Sector 3")]


def build_state(
    detection_cap: int = 31,
    threat_log_cap: int = 12,
    spotlight_bot_id: str = SPOTLIGHT_BOT_ID,
    seed: bool = True,
) -> SimulationState:
    """Assemble a fresh SimulationState from the default fleet and stations.

    With ``seed=False`` the detection history and alert log start empty.
    """
    return SimulationState(
        bots=default_fleet(),
        stations=StationRegistry(default_stations()),
        spotlight_bot_id=spotlight_bot_id,
        detections=DetectionHistory(detection_cap, seed_detections() if seed else ()),
        alerts=AlertLog(seed_alerts() if seed else ()),
        threat_log=BoundedHistory(threat_log_cap),
    )
