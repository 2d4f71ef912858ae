"""SimulationEngine — wires the core components to their cadences.

The engine owns the SimulationState, builds every component around one
shared EventEmitter and seeded PRNG, and maps each cadence to a named
task on the Scheduler:

    health          1 s     HealthMonitor.tick
    fleet           5 s     BotFleetSimulator.tick
    detections      8 s     DetectionGenerator.tick
    presence_scan   0.5 s   PresenceScanner.sample   (while a frame source is attached)
    anomaly         10 s    DetectionGenerator.fire_anomaly (one-shot per arm)
    self_destruct   1 s     SelfDestructProtocol.tick (while armed)

Operator actions are plain methods; they run on the same loop as the
timers and therefore never interleave with a tick.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any

from vanara_ops.core.detection_generator import DetectionConfig, DetectionGenerator
from vanara_ops.core.fleet_simulator import BotFleetSimulator, FleetConfig
from vanara_ops.core.frames import FrameSource
from vanara_ops.core.health_monitor import HealthConfig, HealthMonitor
from vanara_ops.core.operator import OperatorConsole
from vanara_ops.core.presence_scanner import PresenceConfig, PresenceScanner
from vanara_ops.core.self_destruct import DEFAULT_COUNTDOWN, ArmResult, SelfDestructProtocol
from vanara_ops.core.state import OperatorControls, SimulationState
from vanara_ops.domain.bot import Bot
from vanara_ops.domain.enums import Species, StationStatus, Terrain, ThreatLevel
from vanara_ops.domain.events import OutboundEvent
from vanara_ops.domain.station import Station
from vanara_ops.domain.threat_log import ThreatLogEntry
from vanara_ops.runtime.scheduler import Scheduler
from vanara_ops.services.event_emitter import EventEmitter

logger = logging.getLogger(__name__)

TASK_HEALTH = "health"
TASK_FLEET = "fleet"
TASK_DETECTIONS = "detections"
TASK_PRESENCE_SCAN = "presence_scan"
TASK_ANOMALY = "anomaly"
TASK_SELF_DESTRUCT = "self_destruct"


@dataclass(frozen=True)
class Cadences:
    """Timer periods in seconds."""

    health: float = 1.0
    fleet: float = 5.0
    detections: float = 8.0
    presence_scan: float = 0.5
    anomaly_delay: float = 10.0
    self_destruct: float = 1.0


class SimulationEngine:
    def __init__(
        self,
        state: SimulationState,
        emitter: EventEmitter,
        rng: random.Random,
        cadences: Cadences | None = None,
        fleet_config: FleetConfig | None = None,
        health_config: HealthConfig | None = None,
        detection_config: DetectionConfig | None = None,
        presence_config: PresenceConfig | None = None,
        self_destruct_countdown: int = DEFAULT_COUNTDOWN,
    ) -> None:
        self.state = state
        self.emitter = emitter
        self.cadences = cadences or Cadences()
        self.scheduler = Scheduler()

        self.fleet = BotFleetSimulator(emitter, rng, fleet_config)
        self.health = HealthMonitor(rng, health_config)
        self.detections = DetectionGenerator(emitter, rng, detection_config)
        self.scanner = PresenceScanner(emitter, presence_config)
        self.self_destruct = SelfDestructProtocol(emitter, self_destruct_countdown)
        self.console = OperatorConsole(emitter)

        self._frame_source: FrameSource | None = None
        self.feed_running: bool = False
        self.running: bool = False

    # ── Lifecycle ────────────────────────────────────────────────────────

    def start(self, run_feed: bool = True) -> None:
        """Start the periodic timers.  Must be called from the event loop."""
        if self.running:
            return
        self.running = True
        self.scheduler.every(TASK_HEALTH, self.cadences.health, self.tick_health)
        self.scheduler.every(TASK_FLEET, self.cadences.fleet, self.tick_fleet)
        self.scheduler.every(TASK_DETECTIONS, self.cadences.detections, self.tick_detections)
        if self._frame_source is not None:
            self._start_scan()
        if run_feed:
            self.replay_feed()
        logger.info("Simulation started (%d bots, %d stations)", len(self.state.bots), len(self.state.stations))

    async def stop(self) -> None:
        """Cancel every timer and wait until none can touch the state again.

        A pending self-destruct countdown is disarmed with its timer.
        """
        self.running = False
        self.feed_running = False
        await self.scheduler.shutdown()
        if self.self_destruct.disarm():
            logger.info("Pending self-destruct disarmed on stop")
        logger.info("Simulation stopped")

    # ── Tick entry points (also usable by an external driver) ────────────

    def tick_health(self) -> None:
        self.health.tick(self.state)

    def tick_fleet(self) -> None:
        self.fleet.tick(self.state)

    def tick_detections(self) -> None:
        self.detections.tick(self.state)

    def tick_presence_scan(self) -> ThreatLogEntry | None:
        source = self._frame_source
        if source is None:
            return None
        frame = source.read()
        if frame is None:
            return None
        try:
            return self.scanner.sample(self.state, frame.pixels, frame.offset)
        except ValueError as exc:
            logger.warning("Dropping malformed frame from %s: %s", source.source_name, exc)
            self.scanner.reset()
            return None

    def tick_self_destruct(self) -> OutboundEvent | None:
        event = self.self_destruct.tick(self.state)
        if not self.self_destruct.is_armed:
            self.scheduler.cancel(TASK_SELF_DESTRUCT)
        return event

    # ── Scripted anomaly / feed ──────────────────────────────────────────

    def replay_feed(self) -> None:
        """(Re)arm the scripted anomaly; any pending one is cancelled first."""
        self.feed_running = True
        self.detections.reset_anomaly(self.state)
        self.scheduler.after(TASK_ANOMALY, self.cadences.anomaly_delay, self._fire_anomaly)
        logger.info("Feed replay: anomaly armed for %.1fs", self.cadences.anomaly_delay)

    def pause_feed(self) -> None:
        self.feed_running = False
        self.scheduler.cancel(TASK_ANOMALY)
        self.detections.reset_anomaly(self.state)
        logger.info("Feed paused")

    def _fire_anomaly(self) -> None:
        self.detections.fire_anomaly(self.state)

    # ── Presence scanning ────────────────────────────────────────────────

    def attach_frame_source(self, source: FrameSource) -> None:
        self._frame_source = source
        self.scanner.reset()
        logger.info("Frame source attached: %s", source.source_name)
        if self.running:
            self._start_scan()

    def detach_frame_source(self) -> None:
        self.scheduler.cancel(TASK_PRESENCE_SCAN)
        self._frame_source = None
        self.scanner.reset()

    @property
    def frame_source(self) -> FrameSource | None:
        return self._frame_source

    def _start_scan(self) -> None:
        self.scheduler.every(TASK_PRESENCE_SCAN, self.cadences.presence_scan, self.tick_presence_scan)

    # ── Self-destruct ────────────────────────────────────────────────────

    def set_captured(self, captured: bool) -> None:
        self.self_destruct.set_captured(captured)

    def arm_self_destruct(self) -> ArmResult:
        result = self.self_destruct.arm()
        if result.accepted:
            self.scheduler.every(TASK_SELF_DESTRUCT, self.cadences.self_destruct, self.tick_self_destruct)
        return result

    def disarm_self_destruct(self) -> bool:
        self.scheduler.cancel(TASK_SELF_DESTRUCT)
        return self.self_destruct.disarm()

    # ── Operator actions ─────────────────────────────────────────────────

    def acknowledge_alert(self, alert_id: str) -> bool:
        return self.state.alerts.acknowledge(alert_id)

    def set_controls(
        self,
        species: Species | str | None = None,
        terrain: Terrain | str | None = None,
        stealth: bool | None = None,
    ) -> OperatorControls:
        return self.console.set_controls(self.state, species, terrain, stealth)

    def trigger_threat_simulation(self) -> OutboundEvent:
        return self.console.trigger_threat_simulation(self.state)

    def register_threat(self) -> OutboundEvent:
        return self.console.register_threat(self.state)

    def sync_logs(self) -> OutboundEvent:
        return self.console.sync_logs(self.state)

    def set_bot_threat(self, bot_id: str, level: ThreatLevel | str) -> Bot:
        return self.fleet.set_threat(self.state, bot_id, ThreatLevel(level))

    def set_station_status(self, station_id: str, status: StationStatus | str) -> Station | None:
        return self.state.stations.set_status(station_id, StationStatus(status))

    # ── Observability ────────────────────────────────────────────────────

    def status(self) -> dict[str, Any]:
        return {
            "running": self.running,
            "feed_running": self.feed_running,
            "anomaly": self.state.anomaly,
            "tasks": self.scheduler.names,
            "fleet_ticks": self.fleet.tick_count,
            "anomalies_fired": self.detections.anomalies_fired,
            "presence_triggers": self.scanner.triggers,
            "self_destruct": self.self_destruct.status(),
            "sinks": self.emitter.stats,
        }
