"""Tests for the SimulationEngine wiring timers to components."""

import asyncio

import numpy as np
import pytest

from vanara_ops.core.bootstrap import build_state
from vanara_ops.core.frames import SequenceFrameSource
from vanara_ops.core.state import UnknownBotError
from vanara_ops.domain.enums import EventName, SelfDestructPhase, StationStatus, ThreatLevel
from vanara_ops.foundation.randomness import make_rng
from vanara_ops.runtime.engine import TASK_ANOMALY, TASK_SELF_DESTRUCT, Cadences, SimulationEngine

from tests.test_state import _capture

FAST = Cadences(
    health=0.01,
    fleet=0.01,
    detections=0.01,
    presence_scan=0.01,
    anomaly_delay=0.02,
    self_destruct=0.01,
)


def _engine(cadences: Cadences = FAST, seed: int = 1):
    emitter, sink = _capture()
    return SimulationEngine(build_state(), emitter, make_rng(seed), cadences), sink


def _frames() -> list[np.ndarray]:
    return [np.zeros((32, 32, 3), dtype=np.uint8), np.full((32, 32, 3), 255, dtype=np.uint8)]


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_timers_drive_every_component(self) -> None:
        engine, sink = _engine()
        engine.start()
        await asyncio.sleep(0.2)
        await engine.stop()

        assert engine.fleet.tick_count > 0
        assert sink.events(EventName.BOT_MOVE)
        assert engine.detections.anomalies_fired == 1
        assert engine.state.anomaly is True
        assert engine.state.health.threat_level == ThreatLevel.HIGH
        assert engine.scheduler.names == []

    @pytest.mark.asyncio
    async def test_nothing_runs_after_stop(self) -> None:
        engine, sink = _engine()
        engine.start(run_feed=False)
        await asyncio.sleep(0.05)
        await engine.stop()
        count = len(sink)
        ticks = engine.fleet.tick_count
        await asyncio.sleep(0.05)
        assert len(sink) == count
        assert engine.fleet.tick_count == ticks


class TestFeed:
    @pytest.mark.asyncio
    async def test_replay_twice_fires_once(self) -> None:
        engine, _ = _engine()
        engine.replay_feed()
        engine.replay_feed()
        await asyncio.sleep(0.1)
        assert engine.detections.anomalies_fired == 1
        await engine.stop()

    @pytest.mark.asyncio
    async def test_pause_cancels_pending_anomaly(self) -> None:
        engine, _ = _engine()
        engine.replay_feed()
        engine.pause_feed()
        await asyncio.sleep(0.1)
        assert engine.detections.anomalies_fired == 0
        assert engine.state.anomaly is False
        assert not engine.scheduler.is_scheduled(TASK_ANOMALY)


class TestSelfDestruct:
    @pytest.mark.asyncio
    async def test_armed_countdown_executes_and_unschedules(self) -> None:
        engine, sink = _engine()
        engine.set_captured(True)
        assert engine.arm_self_destruct().accepted
        await asyncio.sleep(0.2)
        assert engine.self_destruct.executions == 1
        assert engine.self_destruct.phase == SelfDestructPhase.IDLE
        assert not engine.scheduler.is_scheduled(TASK_SELF_DESTRUCT)
        assert len(sink.events(EventName.SELF_DESTRUCT)) == 1
        await engine.stop()

    @pytest.mark.asyncio
    async def test_disarm_before_zero(self) -> None:
        engine, sink = _engine(Cadences(self_destruct=0.05))
        engine.set_captured(True)
        engine.arm_self_destruct()
        await asyncio.sleep(0.07)
        assert engine.disarm_self_destruct() is True
        await asyncio.sleep(0.3)
        assert sink.events(EventName.SELF_DESTRUCT) == []
        await engine.stop()

    @pytest.mark.asyncio
    async def test_stop_disarms_pending_countdown(self) -> None:
        engine, sink = _engine(Cadences(self_destruct=0.05))
        engine.set_captured(True)
        engine.start(run_feed=False)
        engine.arm_self_destruct()
        await engine.stop()
        assert engine.self_destruct.phase == SelfDestructPhase.IDLE
        assert engine.self_destruct.countdown == 5

        engine.start(run_feed=False)
        assert engine.arm_self_destruct().accepted
        await asyncio.sleep(0.4)
        await engine.stop()
        assert len(sink.events(EventName.SELF_DESTRUCT)) == 1

    def test_arm_without_capture_schedules_nothing(self) -> None:
        engine, _ = _engine()
        assert not engine.arm_self_destruct().accepted
        assert engine.scheduler.names == []


class TestPresenceScan:
    @pytest.mark.asyncio
    async def test_attached_source_is_scanned(self) -> None:
        engine, sink = _engine()
        engine.attach_frame_source(SequenceFrameSource(_frames(), loop=True))
        engine.start(run_feed=False)
        await asyncio.sleep(0.1)
        await engine.stop()
        # Default cooldown keeps it to one hit
        assert engine.scanner.triggers == 1
        assert len(sink.events(EventName.HUMAN_PRESENCE_DETECTED)) == 1

    def test_malformed_frame_is_dropped(self) -> None:
        engine, _ = _engine()
        engine.attach_frame_source(SequenceFrameSource([np.zeros((8, 8), dtype=np.uint8)]))
        assert engine.tick_presence_scan() is None

    def test_no_source_means_no_scan(self) -> None:
        engine, _ = _engine()
        assert engine.tick_presence_scan() is None


class TestOperatorActions:
    def test_set_bot_threat(self) -> None:
        engine, _ = _engine()
        assert engine.set_bot_threat("VNR-01", "High").threat == ThreatLevel.HIGH
        with pytest.raises(UnknownBotError):
            engine.set_bot_threat("VNR-99", ThreatLevel.LOW)

    def test_set_station_status(self) -> None:
        engine, _ = _engine()
        assert engine.set_station_status("Echo", StationStatus.ACTIVE).is_active
        assert engine.set_station_status("Zulu", "Offline") is None

    def test_acknowledge_alert(self) -> None:
        engine, _ = _engine()
        alert_id = engine.state.alerts.items()[0].id
        assert engine.acknowledge_alert(alert_id)
        assert len(engine.state.alerts) == 0

    def test_status(self) -> None:
        engine, _ = _engine()
        status = engine.status()
        assert status["running"] is False
        assert status["self_destruct"]["phase"] == "idle"
        assert status["sinks"][0]["sink_name"] == "recent_events"
