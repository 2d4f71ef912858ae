"""Tests for the HealthMonitor telemetry walk."""

from vanara_ops.core.bootstrap import build_state
from vanara_ops.core.health_monitor import HealthConfig, HealthMonitor
from vanara_ops.domain.enums import CameraHealth, MotorState, ThreatLevel
from vanara_ops.domain.telemetry import BotHealth
from vanara_ops.foundation.randomness import make_rng


class TestHealthMonitor:
    def test_walks_stay_in_bounds(self) -> None:
        monitor = HealthMonitor(make_rng(3))
        state = build_state()
        for _ in range(1000):
            h = monitor.tick(state)
            assert 37.0 <= h.temperature_c <= 62.0
            assert 20 <= h.signal_pct <= 100
            assert 90 <= h.camo_sync_pct <= 100

    def test_temperature_rounded_to_one_decimal(self) -> None:
        monitor = HealthMonitor(make_rng(5))
        state = build_state()
        for _ in range(20):
            h = monitor.tick(state)
            assert h.temperature_c == round(h.temperature_c, 1)

    def test_tick_replaces_record(self) -> None:
        monitor = HealthMonitor(make_rng(1))
        state = build_state()
        before = state.health
        after = monitor.tick(state)
        assert state.health is after
        assert before is not after

    def test_certain_flips(self) -> None:
        cfg = HealthConfig(motor_flip_probability=1.0, camera_flip_probability=1.0, threat_flip_probability=0.0)
        monitor = HealthMonitor(make_rng(1), cfg)
        state = build_state()
        h = monitor.tick(state)
        assert h.motor == MotorState.SURGE
        assert h.camera == CameraHealth.CALIBRATING
        h = monitor.tick(state)
        assert h.motor == MotorState.STABLE
        assert h.camera == CameraHealth.OPTIMAL

    def test_anomaly_forces_high(self) -> None:
        monitor = HealthMonitor(make_rng(1), HealthConfig(threat_flip_probability=1.0))
        state = build_state()
        state.anomaly = True
        for _ in range(10):
            assert monitor.tick(state).threat_level == ThreatLevel.HIGH

    def test_threat_flips_without_anomaly(self) -> None:
        monitor = HealthMonitor(make_rng(1), HealthConfig(threat_flip_probability=1.0))
        state = build_state()
        assert monitor.tick(state).threat_level == ThreatLevel.MEDIUM
        assert monitor.tick(state).threat_level == ThreatLevel.LOW

    def test_high_settles_to_low_once_anomaly_clears(self) -> None:
        monitor = HealthMonitor(make_rng(1), HealthConfig(threat_flip_probability=1.0))
        state = build_state()
        state.health = BotHealth(threat_level=ThreatLevel.HIGH)
        assert monitor.tick(state).threat_level == ThreatLevel.LOW

    def test_no_flip_probability_keeps_level(self) -> None:
        monitor = HealthMonitor(make_rng(1), HealthConfig(threat_flip_probability=0.0))
        state = build_state()
        for _ in range(50):
            assert monitor.tick(state).threat_level == ThreatLevel.LOW
