"""Tests for detections, the bounded history and the scripted anomaly."""

from datetime import datetime, timezone

import pytest

from vanara_ops.core.bootstrap import build_state
from vanara_ops.core.detection_generator import NOISE_TYPES, DetectionGenerator
from vanara_ops.domain.detection import Detection
from vanara_ops.domain.enums import EventName, ThreatLevel
from vanara_ops.foundation.randomness import make_rng
from vanara_ops.store.history import BoundedHistory, DetectionHistory

from tests.test_state import _capture


def _detection(type: str = "Motion", confidence: float = 0.6, source: str = "LIDAR") -> Detection:
    return Detection(type=type, confidence=confidence, source=source)


@pytest.fixture
def generator():
    emitter, sink = _capture()
    return DetectionGenerator(emitter, make_rng(9)), sink


class TestDetectionModel:
    def test_confidence_bounds(self) -> None:
        with pytest.raises(ValueError):
            _detection(confidence=1.2)
        with pytest.raises(ValueError):
            _detection(confidence=-0.1)

    def test_naive_timestamp_treated_as_utc(self) -> None:
        d = Detection(timestamp=datetime(2025, 1, 1), type="Motion", confidence=0.5, source="LIDAR")
        assert d.timestamp.tzinfo == timezone.utc
        assert d.to_record()["timestamp"] == "2025-01-01T00:00:00Z"

    def test_uncertain_below_seventy(self) -> None:
        assert _detection(confidence=0.69).is_uncertain()
        assert not _detection(confidence=0.70).is_uncertain()

    def test_frozen(self) -> None:
        d = _detection()
        with pytest.raises(ValueError):
            d.confidence = 0.9


class TestBoundedHistory:
    def test_cap_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            BoundedHistory(0)

    def test_newest_first_and_evicts_oldest(self) -> None:
        history: BoundedHistory[int] = BoundedHistory(3)
        for i in range(5):
            history.add(i)
        assert history.items() == [4, 3, 2]
        assert history.latest() == 4

    def test_seed_items_keep_order(self) -> None:
        history: BoundedHistory[str] = BoundedHistory(5, ["new", "old"])
        history.add("newest")
        assert history.items() == ["newest", "new", "old"]

    def test_filter(self) -> None:
        history = DetectionHistory(10, [
            _detection("Motion", 0.62),
            _detection("Thermal", 0.71),
            _detection("Motion", 0.91),
        ])
        assert len(history.filter("Motion")) == 2
        assert [d.confidence for d in history.filter(min_confidence=0.7)] == [0.71, 0.91]
        assert [d.type for d in history.filter(max_confidence=0.65)] == ["Motion"]
        assert history.filter("Acoustic") == []


class TestNoise:
    def test_noise_detection_shape(self, generator) -> None:
        gen, _ = generator
        state = build_state(seed=False)
        for _ in range(100):
            d = gen.tick(state)
            assert 0.55 <= d.confidence <= 0.75
            assert d.confidence == round(d.confidence, 2)
            assert d.source == "SensorNet"
            assert d.type in {t.value for t in NOISE_TYPES}

    def test_history_capped_at_31(self, generator) -> None:
        gen, _ = generator
        state = build_state()
        for _ in range(40):
            gen.tick(state)
        assert len(state.detections) == 31

    def test_each_tick_emits_detection_event(self, generator) -> None:
        gen, sink = generator
        state = build_state(seed=False)
        d = gen.tick(state)
        events = sink.events(EventName.DETECTION)
        assert len(events) == 1
        assert events[0].payload == d.to_record()


class TestAnomaly:
    def test_fire_sets_flag_detection_and_alert(self, generator) -> None:
        gen, sink = generator
        state = build_state(seed=False)
        d = gen.fire_anomaly(state)
        assert state.anomaly is True
        assert (d.type, d.confidence, d.source) == ("Ammunition Transport", 0.92, "Drone-Cam")
        assert state.detections.latest() == d
        assert state.alerts.items()[0].message == "Anomaly: Ammunition Transport"
        assert sink.events(EventName.DETECTION)[0].payload["type"] == "Ammunition Transport"
        assert gen.anomalies_fired == 1

    def test_reset_clears_flag(self, generator) -> None:
        gen, _ = generator
        state = build_state(seed=False)
        gen.fire_anomaly(state)
        gen.reset_anomaly(state)
        assert state.anomaly is False

    def test_anomaly_does_not_touch_bot_threat(self, generator) -> None:
        gen, _ = generator
        state = build_state(seed=False)
        before = [b.threat for b in state.bots]
        gen.fire_anomaly(state)
        assert [b.threat for b in state.bots] == before
        assert ThreatLevel.HIGH not in before
