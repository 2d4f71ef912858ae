"""DetectionGenerator — probabilistic background detections and the scripted anomaly.

Two independent producers share this class:

    - Background noise: one low/medium-confidence detection per tick from
      the ``SensorNet`` channel, type drawn uniformly.
    - Scripted anomaly: a single high-confidence ``Ammunition Transport``
      sighting fired once per arm.  Arming and timing are owned by the
      runtime scheduler; this class only knows how to fire and reset it.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from vanara_ops.core.state import SimulationState
from vanara_ops.domain.detection import Detection
from vanara_ops.domain.enums import DetectionType, EventName
from vanara_ops.services.event_emitter import EventEmitter

logger = logging.getLogger(__name__)

NOISE_TYPES: tuple[DetectionType, ...] = (
    DetectionType.MOTION,
    DetectionType.THERMAL,
    DetectionType.ACOUSTIC,
    DetectionType.UNKNOWN,
)


@dataclass(frozen=True)
class DetectionConfig:
    noise_base_confidence: float = 0.55
    noise_confidence_spread: float = 0.2
    noise_source: str = "SensorNet"
    anomaly_type: str = DetectionType.AMMUNITION_TRANSPORT.value
    anomaly_confidence: float = 0.92
    anomaly_source: str = "Drone-Cam"


class DetectionGenerator:
    """Produces background noise detections and fires the scripted anomaly."""

    def __init__(
        self,
        emitter: EventEmitter,
        rng: random.Random,
        config: DetectionConfig | None = None,
    ) -> None:
        self._emitter = emitter
        self._rng = rng
        self._config = config or DetectionConfig()
        self.anomalies_fired: int = 0

    # ── Background noise ─────────────────────────────────────────────────

    def tick(self, state: SimulationState) -> Detection:
        """Produce one background detection and append it to the history."""
        cfg = self._config
        confidence = round(cfg.noise_base_confidence + self._rng.uniform(0.0, cfg.noise_confidence_spread), 2)
        detection_type = self._rng.choice(NOISE_TYPES)
        detection = Detection(
            type=detection_type.value,
            confidence=confidence,
            source=cfg.noise_source,
        )
        state.detections.add(detection)
        self._emitter.emit(EventName.DETECTION, detection.to_record())
        logger.debug("Noise detection %s @ %.2f", detection.type, detection.confidence)
        return detection

    # ── Scripted anomaly ─────────────────────────────────────────────────

    def reset_anomaly(self, state: SimulationState) -> None:
        """Clear the anomaly flag ahead of a (re)arm or on pause."""
        state.anomaly = False

    def fire_anomaly(self, state: SimulationState) -> Detection:
        """Raise the scripted anomaly: flag, detection, alert and event."""
        cfg = self._config
        state.anomaly = True
        detection = Detection(
            type=cfg.anomaly_type,
            confidence=cfg.anomaly_confidence,
            source=cfg.anomaly_source,
        )
        state.detections.add(detection)
        state.alerts.append(f"Anomaly: {cfg.anomaly_type}")
        self._emitter.emit(EventName.DETECTION, detection.to_record())
        self.anomalies_fired += 1
        logger.warning("Scripted anomaly fired: %s (%.2f)", detection.type, detection.confidence)
        return detection
