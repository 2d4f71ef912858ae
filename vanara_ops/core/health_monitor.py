"""HealthMonitor — the fast ambient telemetry tick for the spotlight bot.

Runs independently of fleet movement.  Every field is a bounded random
walk or a low-probability discrete flip.  The aggregate threat level is
forced to High while the scripted anomaly flag is set.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from vanara_ops.core.state import SimulationState
from vanara_ops.domain.enums import CameraHealth, MotorState, ThreatLevel
from vanara_ops.domain.telemetry import BotHealth

logger = logging.getLogger(__name__)


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


@dataclass(frozen=True)
class HealthConfig:
    temperature_range: tuple[float, float] = (37.0, 62.0)
    signal_range: tuple[int, int] = (20, 100)
    camo_sync_range: tuple[int, int] = (90, 100)
    motor_flip_probability: float = 0.05
    camera_flip_probability: float = 0.05
    threat_flip_probability: float = 0.06


class HealthMonitor:
    """Advances the spotlight bot's ambient telemetry once per health tick."""

    def __init__(self, rng: random.Random, config: HealthConfig | None = None) -> None:
        self._rng = rng
        self._config = config or HealthConfig()

    def tick(self, state: SimulationState) -> BotHealth:
        """Advance the telemetry one step and store the new record on *state*."""
        cfg = self._config
        rng = self._rng
        h = state.health

        temperature = _clamp(round(h.temperature_c + rng.uniform(-1.0, 1.0), 1), *cfg.temperature_range)
        signal = _clamp(h.signal_pct + rng.randint(-2, 2), *cfg.signal_range)
        camo = _clamp(h.camo_sync_pct + rng.randint(-1, 1), *cfg.camo_sync_range)

        motor = h.motor
        if rng.random() < cfg.motor_flip_probability:
            motor = MotorState.SURGE if motor == MotorState.STABLE else MotorState.STABLE

        camera = h.camera
        if rng.random() < cfg.camera_flip_probability:
            camera = CameraHealth.CALIBRATING if camera == CameraHealth.OPTIMAL else CameraHealth.OPTIMAL

        threat = self._next_threat(h.threat_level, state.anomaly)
        if threat != h.threat_level:
            logger.info("Fleet threat level %s → %s", h.threat_level.value, threat.value)

        state.health = h.model_copy(update={
            "temperature_c": temperature,
            "signal_pct": signal,
            "camo_sync_pct": camo,
            "motor": motor,
            "camera": camera,
            "threat_level": threat,
        })
        return state.health

    def _next_threat(self, current: ThreatLevel, anomaly: bool) -> ThreatLevel:
        if anomaly:
            return ThreatLevel.HIGH
        if self._rng.random() < self._config.threat_flip_probability:
            # High and Medium both settle back to Low; Low wakes to Medium
            return ThreatLevel.MEDIUM if current == ThreatLevel.LOW else ThreatLevel.LOW
        return current
