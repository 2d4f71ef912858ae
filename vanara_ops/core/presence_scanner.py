"""PresenceScanner — frame-difference heuristic for "human presence".

Each sample is shrunk to a coarse ~160 px wide grid, sparse-sampled
(every 4th pixel) and compared channel-wise against the previous sample.
The mean absolute RGB difference, normalised to [0, 1], is scaled into a
confidence::

    confidence = clamp(diff_avg * gain, 0.5, 0.98)

Above the trigger threshold the scanner records a threat-log entry, a
``Human Presence`` detection, an alert and a ``human_presence_detected``
event, then stays silent for the cooldown window no matter how high the
confidence stays.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

import numpy as np

from vanara_ops.core.state import SimulationState
from vanara_ops.domain.detection import Detection
from vanara_ops.domain.enums import DetectionType, EventName
from vanara_ops.domain.threat_log import ThreatLogEntry
from vanara_ops.foundation.clock import iso_utc, utc_now
from vanara_ops.services.event_emitter import EventEmitter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PresenceConfig:
    trigger_threshold: float = 0.75
    cooldown_seconds: float = 5.0
    min_confidence: float = 0.5
    max_confidence: float = 0.98
    gain: float = 2.0
    target_width: int = 160
    pixel_stride: int = 4
    source: str = "AI-Scan"


def coarse_pixels(frame: np.ndarray, target_width: int, pixel_stride: int) -> np.ndarray:
    """Downsample *frame* and return every ``pixel_stride``-th RGB pixel as int16.

    Raises:
        ValueError: If the frame is not an H x W x C array with C >= 3.
    """
    arr = np.asarray(frame)
    if arr.ndim != 3 or arr.shape[2] < 3:
        raise ValueError(f"expected an H x W x C frame with C >= 3, got shape {arr.shape}")
    step = max(1, arr.shape[1] // max(1, target_width))
    grid = arr[::step, ::step, :3]
    return grid.reshape(-1, 3)[::max(1, pixel_stride)].astype(np.int16)


class PresenceScanner:
    def __init__(self, emitter: EventEmitter, config: PresenceConfig | None = None) -> None:
        self._emitter = emitter
        self._config = config or PresenceConfig()
        self._baseline: np.ndarray | None = None
        self._last_trigger: datetime | None = None
        self.last_confidence: float | None = None
        self.triggers: int = 0
        self.suppressed: int = 0

    @property
    def config(self) -> PresenceConfig:
        return self._config

    def reset(self) -> None:
        """Forget the previous frame (new source).  The cooldown is kept."""
        self._baseline = None
        self.last_confidence = None

    def measure(self, frame: np.ndarray) -> float | None:
        """Confidence for *frame* against the previous sample.

        Returns None for the first frame or after a resolution change;
        in both cases *frame* becomes the new baseline.
        """
        cfg = self._config
        pixels = coarse_pixels(frame, cfg.target_width, cfg.pixel_stride)
        previous, self._baseline = self._baseline, pixels
        if previous is None or previous.shape != pixels.shape or not len(pixels):
            return None
        diff_avg = float(np.abs(pixels - previous).sum()) / (len(pixels) * 255 * 3)
        confidence = min(cfg.max_confidence, max(cfg.min_confidence, diff_avg * cfg.gain))
        self.last_confidence = confidence
        return confidence

    def sample(
        self,
        state: SimulationState,
        frame: np.ndarray,
        playback_offset: float = 0.0,
    ) -> ThreatLogEntry | None:
        """Scan one frame; returns the threat-log entry when presence triggers."""
        confidence = self.measure(frame)
        if confidence is None or confidence <= self._config.trigger_threshold:
            return None

        now = utc_now()
        cooldown = timedelta(seconds=self._config.cooldown_seconds)
        if self._last_trigger is not None and now - self._last_trigger < cooldown:
            self.suppressed += 1
            return None
        self._last_trigger = now
        return self._trigger(state, confidence, playback_offset, now)

    # ── Internals ────────────────────────────────────────────────────────

    def _trigger(
        self,
        state: SimulationState,
        confidence: float,
        playback_offset: float,
        now: datetime,
    ) -> ThreatLogEntry:
        bot = state.spotlight
        rounded = round(confidence, 2)
        entry = ThreatLogEntry(
            bot_id=bot.id,
            timestamp=now,
            location=bot.location,
            confidence=rounded,
            seek=max(0.0, playback_offset),
        )
        state.threat_log.add(entry)
        state.detections.add(Detection(
            timestamp=now,
            type=DetectionType.HUMAN_PRESENCE.value,
            confidence=rounded,
            source=self._config.source,
        ))
        state.alerts.append(f"Human Presence detected ({confidence * 100:.0f}%)")
        self._emitter.emit(EventName.HUMAN_PRESENCE_DETECTED, {
            "botId": bot.id,
            "ts": iso_utc(now),
            "location": entry.location,
            "confidence": rounded,
            "seek": entry.seek,
        })
        self.triggers += 1
        logger.warning("Human presence on %s feed (%.2f) at %.1fs", bot.id, confidence, entry.seek)
        return entry
