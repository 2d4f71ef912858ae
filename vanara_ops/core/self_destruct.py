"""SelfDestructProtocol — guarded countdown for one irreversible action.

States:  idle → armed(countdown) → executed → idle

    - idle → armed(N) only while the ``captured`` precondition holds;
      otherwise the attempt is rejected with a notice (not an exception).
    - Each tick while armed decrements the countdown.
    - Reaching 0 executes: one ``self_destruct`` event and one alert,
      then the protocol resets to idle with a fresh countdown so it can
      be armed again.
    - disarm() returns armed(n) → idle for any n without emitting.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from vanara_ops.core.state import SimulationState
from vanara_ops.domain.enums import EventName, SelfDestructPhase
from vanara_ops.domain.events import OutboundEvent
from vanara_ops.domain.geo import format_location
from vanara_ops.foundation.clock import iso_utc, utc_now
from vanara_ops.services.event_emitter import EventEmitter

logger = logging.getLogger(__name__)

DEFAULT_COUNTDOWN = 5
REASON_COMPROMISED = "Compromised"


@dataclass(frozen=True)
class ArmResult:
    """Outcome of an arm attempt, reported back to the operator."""

    accepted: bool
    notice: str
    countdown: int


class SelfDestructProtocol:
    def __init__(self, emitter: EventEmitter, countdown_start: int = DEFAULT_COUNTDOWN) -> None:
        if countdown_start < 1:
            raise ValueError("countdown_start must be at least 1")
        self._emitter = emitter
        self._countdown_start = countdown_start
        self.phase: SelfDestructPhase = SelfDestructPhase.IDLE
        self.countdown: int = countdown_start
        self.captured: bool = False
        self.executions: int = 0

    @property
    def is_armed(self) -> bool:
        return self.phase == SelfDestructPhase.ARMED

    def set_captured(self, captured: bool) -> None:
        self.captured = bool(captured)
        logger.info("Capture precondition %s", "set" if self.captured else "cleared")

    def arm(self) -> ArmResult:
        if self.is_armed:
            return ArmResult(False, "Self-destruct already armed", self.countdown)
        if not self.captured:
            logger.info("Self-destruct arm rejected: bot not captured")
            return ArmResult(False, "Bot must be marked captured before arming self-destruct", self.countdown)
        self.phase = SelfDestructPhase.ARMED
        self.countdown = self._countdown_start
        logger.warning("Self-destruct armed (%ds)", self.countdown)
        return ArmResult(True, f"Self-destruct armed: {self.countdown}s", self.countdown)

    def disarm(self) -> bool:
        """Cancel a pending countdown.  Returns False when nothing was armed."""
        if not self.is_armed:
            return False
        self._reset()
        logger.info("Self-destruct disarmed")
        return True

    def tick(self, state: SimulationState) -> OutboundEvent | None:
        """Advance the countdown; returns the self_destruct event on execution."""
        if not self.is_armed:
            return None
        self.countdown -= 1
        if self.countdown > 0:
            return None
        return self._execute(state)

    def status(self) -> dict:
        return {
            "phase": self.phase.value,
            "countdown": self.countdown,
            "captured": self.captured,
            "executions": self.executions,
        }

    # ── Internals ────────────────────────────────────────────────────────

    def _execute(self, state: SimulationState) -> OutboundEvent:
        self.phase = SelfDestructPhase.EXECUTED
        bot = state.spotlight
        payload = {
            "botId": bot.id,
            "location": format_location(bot.lat, bot.lon, degree_sign=False),
            "timestamp": iso_utc(utc_now()),
            "reason": REASON_COMPROMISED,
        }
        state.alerts.append(f"{bot.id} self-destruct executed")
        event = self._emitter.emit(EventName.SELF_DESTRUCT, payload)
        self.executions += 1
        logger.critical("Self-destruct executed on %s at %s", bot.id, payload["location"])
        self._reset()
        return event

    def _reset(self) -> None:
        self.phase = SelfDestructPhase.IDLE
        self.countdown = self._countdown_start
