"""OperatorConsole — operator-initiated actions that emit outbound events.

These are not periodic: they run when an operator clicks something.
They still follow the tick contract (mutate the owned state, emit events)
so they serialise with the timers on the same event loop.
"""

from __future__ import annotations

import logging
from typing import Any

from vanara_ops.core.state import OperatorControls, SimulationState
from vanara_ops.domain.enums import DetectionType, EventName, Species, Terrain, ThreatLevel
from vanara_ops.domain.events import OutboundEvent
from vanara_ops.foundation.clock import iso_utc, utc_now
from vanara_ops.services.event_emitter import EventEmitter

logger = logging.getLogger(__name__)

# Assessment attached to a registered threat from the spotlight feed.
REGISTERED_THREAT_TYPE = DetectionType.AMMUNITION_TRANSPORT.value
REGISTERED_THREAT_CONFIDENCE = 0.92


class OperatorConsole:
    def __init__(self, emitter: EventEmitter) -> None:
        self._emitter = emitter

    def set_controls(
        self,
        state: SimulationState,
        species: Species | str | None = None,
        terrain: Terrain | str | None = None,
        stealth: bool | None = None,
    ) -> OperatorControls:
        """Apply any provided control values; emits only if something changed."""
        current = state.controls
        updated = OperatorControls(
            species=Species(species) if species is not None else current.species,
            terrain=Terrain(terrain) if terrain is not None else current.terrain,
            stealth=current.stealth if stealth is None else bool(stealth),
        )
        if updated == current:
            return current

        state.controls = updated
        if updated.stealth != current.stealth:
            self._emitter.emit(EventName.STEALTH, {"on": updated.stealth})
        self._emitter.emit(EventName.CONTROLS_CHANGED, self._controls_payload(updated))
        logger.info(
            "Controls changed: species=%s terrain=%s stealth=%s",
            updated.species.value, updated.terrain.value, updated.stealth,
        )
        return updated

    def set_stealth(self, state: SimulationState, on: bool) -> OperatorControls:
        return self.set_controls(state, stealth=on)

    def trigger_threat_simulation(self, state: SimulationState) -> OutboundEvent:
        """Force the fleet threat level to High and raise a drill alert."""
        state.health = state.health.model_copy(update={"threat_level": ThreatLevel.HIGH})
        state.alerts.append("Threat Simulation Triggered")
        logger.warning("Threat simulation triggered")
        return self._emitter.emit(EventName.THREAT_SIMULATION, self._controls_payload(state.controls))

    def register_threat(self, state: SimulationState) -> OutboundEvent:
        """Report the spotlight feed's assessment to the notification sink."""
        bot = state.spotlight
        payload: dict[str, Any] = {
            "threatType": REGISTERED_THREAT_TYPE,
            "confidence": REGISTERED_THREAT_CONFIDENCE,
            "location": bot.location,
            "timestamp": iso_utc(utc_now()),
            "botId": bot.id,
            "terrain": bot.terrain.value,
            "stealth": bot.stealth,
        }
        logger.info("Threat registered for %s", bot.id)
        return self._emitter.emit(EventName.REGISTER_THREAT, payload)

    def sync_logs(self, state: SimulationState) -> OutboundEvent:
        """Push a full snapshot of bots, stations, detections and alerts."""
        return self._emitter.emit(EventName.SYNC_LOGS, state.snapshot())

    @staticmethod
    def _controls_payload(controls: OperatorControls) -> dict[str, Any]:
        return {
            "species": controls.species.value,
            "terrain": controls.terrain.value,
            "stealth": controls.stealth,
        }
