"""SimulationState — the single owned container of mutable simulation state.

Tick functions receive this object and are its only writers.  Everything
they hand outward (events, API responses, exports) is a snapshot copy.
"""

from __future__ import annotations

from typing import Any, Iterable

from pydantic import BaseModel

from vanara_ops.domain.bot import Bot
from vanara_ops.domain.enums import Species, Terrain, ThreatLevel
from vanara_ops.domain.telemetry import BotHealth
from vanara_ops.domain.threat_log import ThreatLogEntry
from vanara_ops.store.alert_log import AlertLog
from vanara_ops.store.history import BoundedHistory, DetectionHistory
from vanara_ops.store.station_registry import StationRegistry


class UnknownBotError(LookupError):
    """Raised when a bot id is not part of the fleet."""

    def __init__(self, bot_id: str) -> None:
        self.bot_id = bot_id
        super().__init__(f"Unknown bot: {bot_id}")


class OperatorControls(BaseModel):
    """Fleet-wide disguise and stealth settings chosen by the operator."""

    species: Species = Species.LANGUR
    terrain: Terrain = Terrain.FOREST
    stealth: bool = True


class SimulationState:
    """Everything one simulation run knows.  Lost when the process exits."""

    __slots__ = (
        "_bots",
        "stations",
        "detections",
        "alerts",
        "threat_log",
        "health",
        "controls",
        "anomaly",
        "spotlight_bot_id",
    )

    def __init__(
        self,
        bots: Iterable[Bot],
        stations: StationRegistry,
        spotlight_bot_id: str,
        detections: DetectionHistory | None = None,
        alerts: AlertLog | None = None,
        threat_log: BoundedHistory[ThreatLogEntry] | None = None,
        health: BotHealth | None = None,
        controls: OperatorControls | None = None,
    ) -> None:
        self._bots: dict[str, Bot] = {}
        for bot in bots:
            if bot.id in self._bots:
                raise ValueError(f"duplicate bot id: {bot.id}")
            self._bots[bot.id] = bot
        if spotlight_bot_id not in self._bots:
            raise ValueError(f"spotlight bot {spotlight_bot_id} is not in the fleet")

        self.stations = stations
        self.spotlight_bot_id = spotlight_bot_id
        self.detections = detections if detections is not None else DetectionHistory(cap=31)
        self.alerts = alerts if alerts is not None else AlertLog()
        self.threat_log = threat_log if threat_log is not None else BoundedHistory(cap=12)
        self.health = health or BotHealth()
        self.controls = controls or OperatorControls()
        self.anomaly: bool = False

    # ── Fleet access ─────────────────────────────────────────────────────

    @property
    def bots(self) -> list[Bot]:
        """Fleet members in registration order."""
        return list(self._bots.values())

    def bot(self, bot_id: str) -> Bot:
        try:
            return self._bots[bot_id]
        except KeyError:
            raise UnknownBotError(bot_id) from None

    @property
    def spotlight(self) -> Bot:
        """The bot whose camera feed and health telemetry the console shows."""
        return self._bots[self.spotlight_bot_id]

    def filter_bots(
        self,
        species: Species | str | None = None,
        terrain: Terrain | str | None = None,
        threat: ThreatLevel | str | None = None,
    ) -> list[Bot]:
        return [
            b for b in self._bots.values()
            if (species is None or b.species == Species(species))
            and (terrain is None or b.terrain == Terrain(terrain))
            and (threat is None or b.threat == ThreatLevel(threat))
        ]

    # ── Snapshots ────────────────────────────────────────────────────────

    def snapshot(self) -> dict[str, Any]:
        """JSON-ready copy of the whole run, used by ``sync_logs``."""
        return {
            "bots": [b.snapshot() for b in self._bots.values()],
            "stations": [s.model_dump(mode="json") for s in self.stations.all()],
            "detections": [d.to_record() for d in self.detections.items()],
            "alerts": [a.model_dump(mode="json") for a in self.alerts.items()],
        }
