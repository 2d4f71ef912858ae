"""BotFleetSimulator — advances every bot once per fleet tick.

Per-bot state machine, in order:
    1. Drift:     lat/lon += U(-drift, drift), rounded to 4 dp.
    2. Routing:   battery < low_battery_threshold and an Active station
                  exists → routing_to = nearest station (idempotent).
    3. Arrival:   routing and within arrival_radius_km of the routed
                  station → charging = True.
    4. Energy:    charging → +charge_step (clear charging/routing at 100);
                  otherwise → -drain_step.  Always clamped to [0, 100].
    5. Threat:    High is sticky; Low/Medium toggle with a small probability.
    6. Telemetry: a bot_move event per bot.

The simulator reads stations through the StationRegistry only; it never
mutates stations and never talks to other components.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from vanara_ops.core.state import SimulationState
from vanara_ops.domain.bot import Bot, clamp_battery
from vanara_ops.domain.enums import EventName, ThreatLevel
from vanara_ops.domain.geo import distance_km
from vanara_ops.services.event_emitter import EventEmitter
from vanara_ops.store.station_registry import StationRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FleetConfig:
    """Tunable constants of the fleet tick."""

    drift_degrees: float = 0.005
    low_battery_threshold: int = 20
    # How close counts as "docked".  Generous because bots only drift.
    arrival_radius_km: float = 5.0
    charge_step: int = 10
    drain_step: int = 3
    threat_flip_probability: float = 0.05


class BotFleetSimulator:
    """Owns the per-bot transition rules.  The fleet itself lives in SimulationState."""

    def __init__(
        self,
        emitter: EventEmitter,
        rng: random.Random,
        config: FleetConfig | None = None,
    ) -> None:
        self._emitter = emitter
        self._rng = rng
        self._config = config or FleetConfig()
        self.tick_count: int = 0

    @property
    def config(self) -> FleetConfig:
        return self._config

    # ── Public API ───────────────────────────────────────────────────────

    def tick(self, state: SimulationState) -> None:
        """Advance every bot by one fleet tick."""
        for bot in state.bots:
            self._advance(bot, state.stations)
        self.tick_count += 1
        logger.debug("Fleet tick %d advanced %d bot(s)", self.tick_count, len(state.bots))

    def set_threat(self, state: SimulationState, bot_id: str, level: ThreatLevel) -> Bot:
        """Explicit operator override; the only way a High threat is lowered."""
        bot = state.bot(bot_id)
        previous = bot.threat
        bot.threat = ThreatLevel(level)
        if previous != bot.threat:
            logger.info("Bot %s threat %s → %s (operator)", bot.id, previous.value, bot.threat.value)
        return bot

    # ── Transition steps ─────────────────────────────────────────────────

    def _advance(self, bot: Bot, stations: StationRegistry) -> None:
        self._drift(bot)
        self._route(bot, stations)
        self._check_arrival(bot, stations)
        self._update_energy(bot)
        self._fluctuate_threat(bot)
        self._emitter.emit(EventName.BOT_MOVE, {
            "botId": bot.id,
            "lat": bot.lat,
            "lon": bot.lon,
            "battery": bot.battery,
            "routingTo": bot.routing_to,
            "charging": bot.charging,
        })

    def _drift(self, bot: Bot) -> None:
        d = self._config.drift_degrees
        bot.lat = round(bot.lat + self._rng.uniform(-d, d), 4)
        bot.lon = round(bot.lon + self._rng.uniform(-d, d), 4)

    def _route(self, bot: Bot, stations: StationRegistry) -> None:
        # A docked bot stays on its station until full
        if bot.charging or bot.battery >= self._config.low_battery_threshold:
            return
        nearest = stations.nearest_active(bot.lat, bot.lon)
        if nearest is None:
            logger.debug("Bot %s low on battery but no active station", bot.id)
            return
        if bot.routing_to != nearest.id:
            bot.routing_to = nearest.id
            logger.info("Bot %s (battery %d%%) routing to station %s", bot.id, bot.battery, nearest.id)

    def _check_arrival(self, bot: Bot, stations: StationRegistry) -> None:
        if bot.routing_to is None or bot.charging:
            return
        station = stations.get(bot.routing_to)
        if station is None or not station.is_active:
            return
        km = distance_km(bot.lat, bot.lon, station.lat, station.lon)
        if km < self._config.arrival_radius_km:
            bot.charging = True
            logger.info("Bot %s docked at %s (%.2f km)", bot.id, station.id, km)
            self._emitter.emit(EventName.CHARGING_STARTED, {
                "botId": bot.id,
                "stationId": station.id,
                "battery": bot.battery,
            })

    def _update_energy(self, bot: Bot) -> None:
        if bot.charging:
            bot.battery = clamp_battery(min(100, bot.battery + self._config.charge_step))
            self._emitter.emit(EventName.CHARGING_TICK, {"botId": bot.id, "battery": bot.battery})
            if bot.battery >= 100:
                station_id = bot.routing_to
                bot.charging = False
                bot.routing_to = None
                logger.info("Bot %s fully charged at %s", bot.id, station_id)
                self._emitter.emit(EventName.CHARGING_COMPLETE, {
                    "botId": bot.id,
                    "stationId": station_id,
                })
            return

        before = bot.battery
        bot.battery = clamp_battery(max(0, bot.battery - self._config.drain_step))
        threshold = self._config.low_battery_threshold
        if before >= threshold > bot.battery:
            self._emitter.emit(EventName.BATTERY, {
                "botId": bot.id,
                "battery": bot.battery,
                "threshold": threshold,
            })

    def _fluctuate_threat(self, bot: Bot) -> None:
        if bot.threat == ThreatLevel.HIGH:
            return
        if self._rng.random() < self._config.threat_flip_probability:
            bot.threat = ThreatLevel.MEDIUM if bot.threat == ThreatLevel.LOW else ThreatLevel.LOW
