"""Tests for SimulationState, seed data and the Bot record."""

import pytest

from vanara_ops.core.bootstrap import SPOTLIGHT_BOT_ID, build_state, default_fleet, default_stations
from vanara_ops.core.state import SimulationState, UnknownBotError
from vanara_ops.domain.bot import Bot
from vanara_ops.domain.enums import Species, StationStatus, Terrain, ThreatLevel
from vanara_ops.domain.station import Station
from vanara_ops.services.event_emitter import EventEmitter
from vanara_ops.sinks.memory import RecentEventsSink
from vanara_ops.store.station_registry import StationRegistry


def _station(id: str = "S1", lat: float = 34.0, lon: float = 75.0, status=StationStatus.ACTIVE) -> Station:
    return Station(id=id, name=f"Station {id}", lat=lat, lon=lon, capacity=100, status=status)


def _bot(id: str = "B1", lat: float = 34.0, lon: float = 75.0, **kw) -> Bot:
    kw.setdefault("species", Species.LANGUR)
    kw.setdefault("terrain", Terrain.FOREST)
    return Bot(id=id, lat=lat, lon=lon, **kw)


def _state(bots=None, stations=None, spotlight: str | None = None) -> SimulationState:
    bots = bots if bots is not None else [_bot()]
    return SimulationState(
        bots=bots,
        stations=StationRegistry(stations if stations is not None else [_station()]),
        spotlight_bot_id=spotlight or bots[0].id,
    )


class TestBootstrap:
    def test_default_fleet_has_seven_bots(self) -> None:
        state = build_state()
        assert [b.id for b in state.bots] == [f"VNR-0{i}" for i in range(1, 8)]

    def test_spotlight_is_vnr07(self) -> None:
        state = build_state()
        assert state.spotlight.id == SPOTLIGHT_BOT_ID

    def test_echo_station_is_offline(self) -> None:
        stations = {s.id: s for s in default_stations()}
        assert stations["Echo"].status == StationStatus.OFFLINE
        assert all(stations[k].is_active for k in ("Alpha", "Bravo", "Delta"))

    def test_seed_history_and_alerts(self) -> None:
        state = build_state()
        assert [d.type for d in state.detections.items()] == ["Motion", "Thermal"]
        assert [a.message for a in state.alerts.items()] == ["Boundary breach in Sector 3"]

    def test_unseeded_state_starts_empty(self) -> None:
        state = build_state(seed=False)
        assert len(state.detections) == 0
        assert len(state.alerts) == 0

    def test_default_fleet_starts_idle(self) -> None:
        assert all(not b.charging and b.routing_to is None for b in default_fleet())


class TestSimulationState:
    def test_duplicate_bot_rejected(self) -> None:
        with pytest.raises(ValueError):
            _state(bots=[_bot("A"), _bot("A")])

    def test_unknown_spotlight_rejected(self) -> None:
        with pytest.raises(ValueError):
            _state(bots=[_bot("A")], spotlight="Z")

    def test_unknown_bot_lookup_raises(self) -> None:
        state = _state()
        with pytest.raises(UnknownBotError):
            state.bot("nope")

    def test_filter_bots(self) -> None:
        state = build_state()
        assert {b.id for b in state.filter_bots(species="Civet")} == {"VNR-02", "VNR-07"}
        assert {b.id for b in state.filter_bots(threat=ThreatLevel.MEDIUM)} == {"VNR-03", "VNR-06"}
        assert [b.id for b in state.filter_bots(terrain=Terrain.BORDER)] == ["VNR-06"]

    def test_snapshot_contains_all_collections(self) -> None:
        snap = build_state().snapshot()
        assert set(snap) == {"bots", "stations", "detections", "alerts"}
        assert len(snap["bots"]) == 7
        assert snap["bots"][0]["routingTo"] is None


class TestBot:
    def test_battery_clamped_on_creation(self) -> None:
        assert _bot(battery=150).battery == 100
        assert _bot(battery=-4).battery == 0

    def test_charging_without_routing_rejected(self) -> None:
        with pytest.raises(ValueError):
            _bot(charging=True)

    def test_location_label(self) -> None:
        assert _bot(lat=34.08761, lon=74.79731).location == "34.0876° N, 74.7973° E"


def _capture() -> tuple[EventEmitter, RecentEventsSink]:
    """Emitter wired to an in-memory sink so tests can inspect emitted events."""
    sink = RecentEventsSink()
    return EventEmitter([sink]), sink
