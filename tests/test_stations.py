"""Tests for the StationRegistry."""

import pytest

from vanara_ops.core.bootstrap import default_stations
from vanara_ops.domain.enums import StationStatus
from vanara_ops.store.station_registry import StationRegistry

from tests.test_state import _station


@pytest.fixture
def registry() -> StationRegistry:
    return StationRegistry(default_stations())


class TestStationRegistry:
    def test_duplicate_id_rejected(self) -> None:
        with pytest.raises(ValueError):
            StationRegistry([_station("S1"), _station("S1")])

    def test_all_keeps_registration_order(self, registry: StationRegistry) -> None:
        assert [s.id for s in registry.all()] == ["Alpha", "Bravo", "Delta", "Echo"]

    def test_active_excludes_offline(self, registry: StationRegistry) -> None:
        assert [s.id for s in registry.active()] == ["Alpha", "Bravo", "Delta"]

    def test_nearest_active(self, registry: StationRegistry) -> None:
        assert registry.nearest_active(34.0876, 74.7973).id == "Alpha"
        assert registry.nearest_active(28.1, 92.1).id == "Delta"

    def test_offline_station_never_chosen(self, registry: StationRegistry) -> None:
        # Right on top of Echo, which is offline
        assert registry.nearest_active(35.3716, 77.2368).id == "Bravo"

    def test_no_active_station_returns_none(self) -> None:
        registry = StationRegistry([_station("S1", status=StationStatus.OFFLINE)])
        assert registry.nearest_active(34.0, 75.0) is None

    def test_empty_registry_returns_none(self) -> None:
        assert StationRegistry().nearest_active(0.0, 0.0) is None

    def test_tie_goes_to_first_registered(self) -> None:
        registry = StationRegistry([_station("First", 10.0, 10.0), _station("Second", 10.0, 10.0)])
        assert registry.nearest_active(11.0, 11.0).id == "First"

    def test_set_status_swaps_record(self, registry: StationRegistry) -> None:
        before = registry.get("Echo")
        updated = registry.set_status("Echo", StationStatus.ACTIVE)
        assert updated.is_active
        assert not before.is_active
        assert registry.nearest_active(35.3716, 77.2368).id == "Echo"

    def test_set_status_unknown_returns_none(self, registry: StationRegistry) -> None:
        assert registry.set_status("Zulu", StationStatus.OFFLINE) is None
        assert len(registry) == 4
