"""StationRegistry — static list of charging stations.

Stations are kept in registration order; that order is the tie-break for
nearest-station search so routing is deterministic.  The registry is a
read-only collaborator of the fleet simulator; only operator actions
(``set_status``) change it.
"""

from __future__ import annotations

import logging
from typing import Iterable

from vanara_ops.domain.enums import StationStatus
from vanara_ops.domain.geo import distance_km
from vanara_ops.domain.station import Station

logger = logging.getLogger(__name__)


class StationRegistry:
    """Ordered registry of stations with nearest-active lookup.

    Usage:
        registry = StationRegistry(default_stations())
        station = registry.nearest_active(34.0, 75.0)
    """

    def __init__(self, stations: Iterable[Station] = ()) -> None:
        self._stations: dict[str, Station] = {}
        for station in stations:
            self.register(station)

    def register(self, station: Station) -> None:
        if station.id in self._stations:
            raise ValueError(f"duplicate station id: {station.id}")
        self._stations[station.id] = station
        logger.debug("Registered station %s (%s)", station.id, station.status.value)

    def get(self, station_id: str) -> Station | None:
        return self._stations.get(station_id)

    def all(self) -> list[Station]:
        """Stations in registration order."""
        return list(self._stations.values())

    def active(self) -> list[Station]:
        return [s for s in self._stations.values() if s.is_active]

    def nearest_active(self, lat: float, lon: float) -> Station | None:
        """Return the Active station closest to (lat, lon), or None.

        Offline stations are never candidates.  Equal distances keep the
        station registered first.
        """
        best: Station | None = None
        best_km = 0.0
        for station in self._stations.values():
            if not station.is_active:
                continue
            km = distance_km(lat, lon, station.lat, station.lon)
            if best is None or km < best_km:
                best, best_km = station, km
        return best

    def set_status(self, station_id: str, status: StationStatus) -> Station | None:
        """Swap in a copy of the station with *status*; None if unknown."""
        current = self._stations.get(station_id)
        if current is None:
            return None
        updated = current.model_copy(update={"status": StationStatus(status)})
        self._stations[station_id] = updated
        logger.info("Station %s is now %s", station_id, updated.status.value)
        return updated

    def __len__(self) -> int:
        return len(self._stations)
