"""Bot — one simulated autonomous field unit.

A Bot is the only mutable record in the domain.  Its position, battery,
routing and charging fields are advanced by the fleet simulator once per
fleet tick; everything else is descriptive.

Invariants:
    - ``battery`` is an integer percentage clamped to [0, 100].
    - ``charging`` implies ``routing_to`` is set.
"""

from __future__ import annotations

from typing import Any

from vanara_ops.domain.enums import Species, Terrain, ThreatLevel
from vanara_ops.domain.geo import format_location


def clamp_battery(value: int) -> int:
    return max(0, min(100, int(value)))


class Bot:
    """A mutable fleet member.

    Thread-safety note:
        Bots are mutated *only* from tick callbacks running on the
        simulation's event loop.  They are not themselves locked.
    """

    __slots__ = (
        "id",
        "species",
        "terrain",
        "stealth",
        "threat",
        "battery",
        "lat",
        "lon",
        "routing_to",
        "charging",
    )

    def __init__(
        self,
        id: str,
        species: Species,
        terrain: Terrain,
        lat: float,
        lon: float,
        battery: int = 100,
        threat: ThreatLevel = ThreatLevel.LOW,
        stealth: bool = True,
        routing_to: str | None = None,
        charging: bool = False,
    ) -> None:
        if charging and routing_to is None:
            raise ValueError(f"bot {id} cannot be charging without a routing target")
        self.id = id
        self.species = Species(species)
        self.terrain = Terrain(terrain)
        self.stealth = stealth
        self.threat = ThreatLevel(threat)
        self.battery = clamp_battery(battery)
        self.lat = lat
        self.lon = lon
        self.routing_to = routing_to
        self.charging = charging

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def is_routing(self) -> bool:
        return self.routing_to is not None

    @property
    def location(self) -> str:
        return format_location(self.lat, self.lon)

    def snapshot(self) -> dict[str, Any]:
        """Read-only copy of the bot for events, exports and API responses."""
        return {
            "id": self.id,
            "species": self.species.value,
            "terrain": self.terrain.value,
            "stealth": self.stealth,
            "threat": self.threat.value,
            "battery": self.battery,
            "lat": self.lat,
            "lon": self.lon,
            "routingTo": self.routing_to,
            "charging": self.charging,
        }

    def __repr__(self) -> str:
        return (
            f"Bot(id={self.id!r}, battery={self.battery}, threat={self.threat.value}, "
            f"routing_to={self.routing_to!r}, charging={self.charging})"
        )
