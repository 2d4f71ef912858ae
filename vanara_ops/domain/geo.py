"""Great-circle geometry."""

from __future__ import annotations

import math

EARTH_RADIUS_KM = 6371.0


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in kilometres between two lat/lon points.

    Coordinates are not validated; garbage in yields a meaningless but
    finite distance.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def format_location(lat: float, lon: float, degree_sign: bool = True) -> str:
    """Human-readable "34.0876° N, 74.7973° E" label used in logs and events."""
    mark = "°" if degree_sign else ""
    return f"{lat:.4f}{mark} N, {lon:.4f}{mark} E"
