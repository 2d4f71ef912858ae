"""Tests for haversine distance."""

import pytest

from vanara_ops.domain.geo import distance_km, format_location


class TestDistance:
    @pytest.mark.parametrize("lat,lon", [(0.0, 0.0), (34.0876, 74.7973), (-33.9, 151.2), (89.9, -179.9)])
    def test_distance_to_self_is_zero(self, lat: float, lon: float) -> None:
        assert distance_km(lat, lon, lat, lon) == 0.0

    def test_distance_is_symmetric(self) -> None:
        a = (34.01, 75.31)
        b = (27.586, 91.8766)
        assert distance_km(*a, *b) == pytest.approx(distance_km(*b, *a))

    def test_one_degree_of_latitude(self) -> None:
        assert distance_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(111.195, abs=0.01)

    def test_alpha_to_bravo(self) -> None:
        # Pahalgam sector to Ladakh ridge, roughly 210 km apart
        km = distance_km(34.01, 75.31, 34.1526, 77.5771)
        assert 200 < km < 220


def test_format_location_without_degree_sign() -> None:
    assert format_location(34.0876, 74.7973, degree_sign=False) == "34.0876 N, 74.7973 E"
