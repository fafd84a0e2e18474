import math

import pytest

from tripmatch.models.domain import Coordinate
from tripmatch.services.geospatial import coordinate_distance_km, haversine_km, route_bounds, route_line


def test_haversine_zero_for_identical_points() -> None:
    assert haversine_km(24.7136, 46.6753, 24.7136, 46.6753) == 0.0


def test_haversine_is_symmetric() -> None:
    forward = haversine_km(24.7136, 46.6753, 21.4858, 39.1925)
    backward = haversine_km(21.4858, 39.1925, 24.7136, 46.6753)

    assert forward == pytest.approx(backward)
    # Riyadh to Jeddah, great-circle
    assert 820 < forward < 870


def test_one_degree_of_latitude() -> None:
    assert haversine_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(6371.0 * math.pi / 180, rel=1e-9)


def test_coordinate_distance_matches_haversine() -> None:
    a = Coordinate(25.2048, 55.2708)
    b = Coordinate(25.2769, 55.2962)

    assert coordinate_distance_km(a, b) == haversine_km(25.2048, 55.2708, 25.2769, 55.2962)


def test_route_line_needs_two_points() -> None:
    assert route_line([]) is None
    assert route_line([Coordinate(1.0, 2.0)]) is None


def test_route_line_uses_lon_lat_order() -> None:
    line = route_line([Coordinate(25.0, 55.0), Coordinate(25.5, 55.5)])

    assert line is not None
    assert list(line.coords) == [(55.0, 25.0), (55.5, 25.5)]


def test_route_bounds() -> None:
    coordinates = [Coordinate(25.2, 55.3), Coordinate(25.1, 55.4), Coordinate(25.3, 55.2)]

    assert route_bounds(coordinates) == pytest.approx((25.1, 55.2, 25.3, 55.4))
    assert route_bounds([Coordinate(1.0, 2.0)]) == (1.0, 2.0, 1.0, 2.0)
    assert route_bounds([]) is None
