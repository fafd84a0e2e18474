"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Sequence

from shapely.geometry import LineString

from ..models.domain import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def coordinate_distance_km(origin: Coordinate, target: Coordinate) -> float:
    return haversine_km(origin.latitude, origin.longitude, target.latitude, target.longitude)


def route_line(coordinates: Sequence[Coordinate]) -> LineString | None:
    """Build a straight-segment polyline through the coordinates (lon/lat order).

    Returns None when fewer than two points are available.
    """

    if len(coordinates) < 2:
        return None
    return LineString([(point.longitude, point.latitude) for point in coordinates])


def route_bounds(coordinates: Sequence[Coordinate]) -> tuple[float, float, float, float] | None:
    """Return (min_lat, min_lon, max_lat, max_lon) covering all coordinates."""

    line = route_line(coordinates)
    if line is None:
        if not coordinates:
            return None
        only = coordinates[0]
        return (only.latitude, only.longitude, only.latitude, only.longitude)
    min_lon, min_lat, max_lon, max_lat = line.bounds
    return (min_lat, min_lon, max_lat, max_lon)
