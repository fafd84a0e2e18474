"""Priority-aware nearest-neighbour sequencing of delivery stops.

ASAP pickups are collected first (nearest first), then the deliveries that
belong to them in the same order, so a picked-up urgent load is never left on
the truck while unrelated stops are visited. Everything else is visited by
nearest neighbour from wherever the truck ends up, with a delivery only
eligible after its pickup.
"""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Coordinate, DeliveryStop, StopPriority, StopType
from ..geospatial import coordinate_distance_km


def find_nearest_stop(position: Coordinate, candidates: Sequence[DeliveryStop]) -> DeliveryStop:
    """Return the candidate closest to position; ties go to the earliest candidate."""

    nearest = candidates[0]
    min_distance = coordinate_distance_km(position, nearest.coordinate)
    for stop in candidates[1:]:
        distance = coordinate_distance_km(position, stop.coordinate)
        if distance < min_distance:
            min_distance = distance
            nearest = stop
    return nearest


def _remove(stops: list[DeliveryStop], target: DeliveryStop) -> None:
    for index, stop in enumerate(stops):
        if stop is target:
            del stops[index]
            return


def sequence_stops(
    stops: Sequence[DeliveryStop],
    current_location: Coordinate | None = None,
    *,
    prioritize_asap: bool = True,
) -> list[DeliveryStop]:
    if len(stops) <= 1:
        return list(stops)

    remaining = list(stops)
    ordered: list[DeliveryStop] = []
    position = current_location or stops[0].coordinate

    def visit(stop: DeliveryStop) -> None:
        nonlocal position
        ordered.append(stop)
        position = stop.coordinate
        _remove(remaining, stop)

    if prioritize_asap:
        asap_stops = [stop for stop in remaining if stop.priority is StopPriority.ASAP]
        asap_pickups = [stop for stop in asap_stops if stop.type is StopType.PICKUP]
        asap_deliveries = [stop for stop in asap_stops if stop.type is StopType.DELIVERY]

        placed_pickups: list[DeliveryStop] = []
        while asap_pickups:
            nearest = find_nearest_stop(position, asap_pickups)
            _remove(asap_pickups, nearest)
            placed_pickups.append(nearest)
            visit(nearest)

        for pickup in placed_pickups:
            delivery = next((d for d in asap_deliveries if d.order_id == pickup.order_id), None)
            if delivery is not None:
                _remove(asap_deliveries, delivery)
                visit(delivery)

    # A delivery becomes eligible only once its own pickup is on the route.
    unvisited_pickups = {stop.order_id for stop in remaining if stop.type is StopType.PICKUP}
    while remaining:
        eligible = [
            stop
            for stop in remaining
            if stop.type is StopType.PICKUP or stop.order_id not in unvisited_pickups
        ]
        nearest = find_nearest_stop(position, eligible)
        if nearest.type is StopType.PICKUP:
            unvisited_pickups.discard(nearest.order_id)
        visit(nearest)

    return ordered
