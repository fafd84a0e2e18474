"""Projection of trip requests into pickup and delivery stops."""

from __future__ import annotations

import logging
from typing import Sequence

from ...models.domain import (
    DeliveryStop,
    Location,
    StopPriority,
    StopType,
    TimeWindow,
    TripRequest,
)

DEFAULT_ADDRESSES = {
    StopType.PICKUP: "Pickup Location",
    StopType.DELIVERY: "Delivery Location",
}


def _materials_for(order: TripRequest) -> list[str]:
    materials = [line.type or line.description for line in order.materials]
    materials = [name for name in materials if name]
    if materials:
        return materials
    return [order.material_type or "Materials"]


def _priority_for(order: TripRequest) -> StopPriority:
    if order.pickup_time_preference == StopPriority.ASAP.value:
        return StopPriority.ASAP
    return StopPriority.FLEXIBLE


def _make_stop(order: TripRequest, stop_type: StopType, location: Location) -> DeliveryStop:
    time_window = None
    if stop_type is StopType.DELIVERY and order.scheduled_pickup_time:
        time_window = TimeWindow(start=order.scheduled_pickup_time, end=order.scheduled_pickup_time)

    return DeliveryStop(
        id=f"{stop_type.value}_{order.id}",
        order_id=order.id,
        type=stop_type,
        address=location.address or DEFAULT_ADDRESSES[stop_type],
        latitude=float(location.latitude),
        longitude=float(location.longitude),
        priority=_priority_for(order),
        estimated_duration=stop_type.service_minutes,
        customer_name=order.customer_name or "Customer",
        customer_phone=order.customer_phone or "",
        materials=_materials_for(order),
        time_window=time_window,
        notes=order.special_instructions,
    )


def project_stops(orders: Sequence[TripRequest]) -> list[DeliveryStop]:
    """Convert orders into stops, pickup before delivery for each order.

    Orders without coordinates for a leg contribute no stop for that leg.
    """

    stops: list[DeliveryStop] = []
    for order in orders:
        emitted = 0
        if order.pickup_location is not None and order.pickup_location.has_coordinates:
            stops.append(_make_stop(order, StopType.PICKUP, order.pickup_location))
            emitted += 1
        if order.delivery_location is not None and order.delivery_location.has_coordinates:
            stops.append(_make_stop(order, StopType.DELIVERY, order.delivery_location))
            emitted += 1
        if not emitted:
            logging.debug(f"Order {order.id} has no usable coordinates, skipping")
    return stops
