"""Serializers for optimized routes and their stops."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Any

from ...models.domain import (
    Coordinate,
    DeliveryStop,
    OptimizedRoute,
    RouteStatus,
    StopPriority,
    StopType,
    TimeWindow,
)


def stop_to_json(stop: DeliveryStop) -> dict[str, Any]:
    return {
        "id": stop.id,
        "order_id": stop.order_id,
        "type": stop.type.value,
        "address": stop.address,
        "latitude": stop.latitude,
        "longitude": stop.longitude,
        "priority": stop.priority.value,
        "estimated_duration": stop.estimated_duration,
        "customer_name": stop.customer_name,
        "customer_phone": stop.customer_phone,
        "materials": list(stop.materials),
        "time_window": asdict(stop.time_window) if stop.time_window else None,
        "notes": stop.notes,
    }


def stop_from_json(data: dict[str, Any]) -> DeliveryStop:
    window = data.get("time_window")
    return DeliveryStop(
        id=data["id"],
        order_id=data["order_id"],
        type=StopType(data["type"]),
        address=data.get("address") or "",
        latitude=float(data["latitude"]),
        longitude=float(data["longitude"]),
        priority=StopPriority(data.get("priority", StopPriority.FLEXIBLE.value)),
        estimated_duration=int(data["estimated_duration"]),
        customer_name=data.get("customer_name") or "Customer",
        customer_phone=data.get("customer_phone") or "",
        materials=list(data.get("materials") or []),
        time_window=TimeWindow(start=window["start"], end=window["end"]) if window else None,
        notes=data.get("notes"),
    )


def route_to_json(route: OptimizedRoute) -> dict[str, Any]:
    return {
        "id": route.id,
        "driver_id": route.driver_id,
        "status": route.status.value,
        "created_at": route.created_at.isoformat(),
        "total_distance": route.total_distance,
        "total_duration": route.total_duration,
        "estimated_fuel_cost": route.estimated_fuel_cost,
        "fuel_savings": route.fuel_savings,
        "time_savings": route.time_savings,
        "optimization_score": route.optimization_score,
        "constraint_violations": dict(route.constraint_violations),
        "stops": [stop_to_json(stop) for stop in route.stops],
        "route_coordinates": [
            {"latitude": point.latitude, "longitude": point.longitude} for point in route.route_coordinates
        ],
    }


def route_from_json(data: dict[str, Any]) -> OptimizedRoute:
    return OptimizedRoute(
        id=data["id"],
        driver_id=data["driver_id"],
        stops=[stop_from_json(item) for item in data.get("stops", [])],
        total_distance=float(data["total_distance"]),
        total_duration=int(data["total_duration"]),
        estimated_fuel_cost=float(data["estimated_fuel_cost"]),
        fuel_savings=int(data["fuel_savings"]),
        time_savings=int(data["time_savings"]),
        optimization_score=int(data["optimization_score"]),
        created_at=datetime.fromisoformat(data["created_at"]),
        status=RouteStatus(data.get("status", RouteStatus.PENDING.value)),
        route_coordinates=[
            Coordinate(float(item["latitude"]), float(item["longitude"]))
            for item in data.get("route_coordinates", [])
        ],
        constraint_violations={
            key: float(value) for key, value in (data.get("constraint_violations") or {}).items()
        },
    )
