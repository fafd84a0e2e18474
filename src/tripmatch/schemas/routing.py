"""Routing request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..models.domain import (
    Coordinate,
    DeliveryStop,
    Location,
    MaterialLine,
    OptimizedRoute,
    RouteStatus,
    StopPriority,
    StopType,
    TripRequest,
)
from ..services.geospatial import route_bounds, route_line


class CoordinateModel(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    def to_domain(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)


class LocationModel(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: Optional[str] = None

    def to_domain(self) -> Location:
        return Location(self.latitude, self.longitude, self.address)


class MaterialLineModel(BaseModel):
    type: Optional[str] = None
    description: Optional[str] = None


class OrderModel(BaseModel):
    """An accepted order as the driver app sends it for route building."""

    id: str
    pickup_location: Optional[LocationModel] = None
    delivery_location: Optional[LocationModel] = None
    material_type: Optional[str] = None
    pickup_time_preference: str = Field(default="asap", description="'asap' or 'scheduled'.")
    scheduled_pickup_time: Optional[str] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    materials: List[MaterialLineModel] = Field(default_factory=list)
    special_instructions: Optional[str] = None

    def to_domain(self) -> TripRequest:
        return TripRequest(
            id=self.id,
            pickup_location=self.pickup_location.to_domain() if self.pickup_location else None,
            delivery_location=self.delivery_location.to_domain() if self.delivery_location else None,
            material_type=self.material_type,
            pickup_time_preference=self.pickup_time_preference,
            scheduled_pickup_time=self.scheduled_pickup_time,
            customer_name=self.customer_name,
            customer_phone=self.customer_phone,
            materials=[MaterialLine(type=line.type, description=line.description) for line in self.materials],
            special_instructions=self.special_instructions,
        )


class OptimizeRouteRequest(BaseModel):
    driver_id: str
    orders: List[OrderModel]
    current_location: Optional[CoordinateModel] = Field(
        default=None,
        description="Driver's position. When omitted, the route starts at the first stop.",
    )


class TimeWindowModel(BaseModel):
    start: str
    end: str


class DeliveryStopModel(BaseModel):
    id: str
    order_id: str
    type: StopType
    address: str
    latitude: float
    longitude: float
    priority: StopPriority
    estimated_duration: int
    customer_name: str
    customer_phone: str
    materials: List[str]
    time_window: Optional[TimeWindowModel] = None
    notes: Optional[str] = None

    @classmethod
    def from_domain(cls, stop: DeliveryStop) -> "DeliveryStopModel":
        return cls(
            id=stop.id,
            order_id=stop.order_id,
            type=stop.type,
            address=stop.address,
            latitude=stop.latitude,
            longitude=stop.longitude,
            priority=stop.priority,
            estimated_duration=stop.estimated_duration,
            customer_name=stop.customer_name,
            customer_phone=stop.customer_phone,
            materials=list(stop.materials),
            time_window=(
                TimeWindowModel(start=stop.time_window.start, end=stop.time_window.end)
                if stop.time_window
                else None
            ),
            notes=stop.notes,
        )


class MapOverlayModel(BaseModel):
    """Polyline through the stops in visiting order, for the driver map."""

    wkt: Optional[str] = None
    bounds: Optional[List[float]] = Field(
        default=None, description="[min_latitude, min_longitude, max_latitude, max_longitude]"
    )

    @classmethod
    def from_coordinates(cls, coordinates: List[Coordinate]) -> "MapOverlayModel":
        line = route_line(coordinates)
        bounds = route_bounds(coordinates)
        return cls(wkt=line.wkt if line is not None else None, bounds=list(bounds) if bounds else None)


class RouteResponse(BaseModel):
    id: str
    driver_id: str
    status: RouteStatus
    stops: List[DeliveryStopModel]
    total_distance: float
    total_duration: int
    estimated_fuel_cost: float
    fuel_savings: int
    time_savings: int
    optimization_score: int
    created_at: datetime
    constraint_violations: Dict[str, float]
    map_overlay: MapOverlayModel

    @classmethod
    def from_domain(cls, route: OptimizedRoute) -> "RouteResponse":
        return cls(
            id=route.id,
            driver_id=route.driver_id,
            status=route.status,
            stops=[DeliveryStopModel.from_domain(stop) for stop in route.stops],
            total_distance=route.total_distance,
            total_duration=route.total_duration,
            estimated_fuel_cost=route.estimated_fuel_cost,
            fuel_savings=route.fuel_savings,
            time_savings=route.time_savings,
            optimization_score=route.optimization_score,
            created_at=route.created_at,
            constraint_violations=dict(route.constraint_violations),
            map_overlay=MapOverlayModel.from_coordinates(
                route.route_coordinates or [stop.coordinate for stop in route.stops]
            ),
        )


class AcceptRouteRequest(BaseModel):
    route_id: str


class RouteActionResponse(BaseModel):
    success: bool
    message: str
    route: Optional[RouteResponse] = None


class OptimizationStatsResponse(BaseModel):
    total_routes_optimized: int
    average_fuel_savings: float
    average_time_savings: float
    average_optimization_score: float
