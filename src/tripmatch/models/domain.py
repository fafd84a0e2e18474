"""Domain models for trips, stops, routes and driver profiles."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class StopType(str, Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"

    @property
    def service_minutes(self) -> int:
        """Fixed on-site handling time for this kind of stop."""
        return {
            StopType.PICKUP: 15,
            StopType.DELIVERY: 20,
        }[self]


class StopPriority(str, Enum):
    ASAP = "asap"
    SCHEDULED = "scheduled"
    FLEXIBLE = "flexible"


class RouteStatus(str, Enum):
    """Lifecycle of an optimized route. Values only ever advance in this order."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TripStatus(str, Enum):
    PENDING = "pending"
    MATCHED = "matched"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class ApprovalStatus(str, Enum):
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"


class DriverStatus(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    BUSY = "busy"
    ON_BREAK = "on_break"


@dataclass(slots=True, frozen=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(slots=True)
class Location:
    """A pickup or delivery point as stored on a trip request."""

    latitude: Optional[float]
    longitude: Optional[float]
    address: Optional[str] = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(slots=True)
class TimeWindow:
    start: str
    end: str


@dataclass(slots=True)
class MaterialLine:
    type: Optional[str] = None
    description: Optional[str] = None


@dataclass(slots=True)
class TripRequest:
    """A unit of work a driver can claim: one pickup and one delivery."""

    id: str
    pickup_location: Optional[Location]
    delivery_location: Optional[Location]
    material_type: Optional[str] = None
    required_truck_type_id: Optional[str] = None
    required_truck_type: Optional[str] = None
    quoted_price: float = 0.0
    estimated_distance_km: float = 0.0
    estimated_duration_minutes: float = 0.0
    status: TripStatus = TripStatus.PENDING
    assigned_driver_id: Optional[str] = None
    matched_at: Optional[datetime] = None
    pickup_time_preference: str = "asap"
    scheduled_pickup_time: Optional[str] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    materials: list[MaterialLine] = field(default_factory=list)
    special_instructions: Optional[str] = None

    @property
    def is_claimable(self) -> bool:
        return self.status is TripStatus.PENDING and self.assigned_driver_id is None


@dataclass(slots=True)
class DeliveryStop:
    """One physical visit on a route."""

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
    materials: list[str]
    time_window: Optional[TimeWindow] = None
    notes: Optional[str] = None

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)


@dataclass(slots=True)
class OptimizedRoute:
    """An ordered delivery plan owned by exactly one driver."""

    id: str
    driver_id: str
    stops: list[DeliveryStop]
    total_distance: float
    total_duration: int
    estimated_fuel_cost: float
    fuel_savings: int
    time_savings: int
    optimization_score: int
    created_at: datetime
    status: RouteStatus = RouteStatus.PENDING
    route_coordinates: list[Coordinate] = field(default_factory=list)
    constraint_violations: dict[str, float] = field(default_factory=dict)


@dataclass(slots=True)
class DriverProfile:
    """Driver attributes consumed by matching. Owned by the profile store."""

    user_id: str
    preferred_truck_types: frozenset[str] = frozenset()
    is_approved: bool = False
    approval_status: ApprovalStatus = ApprovalStatus.PENDING
    is_available: bool = False
    status: DriverStatus = DriverStatus.OFFLINE
    rejection_reason: Optional[str] = None

    @property
    def can_pick_trips(self) -> bool:
        return self.is_approved and self.approval_status is ApprovalStatus.APPROVED
