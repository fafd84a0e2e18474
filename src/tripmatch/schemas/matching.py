"""Trip claiming and driver status schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import ApprovalStatus, DriverStatus, TripStatus
from ..services.matching import ApprovalReport, AvailableTrip, ClaimOutcome, ClaimResult, CompatibilityReport
from .routing import LocationModel


class CompatibilityResponse(BaseModel):
    is_compatible: bool
    required_truck_type: str
    driver_truck_types: List[str] = Field(default_factory=list)
    material_type: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_report(cls, report: CompatibilityReport) -> "CompatibilityResponse":
        return cls(
            is_compatible=report.is_compatible,
            required_truck_type=report.required_truck_type,
            driver_truck_types=list(report.driver_truck_types),
            material_type=report.material_type,
            error=report.error,
        )


class ClaimRequest(BaseModel):
    driver_id: str


class ClaimResponse(BaseModel):
    success: bool
    outcome: ClaimOutcome
    trip_id: str
    driver_id: str
    matched_at: Optional[datetime] = None
    compatibility: Optional[CompatibilityResponse] = None

    @classmethod
    def from_result(cls, result: ClaimResult) -> "ClaimResponse":
        return cls(
            success=bool(result),
            outcome=result.outcome,
            trip_id=result.trip_id,
            driver_id=result.driver_id,
            matched_at=result.matched_at,
            compatibility=CompatibilityResponse.from_report(result.compatibility) if result.compatibility else None,
        )


class AvailableTripModel(BaseModel):
    id: str
    status: TripStatus
    pickup_location: Optional[LocationModel] = None
    delivery_location: Optional[LocationModel] = None
    material_type: Optional[str] = None
    required_truck_type: Optional[str] = None
    quoted_price: float
    estimated_distance_km: float
    estimated_duration_minutes: float
    pickup_time_preference: str
    scheduled_pickup_time: Optional[str] = None
    customer_name: Optional[str] = None
    is_compatible: Optional[bool] = Field(
        default=None, description="Only set when the listing was requested for a specific driver."
    )

    @classmethod
    def from_listing(cls, item: AvailableTrip) -> "AvailableTripModel":
        trip = item.trip

        def location(value) -> Optional[LocationModel]:
            if value is None:
                return None
            return LocationModel(latitude=value.latitude, longitude=value.longitude, address=value.address)

        return cls(
            id=trip.id,
            status=trip.status,
            pickup_location=location(trip.pickup_location),
            delivery_location=location(trip.delivery_location),
            material_type=trip.material_type,
            required_truck_type=trip.required_truck_type,
            quoted_price=trip.quoted_price,
            estimated_distance_km=trip.estimated_distance_km,
            estimated_duration_minutes=trip.estimated_duration_minutes,
            pickup_time_preference=trip.pickup_time_preference,
            scheduled_pickup_time=trip.scheduled_pickup_time,
            customer_name=trip.customer_name,
            is_compatible=item.is_compatible,
        )


class ApprovalResponse(BaseModel):
    driver_id: str
    is_approved: bool
    can_pick_trips: bool
    status: Optional[ApprovalStatus] = None
    message: str

    @classmethod
    def from_report(cls, report: ApprovalReport) -> "ApprovalResponse":
        return cls(
            driver_id=report.driver_id,
            is_approved=report.is_approved,
            can_pick_trips=report.can_pick_trips,
            status=report.status,
            message=report.message,
        )


class DriverStatusUpdate(BaseModel):
    status: DriverStatus


class TruckTypesUpdate(BaseModel):
    truck_types: List[str]
