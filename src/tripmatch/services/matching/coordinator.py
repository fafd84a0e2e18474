"""Trip claiming and driver status transitions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Iterable, Optional

from ...errors import StoreUnavailableError
from ...models.domain import ApprovalStatus, DriverProfile, DriverStatus, TripRequest
from ...persistence.base import DriverStore, TripStore
from .compatibility import check_truck_compatibility

APPROVAL_MESSAGES = {
    ApprovalStatus.PENDING: "Your driver application is being reviewed by our team. This usually takes 1-2 business days.",
    ApprovalStatus.UNDER_REVIEW: "Your profile is under detailed review. We may contact you for additional information.",
    ApprovalStatus.APPROVED: "Welcome to YouMats! You can now start accepting delivery requests.",
    ApprovalStatus.REJECTED: "Your application was not approved. Please contact support for more information.",
}


class ClaimOutcome(str, Enum):
    CLAIMED = "claimed"
    ALREADY_TAKEN = "already_taken"
    INCOMPATIBLE = "incompatible"
    NOT_APPROVED = "not_approved"
    TRIP_NOT_FOUND = "trip_not_found"


@dataclass(slots=True)
class CompatibilityReport:
    is_compatible: bool
    required_truck_type: str = "Any"
    driver_truck_types: list[str] = field(default_factory=list)
    material_type: Optional[str] = None
    error: Optional[str] = None


@dataclass(slots=True)
class ClaimResult:
    outcome: ClaimOutcome
    trip_id: str
    driver_id: str
    matched_at: Optional[datetime] = None
    compatibility: Optional[CompatibilityReport] = None

    def __bool__(self) -> bool:
        return self.outcome is ClaimOutcome.CLAIMED


@dataclass(slots=True)
class AvailableTrip:
    trip: TripRequest
    is_compatible: Optional[bool] = None


@dataclass(slots=True)
class ApprovalReport:
    driver_id: str
    is_approved: bool
    can_pick_trips: bool
    status: Optional[ApprovalStatus]
    message: str


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AssignmentCoordinator:
    """Gatekeeper between drivers and open trips.

    A claim passes the approval gate, then the truck compatibility gate, and
    only then issues the store's single conditional write. Losing that write
    is an ordinary outcome, not an error.
    """

    def __init__(
        self,
        trip_store: TripStore,
        driver_store: DriverStore,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.trip_store = trip_store
        self.driver_store = driver_store
        self._clock = clock or _utcnow

    def _compatibility(self, trip: TripRequest, profile: DriverProfile) -> CompatibilityReport:
        if trip.required_truck_type_id and not trip.required_truck_type:
            return CompatibilityReport(
                is_compatible=False,
                required_truck_type="",
                material_type=trip.material_type,
                error="Truck type not found",
            )
        result = check_truck_compatibility(trip.required_truck_type, profile.preferred_truck_types)
        return CompatibilityReport(
            is_compatible=result.is_compatible,
            required_truck_type=trip.required_truck_type or "Any",
            driver_truck_types=sorted(profile.preferred_truck_types),
            material_type=trip.material_type,
        )

    def check_compatibility(self, trip_id: str, driver_id: str) -> CompatibilityReport:
        trip = self.trip_store.get_trip(trip_id)
        if trip is None:
            return CompatibilityReport(is_compatible=False, required_truck_type="", error="Trip not found")
        profile = self.driver_store.get_profile(driver_id) or DriverProfile(user_id=driver_id)
        return self._compatibility(trip, profile)

    def claim_trip(self, trip_id: str, driver_id: str) -> ClaimResult:
        profile = self.driver_store.get_profile(driver_id)
        if profile is None or not profile.can_pick_trips:
            logging.info(f"Driver {driver_id} is not approved; claim of trip {trip_id} refused")
            return ClaimResult(ClaimOutcome.NOT_APPROVED, trip_id, driver_id)

        trip = self.trip_store.get_trip(trip_id)
        if trip is None:
            return ClaimResult(ClaimOutcome.TRIP_NOT_FOUND, trip_id, driver_id)

        report = self._compatibility(trip, profile)
        if not report.is_compatible:
            logging.info(
                f"Driver {driver_id} has no truck matching '{report.required_truck_type}' for trip {trip_id}"
            )
            return ClaimResult(ClaimOutcome.INCOMPATIBLE, trip_id, driver_id, compatibility=report)

        matched_at = self._clock()
        if not self.trip_store.claim_trip(trip_id, driver_id, matched_at):
            logging.info(f"Trip {trip_id} was already taken; driver {driver_id} lost the claim")
            return ClaimResult(ClaimOutcome.ALREADY_TAKEN, trip_id, driver_id, compatibility=report)

        try:
            marked_busy = self.driver_store.update_status(driver_id, DriverStatus.BUSY)
        except StoreUnavailableError:
            logging.error(f"Could not mark driver {driver_id} busy; releasing trip {trip_id}")
            self._release(trip_id, driver_id)
            raise
        if not marked_busy:
            logging.warning(f"Driver {driver_id} vanished while claiming trip {trip_id}; releasing it")
            self.trip_store.release_trip(trip_id, driver_id)
            return ClaimResult(ClaimOutcome.NOT_APPROVED, trip_id, driver_id, compatibility=report)

        logging.info(f"Trip {trip_id} claimed by driver {driver_id}")
        return ClaimResult(ClaimOutcome.CLAIMED, trip_id, driver_id, matched_at=matched_at, compatibility=report)

    def _release(self, trip_id: str, driver_id: str) -> None:
        try:
            self.trip_store.release_trip(trip_id, driver_id)
        except StoreUnavailableError:
            logging.exception(f"Trip {trip_id} is still assigned to driver {driver_id} and could not be released")

    def check_driver_approval(self, driver_id: str) -> ApprovalReport:
        profile = self.driver_store.get_profile(driver_id)
        if profile is None:
            return ApprovalReport(
                driver_id=driver_id,
                is_approved=False,
                can_pick_trips=False,
                status=None,
                message="Driver profile not found. Please complete your registration.",
            )
        message = APPROVAL_MESSAGES[profile.approval_status]
        if profile.approval_status is ApprovalStatus.REJECTED and profile.rejection_reason:
            message = profile.rejection_reason
        return ApprovalReport(
            driver_id=driver_id,
            is_approved=profile.is_approved,
            can_pick_trips=profile.can_pick_trips,
            status=profile.approval_status,
            message=message,
        )

    def list_available_trips(
        self, driver_id: str | None = None, *, compatible_only: bool = False, limit: int | None = None
    ) -> list[AvailableTrip]:
        """Open trips, newest first, flagged for the given driver when one is named."""
        trips = self.trip_store.list_open_trips(limit)
        if driver_id is None:
            return [AvailableTrip(trip) for trip in trips]
        profile = self.driver_store.get_profile(driver_id) or DriverProfile(user_id=driver_id)
        listed = [AvailableTrip(trip, self._compatibility(trip, profile).is_compatible) for trip in trips]
        if compatible_only:
            listed = [item for item in listed if item.is_compatible]
        return listed

    def update_driver_status(self, driver_id: str, status: DriverStatus) -> bool:
        updated = self.driver_store.update_status(driver_id, status)
        if updated:
            logging.info(f"Driver {driver_id} is now {status.value}")
        else:
            logging.warning(f"Status update for unknown driver {driver_id}")
        return updated

    def update_preferred_truck_types(self, driver_id: str, truck_types: Iterable[str]) -> bool:
        cleaned = sorted({name.strip() for name in truck_types if name and name.strip()})
        return self.driver_store.update_preferred_truck_types(driver_id, cleaned)
