"""Store contracts consumed by the routing and matching services."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Protocol

from ..models.domain import DriverProfile, DriverStatus, OptimizedRoute, TripRequest


class TripStore(Protocol):
    def get_trip(self, trip_id: str) -> TripRequest | None:
        """Read a trip with its required truck type name resolved."""

    def claim_trip(self, trip_id: str, driver_id: str, matched_at: datetime) -> bool:
        """Atomically bind driver_id to a pending, unassigned trip.

        Must be a single predicate-guarded write evaluated by the store.
        Returns False when no row matched the predicate.
        """

    def release_trip(self, trip_id: str, driver_id: str) -> bool:
        """Undo a claim made by driver_id, if it is still in place."""

    def list_open_trips(self, limit: int | None = None) -> list[TripRequest]:
        """Pending trips with no assigned driver, newest first."""


class DriverStore(Protocol):
    def get_profile(self, driver_id: str) -> DriverProfile | None: ...

    def update_status(self, driver_id: str, status: DriverStatus) -> bool: ...

    def update_preferred_truck_types(self, driver_id: str, truck_types: Iterable[str]) -> bool: ...


class RouteSnapshotStore(Protocol):
    """Durable per-driver slot holding the single active route."""

    def load(self, driver_id: str) -> OptimizedRoute | None: ...

    def save(self, route: OptimizedRoute) -> None: ...

    def delete(self, driver_id: str) -> None: ...
