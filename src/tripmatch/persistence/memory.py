"""In-process stores used when Supabase is not configured, and in tests."""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Iterable

from ..models.domain import DriverProfile, DriverStatus, OptimizedRoute, TripRequest, TripStatus
from ..services.outputs.routing_formatter import route_from_json, route_to_json


class InMemoryTripStore:
    """Dictionary-backed trip store.

    The claim predicate and write happen under one lock, which gives the same
    single-winner guarantee the database gives for a conditional UPDATE.
    """

    def __init__(self, trips: Iterable[TripRequest] = (), truck_types: dict[str, str] | None = None) -> None:
        self._lock = threading.Lock()
        self._trips: dict[str, TripRequest] = {}
        self._truck_types = dict(truck_types or {})
        for trip in trips:
            self.add_trip(trip)

    def add_trip(self, trip: TripRequest) -> None:
        with self._lock:
            self._trips[trip.id] = replace(trip)

    def add_truck_type(self, type_id: str, name: str) -> None:
        with self._lock:
            self._truck_types[type_id] = name

    def _snapshot(self, trip: TripRequest) -> TripRequest:
        name = trip.required_truck_type
        if trip.required_truck_type_id:
            name = self._truck_types.get(trip.required_truck_type_id, name)
        return replace(trip, required_truck_type=name)

    def get_trip(self, trip_id: str) -> TripRequest | None:
        with self._lock:
            trip = self._trips.get(trip_id)
            return self._snapshot(trip) if trip else None

    def claim_trip(self, trip_id: str, driver_id: str, matched_at: datetime) -> bool:
        with self._lock:
            trip = self._trips.get(trip_id)
            if trip is None or not trip.is_claimable:
                return False
            trip.status = TripStatus.MATCHED
            trip.assigned_driver_id = driver_id
            trip.matched_at = matched_at
            return True

    def release_trip(self, trip_id: str, driver_id: str) -> bool:
        with self._lock:
            trip = self._trips.get(trip_id)
            if trip is None or trip.assigned_driver_id != driver_id or trip.status is not TripStatus.MATCHED:
                return False
            trip.status = TripStatus.PENDING
            trip.assigned_driver_id = None
            trip.matched_at = None
            return True

    def list_open_trips(self, limit: int | None = None) -> list[TripRequest]:
        with self._lock:
            # Insertion order stands in for created_at; newest first.
            open_trips = [self._snapshot(trip) for trip in reversed(self._trips.values()) if trip.is_claimable]
        return open_trips[:limit] if limit else open_trips


class InMemoryDriverStore:
    def __init__(self, profiles: Iterable[DriverProfile] = ()) -> None:
        self._lock = threading.Lock()
        self._profiles = {profile.user_id: replace(profile) for profile in profiles}

    def add_profile(self, profile: DriverProfile) -> None:
        with self._lock:
            self._profiles[profile.user_id] = replace(profile)

    def get_profile(self, driver_id: str) -> DriverProfile | None:
        with self._lock:
            profile = self._profiles.get(driver_id)
            return replace(profile) if profile else None

    def update_status(self, driver_id: str, status: DriverStatus) -> bool:
        with self._lock:
            profile = self._profiles.get(driver_id)
            if profile is None:
                return False
            profile.status = status
            profile.is_available = status is DriverStatus.ONLINE
            return True

    def update_preferred_truck_types(self, driver_id: str, truck_types: Iterable[str]) -> bool:
        with self._lock:
            profile = self._profiles.get(driver_id)
            if profile is None:
                return False
            profile.preferred_truck_types = frozenset(truck_types)
            return True


class InMemoryRouteStore:
    """Keeps serialized snapshots so callers never share a live route object."""

    def __init__(self) -> None:
        self._snapshots: dict[str, dict] = {}

    def load(self, driver_id: str) -> OptimizedRoute | None:
        snapshot = self._snapshots.get(driver_id)
        return route_from_json(snapshot) if snapshot else None

    def save(self, route: OptimizedRoute) -> None:
        self._snapshots[route.driver_id] = route_to_json(route)

    def delete(self, driver_id: str) -> None:
        self._snapshots.pop(driver_id, None)
