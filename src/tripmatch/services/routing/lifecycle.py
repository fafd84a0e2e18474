"""Per-driver lifecycle of the active optimized route.

pending -> accepted -> in_progress -> completed. Every transition writes the
whole route to the snapshot store so it survives restarts. Precondition
failures are reported as False/None; store failures propagate and leave the
in-memory route as it was before the call.
"""

from __future__ import annotations

import logging
from typing import Callable

from ...errors import StoreUnavailableError
from ...models.domain import DeliveryStop, OptimizedRoute, RouteStatus
from ...persistence.base import RouteSnapshotStore


class RouteLifecycle:
    def __init__(self, driver_id: str, store: RouteSnapshotStore) -> None:
        self.driver_id = driver_id
        self._store = store
        self._route: OptimizedRoute | None = None

    def initialize(self) -> OptimizedRoute | None:
        """Load the persisted active route for this driver, if any."""
        self._route = self._store.load(self.driver_id)
        if self._route is not None:
            logging.info(
                f"Loaded saved route {self._route.id} for driver {self.driver_id} "
                f"with {len(self._route.stops)} stops ({self._route.status.value})"
            )
        return self._route

    def reset(self) -> None:
        """Forget the in-memory route without touching storage."""
        self._route = None

    def _persist(self, undo: Callable[[], None]) -> None:
        try:
            self._store.save(self._route)
        except StoreUnavailableError:
            undo()
            raise

    def activate(self, route: OptimizedRoute) -> OptimizedRoute:
        """Install a freshly optimized route, replacing any previous one."""
        if route.driver_id != self.driver_id:
            raise ValueError(f"Route {route.id} belongs to driver {route.driver_id}, not {self.driver_id}")
        previous = self._route

        def undo() -> None:
            self._route = previous

        route.status = RouteStatus.PENDING
        self._route = route
        self._persist(undo)
        return route

    def get_active_route(self) -> OptimizedRoute | None:
        return self._route

    def get_next_stop(self) -> DeliveryStop | None:
        if self._route is None or not self._route.stops:
            return None
        return self._route.stops[0]

    def _advance(self, route: OptimizedRoute, target: RouteStatus) -> None:
        previous = route.status

        def undo() -> None:
            route.status = previous

        route.status = target
        self._persist(undo)

    def accept_route(self, route_id: str) -> bool:
        route = self._route
        if route is None or route.id != route_id:
            logging.warning(f"Driver {self.driver_id}: route {route_id} not found or not active")
            return False
        if route.status is not RouteStatus.PENDING:
            logging.warning(f"Driver {self.driver_id}: route {route_id} is already {route.status.value}")
            return False
        self._advance(route, RouteStatus.ACCEPTED)
        logging.info(f"Driver {self.driver_id}: route {route_id} accepted")
        return True

    def start_route(self) -> bool:
        route = self._route
        if route is None or route.status is not RouteStatus.ACCEPTED:
            logging.warning(f"Driver {self.driver_id}: no accepted route to start")
            return False
        self._advance(route, RouteStatus.IN_PROGRESS)
        logging.info(f"Driver {self.driver_id}: route {route.id} started")
        return True

    def complete_stop(self, stop_id: str) -> DeliveryStop | None:
        route = self._route
        if route is None or route.status is not RouteStatus.IN_PROGRESS:
            logging.warning(f"Driver {self.driver_id}: no route in progress")
            return None

        index = next((i for i, stop in enumerate(route.stops) if stop.id == stop_id), None)
        if index is None:
            logging.warning(f"Driver {self.driver_id}: stop {stop_id} not found in route {route.id}")
            return None

        completed = route.stops.pop(index)

        def undo() -> None:
            route.stops.insert(index, completed)
            route.status = RouteStatus.IN_PROGRESS

        if not route.stops:
            route.status = RouteStatus.COMPLETED
        self._persist(undo)
        if route.status is RouteStatus.COMPLETED:
            logging.info(f"Driver {self.driver_id}: route {route.id} completed")
        return completed

    def clear_route(self) -> None:
        self._store.delete(self.driver_id)
        self._route = None
        logging.info(f"Driver {self.driver_id}: active route cleared")
