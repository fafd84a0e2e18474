"""Routing orchestration service."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import fields, replace
from datetime import datetime, timezone
from typing import Any, Sequence

from ...errors import RouteValidationError
from ...models.domain import Coordinate, DeliveryStop, OptimizedRoute, TripRequest
from ...persistence.base import RouteSnapshotStore
from .lifecycle import RouteLifecycle
from .metrics import estimate_route_metrics
from .models import OptimizationStats, RouteMetrics, RouteOptimizationConfig
from .sequencer import sequence_stops
from .stops import project_stops


def _constraint_violations(
    stops: Sequence[DeliveryStop], metrics: RouteMetrics, config: RouteOptimizationConfig
) -> dict[str, float]:
    violations: dict[str, float] = {}
    if len(stops) > config.max_stops_per_route:
        violations["max_stops"] = float(len(stops) - config.max_stops_per_route)
    if metrics.total_duration > config.max_total_duration:
        violations["max_duration_min"] = float(metrics.total_duration - config.max_total_duration)
    return violations


class RouteOptimizationService:
    """Builds optimized multi-stop routes and owns each driver's active route.

    One instance serves many drivers; each driver gets its own RouteLifecycle,
    loaded lazily from the snapshot store on first use.
    """

    def __init__(self, store: RouteSnapshotStore, config: RouteOptimizationConfig | None = None) -> None:
        self._store = store
        self.config = config or RouteOptimizationConfig()
        self._sessions: dict[str, RouteLifecycle] = {}
        self._sessions_lock = threading.Lock()
        self._history: list[RouteMetrics] = []

    def session(self, driver_id: str, *, create: bool = False) -> RouteLifecycle:
        """Return the driver's lifecycle.

        Drivers with no saved route get a throwaway lifecycle that is not
        cached unless ``create`` is set, so lookups for unknown ids do not
        accumulate state.
        """
        with self._sessions_lock:
            lifecycle = self._sessions.get(driver_id)
            if lifecycle is None:
                lifecycle = RouteLifecycle(driver_id, self._store)
                if lifecycle.initialize() is not None or create:
                    self._sessions[driver_id] = lifecycle
            return lifecycle

    def reset(self) -> None:
        """Drop all in-memory driver state and statistics; snapshots are kept."""
        with self._sessions_lock:
            for lifecycle in self._sessions.values():
                lifecycle.reset()
            self._sessions.clear()
        self._history.clear()

    def update_config(self, **overrides: Any) -> RouteOptimizationConfig:
        known = {item.name for item in fields(RouteOptimizationConfig)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown route optimization settings: {', '.join(sorted(unknown))}")
        self.config = replace(self.config, **overrides)
        logging.info(f"Route optimization config updated: {overrides}")
        return self.config

    def optimize_multi_stop_route(
        self,
        orders: Sequence[TripRequest],
        driver_id: str,
        current_location: Coordinate | None = None,
    ) -> OptimizedRoute:
        if len(orders) < self.config.min_orders_per_route:
            raise RouteValidationError(
                f"At least {self.config.min_orders_per_route} orders are required for route optimization, "
                f"got {len(orders)}."
            )

        stops = project_stops(orders)
        if not stops:
            raise RouteValidationError("None of the selected orders has pickup or delivery coordinates.")

        ordered = sequence_stops(stops, current_location, prioritize_asap=self.config.prioritize_asap)
        metrics = estimate_route_metrics(ordered, fuel_cost_per_km=self.config.fuel_cost_per_km)

        route = OptimizedRoute(
            id=f"route_{time.time_ns() // 1_000_000}",
            driver_id=driver_id,
            stops=ordered,
            total_distance=metrics.total_distance,
            total_duration=metrics.total_duration,
            estimated_fuel_cost=metrics.estimated_fuel_cost,
            fuel_savings=metrics.fuel_savings,
            time_savings=metrics.time_savings,
            optimization_score=metrics.optimization_score,
            created_at=datetime.now(timezone.utc),
            route_coordinates=[stop.coordinate for stop in ordered],
            constraint_violations=_constraint_violations(ordered, metrics, self.config),
        )

        self.session(driver_id, create=True).activate(route)
        self._history.append(metrics)

        logging.info(
            f"Optimized route {route.id} for driver {driver_id}: {len(orders)} orders, "
            f"{len(ordered)} stops, {metrics.total_distance} km, {metrics.total_duration} min, "
            f"fuel {metrics.estimated_fuel_cost}, score {metrics.optimization_score}/100"
        )
        if route.constraint_violations:
            logging.warning(f"Route {route.id} exceeds configured limits: {route.constraint_violations}")
        return route

    def get_optimization_stats(self) -> OptimizationStats:
        count = len(self._history)
        if not count:
            return OptimizationStats(0, 0.0, 0.0, 0.0)
        return OptimizationStats(
            total_routes_optimized=count,
            average_fuel_savings=round(sum(m.fuel_savings for m in self._history) / count, 1),
            average_time_savings=round(sum(m.time_savings for m in self._history) / count, 1),
            average_optimization_score=round(sum(m.optimization_score for m in self._history) / count, 1),
        )
