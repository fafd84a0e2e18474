"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass

from ...config import settings


@dataclass(slots=True)
class RouteMetrics:
    total_distance: float
    total_duration: int
    estimated_fuel_cost: float
    fuel_savings: int
    time_savings: int
    optimization_score: int


@dataclass(slots=True)
class RouteOptimizationConfig:
    """Tunables for multi-stop optimization.

    Stop and duration limits are advisory: an optimized route that exceeds them
    is still returned, with the excess recorded in its constraint_violations.
    """

    max_stops_per_route: int = settings.max_stops_per_route
    max_total_duration: int = settings.max_total_duration_minutes
    prioritize_asap: bool = settings.prioritize_asap
    fuel_cost_per_km: float = settings.fuel_cost_per_km
    min_orders_per_route: int = settings.min_orders_per_route


@dataclass(slots=True)
class OptimizationStats:
    total_routes_optimized: int
    average_fuel_savings: float
    average_time_savings: float
    average_optimization_score: float
