"""Service wiring for the API.

Stores are chosen from settings once per application; request handlers pull
the resulting services off ``app.state`` through the getters below.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Request

from .config import Settings, settings
from .db.supabase import get_supabase_client
from .persistence.drivers import SupabaseDriverStore
from .persistence.filesystem import FileRouteStore, FileStorage
from .persistence.memory import InMemoryDriverStore, InMemoryTripStore
from .persistence.trips import SupabaseTripStore
from .services.matching import AssignmentCoordinator
from .services.routing.models import RouteOptimizationConfig
from .services.routing.service import RouteOptimizationService


@dataclass(slots=True)
class ServiceContainer:
    routing: RouteOptimizationService
    coordinator: AssignmentCoordinator
    backend: str


def _resolve_backend(config: Settings) -> str:
    if config.storage_backend != "auto":
        return config.storage_backend
    return "supabase" if config.supabase_configured else "memory"


def build_services(config: Settings = settings) -> ServiceContainer:
    backend = _resolve_backend(config)
    if backend == "supabase":
        client = get_supabase_client()
        if client is None:
            raise RuntimeError(
                "Supabase backend selected but no client is available. "
                "Set TRIPMATCH_SUPABASE_URL and TRIPMATCH_SUPABASE_KEY."
            )
        coordinator = AssignmentCoordinator(
            SupabaseTripStore(client, table=config.trip_table, truck_type_table=config.truck_type_table),
            SupabaseDriverStore(client, table=config.driver_table),
        )
    else:
        logging.warning("Using in-memory trip and driver stores; claims will not survive a restart")
        coordinator = AssignmentCoordinator(InMemoryTripStore(), InMemoryDriverStore())

    routing = RouteOptimizationService(
        FileRouteStore(FileStorage(config.data_root)),
        RouteOptimizationConfig(
            max_stops_per_route=config.max_stops_per_route,
            max_total_duration=config.max_total_duration_minutes,
            prioritize_asap=config.prioritize_asap,
            fuel_cost_per_km=config.fuel_cost_per_km,
            min_orders_per_route=config.min_orders_per_route,
        ),
    )
    logging.info(f"Services ready (backend={backend}, snapshots under {config.data_root})")
    return ServiceContainer(routing=routing, coordinator=coordinator, backend=backend)


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_routing_service(request: Request) -> RouteOptimizationService:
    return get_services(request).routing


def get_coordinator(request: Request) -> AssignmentCoordinator:
    return get_services(request).coordinator
