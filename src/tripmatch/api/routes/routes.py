"""Multi-stop route endpoints for the driver app."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from ...dependencies import get_routing_service
from ...schemas.routing import (
    AcceptRouteRequest,
    DeliveryStopModel,
    OptimizationStatsResponse,
    OptimizeRouteRequest,
    RouteActionResponse,
    RouteResponse,
)
from ...services.routing.service import RouteOptimizationService
from ..errors import to_http_exception

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/optimize", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def optimize(
    payload: OptimizeRouteRequest,
    service: RouteOptimizationService = Depends(get_routing_service),
) -> RouteResponse:
    try:
        route = service.optimize_multi_stop_route(
            [order.to_domain() for order in payload.orders],
            payload.driver_id,
            payload.current_location.to_domain() if payload.current_location else None,
        )
    except Exception as exc:
        raise to_http_exception(exc, "optimize route") from exc
    return RouteResponse.from_domain(route)


@router.get("/stats", response_model=OptimizationStatsResponse, status_code=status.HTTP_200_OK)
def optimization_stats(service: RouteOptimizationService = Depends(get_routing_service)) -> OptimizationStatsResponse:
    stats = service.get_optimization_stats()
    return OptimizationStatsResponse(
        total_routes_optimized=stats.total_routes_optimized,
        average_fuel_savings=stats.average_fuel_savings,
        average_time_savings=stats.average_time_savings,
        average_optimization_score=stats.average_optimization_score,
    )


@router.get("/{driver_id}/active", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def active_route(driver_id: str, service: RouteOptimizationService = Depends(get_routing_service)) -> RouteResponse:
    try:
        route = service.session(driver_id).get_active_route()
    except Exception as exc:
        raise to_http_exception(exc, "load active route") from exc
    if route is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Driver {driver_id} has no active route")
    return RouteResponse.from_domain(route)


@router.get("/{driver_id}/next-stop", response_model=DeliveryStopModel, status_code=status.HTTP_200_OK)
def next_stop(driver_id: str, service: RouteOptimizationService = Depends(get_routing_service)) -> DeliveryStopModel:
    try:
        stop = service.session(driver_id).get_next_stop()
    except Exception as exc:
        raise to_http_exception(exc, "load next stop") from exc
    if stop is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Driver {driver_id} has no remaining stops")
    return DeliveryStopModel.from_domain(stop)


def _action_response(service: RouteOptimizationService, driver_id: str, success: bool, message: str) -> RouteActionResponse:
    route = service.session(driver_id).get_active_route()
    return RouteActionResponse(
        success=success,
        message=message,
        route=RouteResponse.from_domain(route) if route is not None else None,
    )


@router.post("/{driver_id}/accept", response_model=RouteActionResponse, status_code=status.HTTP_200_OK)
def accept_route(
    driver_id: str,
    payload: AcceptRouteRequest,
    service: RouteOptimizationService = Depends(get_routing_service),
) -> RouteActionResponse:
    try:
        accepted = service.session(driver_id).accept_route(payload.route_id)
    except Exception as exc:
        raise to_http_exception(exc, "accept route") from exc
    if not accepted:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Route {payload.route_id} is not the pending route of driver {driver_id}",
        )
    return _action_response(service, driver_id, True, f"Route {payload.route_id} accepted")


@router.post("/{driver_id}/start", response_model=RouteActionResponse, status_code=status.HTTP_200_OK)
def start_route(driver_id: str, service: RouteOptimizationService = Depends(get_routing_service)) -> RouteActionResponse:
    try:
        started = service.session(driver_id).start_route()
    except Exception as exc:
        raise to_http_exception(exc, "start route") from exc
    if not started:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Driver {driver_id} has no accepted route to start",
        )
    return _action_response(service, driver_id, True, "Route started")


@router.post(
    "/{driver_id}/stops/{stop_id}/complete",
    response_model=RouteActionResponse,
    status_code=status.HTTP_200_OK,
)
def complete_stop(
    driver_id: str,
    stop_id: str,
    service: RouteOptimizationService = Depends(get_routing_service),
) -> RouteActionResponse:
    try:
        completed = service.session(driver_id).complete_stop(stop_id)
    except Exception as exc:
        raise to_http_exception(exc, "complete stop") from exc
    if completed is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Stop {stop_id} is not pending on an in-progress route of driver {driver_id}",
        )
    return _action_response(service, driver_id, True, f"Stop {stop_id} completed")


@router.delete("/{driver_id}/active", status_code=status.HTTP_200_OK)
def clear_route(driver_id: str, service: RouteOptimizationService = Depends(get_routing_service)) -> dict:
    try:
        service.session(driver_id).clear_route()
    except Exception as exc:
        raise to_http_exception(exc, "clear route") from exc
    return {"success": True, "message": f"Active route of driver {driver_id} cleared"}
