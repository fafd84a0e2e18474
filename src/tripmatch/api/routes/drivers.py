"""Driver approval and availability endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from ...dependencies import get_coordinator
from ...schemas.matching import ApprovalResponse, DriverStatusUpdate, TruckTypesUpdate
from ...services.matching import AssignmentCoordinator
from ..errors import to_http_exception

router = APIRouter(prefix="/drivers", tags=["drivers"])


@router.get("/{driver_id}/approval", response_model=ApprovalResponse, status_code=status.HTTP_200_OK)
def driver_approval(driver_id: str, coordinator: AssignmentCoordinator = Depends(get_coordinator)) -> ApprovalResponse:
    try:
        report = coordinator.check_driver_approval(driver_id)
    except Exception as exc:
        raise to_http_exception(exc, "check driver approval") from exc
    return ApprovalResponse.from_report(report)


@router.put("/{driver_id}/status", status_code=status.HTTP_200_OK)
def update_status(
    driver_id: str,
    payload: DriverStatusUpdate,
    coordinator: AssignmentCoordinator = Depends(get_coordinator),
) -> dict:
    try:
        updated = coordinator.update_driver_status(driver_id, payload.status)
    except Exception as exc:
        raise to_http_exception(exc, "update driver status") from exc
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Driver {driver_id} not found")
    return {"success": True, "driver_id": driver_id, "status": payload.status.value}


@router.put("/{driver_id}/truck-types", status_code=status.HTTP_200_OK)
def update_truck_types(
    driver_id: str,
    payload: TruckTypesUpdate,
    coordinator: AssignmentCoordinator = Depends(get_coordinator),
) -> dict:
    try:
        updated = coordinator.update_preferred_truck_types(driver_id, payload.truck_types)
    except Exception as exc:
        raise to_http_exception(exc, "update truck types") from exc
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Driver {driver_id} not found")
    return {"success": True, "driver_id": driver_id}
