"""Trip listing, compatibility and claim endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...dependencies import get_coordinator
from ...schemas.matching import AvailableTripModel, ClaimRequest, ClaimResponse, CompatibilityResponse
from ...services.matching import AssignmentCoordinator, ClaimOutcome
from ..errors import to_http_exception

router = APIRouter(prefix="/trips", tags=["trips"])

_FAILED_CLAIM_STATUS = {
    ClaimOutcome.ALREADY_TAKEN: status.HTTP_409_CONFLICT,
    ClaimOutcome.NOT_APPROVED: status.HTTP_403_FORBIDDEN,
    ClaimOutcome.INCOMPATIBLE: status.HTTP_403_FORBIDDEN,
    ClaimOutcome.TRIP_NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


@router.get("/available", response_model=List[AvailableTripModel], status_code=status.HTTP_200_OK)
def available_trips(
    driver_id: Optional[str] = Query(default=None, description="Flag each trip's compatibility for this driver"),
    compatible_only: bool = Query(default=False, description="Only list trips the driver can take"),
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    coordinator: AssignmentCoordinator = Depends(get_coordinator),
) -> List[AvailableTripModel]:
    if compatible_only and not driver_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="compatible_only requires driver_id",
        )
    try:
        listed = coordinator.list_available_trips(driver_id, compatible_only=compatible_only, limit=limit)
    except Exception as exc:
        raise to_http_exception(exc, "list available trips") from exc
    return [AvailableTripModel.from_listing(item) for item in listed]


@router.get("/{trip_id}/compatibility", response_model=CompatibilityResponse, status_code=status.HTTP_200_OK)
def trip_compatibility(
    trip_id: str,
    driver_id: str = Query(..., description="Driver whose truck types are checked"),
    coordinator: AssignmentCoordinator = Depends(get_coordinator),
) -> CompatibilityResponse:
    try:
        report = coordinator.check_compatibility(trip_id, driver_id)
    except Exception as exc:
        raise to_http_exception(exc, "check compatibility") from exc
    return CompatibilityResponse.from_report(report)


@router.post("/{trip_id}/claim", response_model=ClaimResponse, status_code=status.HTTP_200_OK)
def claim_trip(
    trip_id: str,
    payload: ClaimRequest,
    coordinator: AssignmentCoordinator = Depends(get_coordinator),
) -> ClaimResponse:
    try:
        result = coordinator.claim_trip(trip_id, payload.driver_id)
    except Exception as exc:
        raise to_http_exception(exc, "claim trip") from exc
    if not result:
        response = ClaimResponse.from_result(result)
        raise HTTPException(status_code=_FAILED_CLAIM_STATUS[result.outcome], detail=response.model_dump(mode="json"))
    return ClaimResponse.from_result(result)
