"""Row adapters between Supabase records and domain models.

Array-valued profile columns are stored as JSON text by the mobile apps, so
decoding happens here once and business logic only ever sees typed sets.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any

from ..models.domain import (
    ApprovalStatus,
    DriverProfile,
    DriverStatus,
    Location,
    MaterialLine,
    TripRequest,
    TripStatus,
)

UNKNOWN_ADDRESS = "Location not specified"


def parse_text_set(value: Any) -> frozenset[str]:
    """Decode a JSON-encoded (or already decoded) string array into a set.

    Null, blank, malformed and non-array values all yield an empty set.
    """
    if value is None:
        return frozenset()
    if isinstance(value, (list, tuple, set, frozenset)):
        return frozenset(str(item) for item in value if item is not None and str(item).strip())
    if isinstance(value, str):
        if not value.strip():
            return frozenset()
        try:
            parsed = json.loads(value)
        except (json.JSONDecodeError, TypeError):
            logging.debug(f"Unparseable array column value: {value!r}")
            return frozenset()
        if isinstance(parsed, list):
            return parse_text_set(parsed)
    return frozenset()


def extract_address(value: Any) -> str | None:
    """Addresses arrive either as plain text or as a geocoder JSON object."""
    if value is None:
        return None
    if isinstance(value, str):
        if value.strip().startswith("{"):
            try:
                return extract_address(json.loads(value))
            except json.JSONDecodeError:
                return value
        return value or None
    if isinstance(value, dict):
        city_state = f"{value.get('city') or ''} {value.get('state') or ''}".strip()
        return (
            value.get("formatted_address")
            or value.get("address")
            or value.get("street")
            or city_state
            or UNKNOWN_ADDRESS
        )
    return UNKNOWN_ADDRESS


def _as_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_datetime(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def _location(row: dict[str, Any], prefix: str) -> Location | None:
    latitude = _as_float(row.get(f"{prefix}_latitude"))
    longitude = _as_float(row.get(f"{prefix}_longitude"))
    address = extract_address(row.get(f"{prefix}_address"))
    if latitude is None and longitude is None and address is None:
        return None
    return Location(latitude=latitude, longitude=longitude, address=address)


def _materials(value: Any) -> list[MaterialLine]:
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            return []
    if not isinstance(value, list):
        return []
    return [
        MaterialLine(type=item.get("type"), description=item.get("description"))
        for item in value
        if isinstance(item, dict)
    ]


def _trip_status(value: Any) -> TripStatus:
    try:
        return TripStatus(value or TripStatus.PENDING.value)
    except ValueError:
        # Offer/queue states from other clients are never claimable here.
        logging.warning(f"Unknown trip status '{value}', treating as cancelled")
        return TripStatus.CANCELLED


def trip_from_row(row: dict[str, Any], truck_type_name: str | None = None) -> TripRequest:
    special = row.get("special_instructions")
    if not special and row.get("special_requirements"):
        requirements = row["special_requirements"]
        special = requirements if isinstance(requirements, str) else json.dumps(requirements)

    return TripRequest(
        id=str(row["id"]),
        pickup_location=_location(row, "pickup"),
        delivery_location=_location(row, "delivery"),
        material_type=row.get("material_type"),
        required_truck_type_id=row.get("required_truck_type_id"),
        required_truck_type=truck_type_name,
        quoted_price=_as_float(row.get("quoted_price")) or 0.0,
        estimated_distance_km=_as_float(row.get("estimated_distance_km")) or 0.0,
        estimated_duration_minutes=_as_float(row.get("estimated_duration_minutes")) or 0.0,
        status=_trip_status(row.get("status")),
        assigned_driver_id=row.get("assigned_driver_id"),
        matched_at=_as_datetime(row.get("matched_at")),
        pickup_time_preference=row.get("pickup_time_preference") or "asap",
        scheduled_pickup_time=row.get("scheduled_pickup_time"),
        customer_name=row.get("customer_name"),
        customer_phone=row.get("customer_phone"),
        materials=_materials(row.get("materials")),
        special_instructions=special,
    )


def profile_from_row(row: dict[str, Any]) -> DriverProfile:
    try:
        approval = ApprovalStatus(row.get("approval_status") or ApprovalStatus.PENDING.value)
    except ValueError:
        approval = ApprovalStatus.PENDING
    try:
        status = DriverStatus(row.get("status") or DriverStatus.OFFLINE.value)
    except ValueError:
        status = DriverStatus.OFFLINE

    return DriverProfile(
        user_id=str(row["user_id"]),
        preferred_truck_types=parse_text_set(row.get("preferred_truck_types")),
        is_approved=row.get("is_approved") is True,
        approval_status=approval,
        is_available=bool(row.get("is_available")),
        status=status,
        rejection_reason=row.get("rejection_reason"),
    )
