"""Supabase-backed driver profile store."""

from __future__ import annotations

import json
from typing import Iterable

from supabase import Client

from ..config import settings
from ..db.supabase import execute_query
from ..models.domain import DriverProfile, DriverStatus
from .serialization import profile_from_row

PROFILE_COLUMNS = "user_id, preferred_truck_types, is_approved, approval_status, is_available, status, rejection_reason"


class SupabaseDriverStore:
    def __init__(self, client: Client, *, table: str | None = None) -> None:
        self._client = client
        self._table = table or settings.driver_table

    def get_profile(self, driver_id: str) -> DriverProfile | None:
        response = execute_query(
            self._client.table(self._table).select(PROFILE_COLUMNS).eq("user_id", driver_id).limit(1),
            "get_driver_profile",
        )
        if not response.data:
            return None
        return profile_from_row(response.data[0])

    def update_status(self, driver_id: str, status: DriverStatus) -> bool:
        response = execute_query(
            self._client.table(self._table)
            .update({"status": status.value, "is_available": status is DriverStatus.ONLINE})
            .eq("user_id", driver_id),
            "update_driver_status",
        )
        return bool(response.data)

    def update_preferred_truck_types(self, driver_id: str, truck_types: Iterable[str]) -> bool:
        # Column is JSON text for compatibility with the mobile clients.
        encoded = json.dumps(sorted(set(truck_types)))
        response = execute_query(
            self._client.table(self._table)
            .update({"preferred_truck_types": encoded})
            .eq("user_id", driver_id),
            "update_preferred_truck_types",
        )
        return bool(response.data)
