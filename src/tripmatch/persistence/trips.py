"""Supabase-backed trip request store."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable

from supabase import Client

from ..config import settings
from ..db.supabase import execute_query
from ..models.domain import TripRequest, TripStatus
from .serialization import trip_from_row


class SupabaseTripStore:
    """Trip reads and predicate-guarded writes against the trip_requests table."""

    def __init__(
        self,
        client: Client,
        *,
        table: str | None = None,
        truck_type_table: str | None = None,
    ) -> None:
        self._client = client
        self._table = table or settings.trip_table
        self._truck_type_table = truck_type_table or settings.truck_type_table

    def _truck_type_names(self, type_ids: Iterable[str]) -> dict[str, str]:
        ids = sorted({str(type_id) for type_id in type_ids if type_id})
        if not ids:
            return {}
        response = execute_query(
            self._client.table(self._truck_type_table).select("id, name").in_("id", ids),
            "truck_type_lookup",
        )
        return {str(row["id"]): row["name"] for row in (response.data or []) if row.get("name")}

    def get_trip(self, trip_id: str) -> TripRequest | None:
        response = execute_query(
            self._client.table(self._table).select("*").eq("id", trip_id).limit(1),
            "get_trip",
        )
        if not response.data:
            return None
        row = response.data[0]
        type_id = row.get("required_truck_type_id")
        names = self._truck_type_names([type_id]) if type_id else {}
        return trip_from_row(row, names.get(str(type_id)) if type_id else None)

    def claim_trip(self, trip_id: str, driver_id: str, matched_at: datetime) -> bool:
        # One PATCH with all filters: PostgREST turns this into a single
        # UPDATE ... WHERE id = ? AND status = 'pending' AND assigned_driver_id IS NULL.
        response = execute_query(
            self._client.table(self._table)
            .update(
                {
                    "status": TripStatus.MATCHED.value,
                    "assigned_driver_id": driver_id,
                    "matched_at": matched_at.isoformat(),
                }
            )
            .eq("id", trip_id)
            .eq("status", TripStatus.PENDING.value)
            .is_("assigned_driver_id", "null"),
            "claim_trip",
        )
        claimed = bool(response.data)
        if not claimed:
            logging.info(f"Trip {trip_id} was not claimable for driver {driver_id}")
        return claimed

    def release_trip(self, trip_id: str, driver_id: str) -> bool:
        response = execute_query(
            self._client.table(self._table)
            .update(
                {
                    "status": TripStatus.PENDING.value,
                    "assigned_driver_id": None,
                    "matched_at": None,
                }
            )
            .eq("id", trip_id)
            .eq("assigned_driver_id", driver_id)
            .eq("status", TripStatus.MATCHED.value),
            "release_trip",
        )
        return bool(response.data)

    def list_open_trips(self, limit: int | None = None) -> list[TripRequest]:
        query = (
            self._client.table(self._table)
            .select("*")
            .eq("status", TripStatus.PENDING.value)
            .is_("assigned_driver_id", "null")
            .order("created_at", desc=True)
        )
        if limit:
            query = query.limit(limit)
        rows = execute_query(query, "list_open_trips").data or []
        names = self._truck_type_names(row.get("required_truck_type_id") for row in rows)
        return [
            trip_from_row(row, names.get(str(row.get("required_truck_type_id"))))
            for row in rows
        ]
