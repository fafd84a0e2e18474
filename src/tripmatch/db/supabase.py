"""Supabase client for Python backend."""

import logging
from functools import lru_cache
from typing import Any

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from ..config import settings
from ..errors import StoreUnavailableError


@lru_cache()
def get_supabase_client() -> Client | None:
    """Get cached Supabase client instance.

    Returns:
        Supabase Client instance if configured, None otherwise.
        Note: This does not test the connection - actual queries may fail with network errors.
    """
    if not settings.supabase_configured:
        logging.warning("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logging.error(f"Failed to create Supabase client: {e}")
        return None


def execute_query(query: Any, operation: str) -> Any:
    """Run a PostgREST query builder, translating transport and API failures.

    Every store call funnels through here so callers only ever see
    StoreUnavailableError for I/O problems.
    """
    try:
        return query.execute()
    except (APIError, httpx.HTTPError) as exc:
        logging.error(f"Supabase {operation} failed: {exc}")
        raise StoreUnavailableError(operation, exc) from exc
