"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...config import settings
from ...db.supabase import execute_query, get_supabase_client
from ...dependencies import ServiceContainer, get_services
from ...errors import StoreUnavailableError

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database(services: ServiceContainer = Depends(get_services)) -> dict:
    """Check which trip store is in use and whether Supabase answers."""
    if services.backend != "supabase":
        return {
            "backend": services.backend,
            "configured": settings.supabase_configured,
            "message": "Using in-memory trip and driver stores. Set TRIPMATCH_SUPABASE_URL and TRIPMATCH_SUPABASE_KEY to use Supabase.",
        }

    supabase = get_supabase_client()
    if supabase is None:
        return {"backend": services.backend, "configured": False, "connected": False}

    try:
        response = execute_query(
            supabase.table(settings.trip_table).select("id", count="exact").limit(1),
            "health_check",
        )
    except StoreUnavailableError as exc:
        return {
            "backend": services.backend,
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
    return {
        "backend": services.backend,
        "configured": True,
        "connected": True,
        "trip_count": response.count,
        "message": f"Database connected. Found {response.count} trip requests.",
    }
