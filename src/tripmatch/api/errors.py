"""Translation of service exceptions into HTTP errors."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from ..errors import StoreUnavailableError


def to_http_exception(exc: Exception, action: str) -> HTTPException:
    if isinstance(exc, ValueError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, StoreUnavailableError):
        logging.error(f"Storage unavailable while trying to {action}: {exc}")
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Storage is temporarily unavailable; failed to {action}. Please retry.",
        )
    logging.exception(f"Error trying to {action}: {exc}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}: {str(exc)}",
    )
