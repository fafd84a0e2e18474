"""Exception types raised by the trip-matching core."""

from __future__ import annotations


class TripMatchError(Exception):
    """Base class for all tripmatch errors."""


class RouteValidationError(TripMatchError, ValueError):
    """Raised when an optimization request is rejected before any computation."""


class StoreUnavailableError(TripMatchError):
    """A backing store could not be reached or rejected the request.

    Raised for transient I/O failures only. The core never retries; callers
    decide whether to try again.
    """

    def __init__(self, operation: str, cause: BaseException | None = None) -> None:
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Store operation '{operation}' failed{detail}")
