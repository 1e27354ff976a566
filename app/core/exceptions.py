# app/core/exceptions.py
"""
Booking engine error kinds.

Every error carries a stable ``kind`` plus a human readable message. The API
layer maps each kind to an HTTP status through ``status_code``.
"""
from datetime import datetime, timezone

from fastapi import Request
from starlette.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)


class BookingEngineError(Exception):
    """Base class for all engine errors"""

    kind = "BookingEngineError"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {
            "error": self.kind,
            "message": self.message,
            "status": self.status_code,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


class ResourceNotFound(BookingEngineError):
    """Tenant, service or booking does not exist (or is not visible)"""
    kind = "ResourceNotFound"
    status_code = 404


class TenantInactive(BookingEngineError):
    """Tenant exists but is not accepting bookings"""
    kind = "TenantInactive"
    status_code = 403


class BookingConflict(BookingEngineError):
    """Past-dated request, overlap, or invalid status transition"""
    kind = "BookingConflict"
    status_code = 409


class InvalidConfiguration(BookingEngineError):
    """A business hours record violates its invariants"""
    kind = "InvalidConfiguration"
    status_code = 422


async def booking_engine_error_handler(request: Request, exc: BookingEngineError):
    """Render engine errors as JSON responses"""
    correlation_id = getattr(request.state, "correlation_id", "unknown")
    logger.info(
        f"{exc.kind}: {exc.message}",
        extra={"correlation_id": correlation_id, "url": str(request.url)}
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
