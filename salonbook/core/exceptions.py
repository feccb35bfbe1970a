# salonbook/core/exceptions.py
"""
Domain errors raised by the service layer.

Every error carries a stable ``reason`` code that is returned to the caller
alongside the human readable message, so the booking form can decide whether
to ask the client to fix input, pick another slot, or simply try again later.
"""
import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BookingError(Exception):
    """Base class for all domain errors"""

    reason = "booking_error"
    status_code = 400

    def __init__(self, message: str = None):
        self.message = message or self.__class__.__doc__ or self.reason
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"detail": self.message, "reason": self.reason}


class ValidationError(BookingError):
    """Missing or malformed input"""

    reason = "validation_error"
    status_code = 422


class NotFound(BookingError):
    """Requested record does not exist or is not active"""

    reason = "not_found"
    status_code = 404


class SlotTaken(BookingError):
    """The requested time overlaps an existing booking"""

    reason = "slot_taken"
    status_code = 409


class InvalidStatusTransition(BookingError):
    """Booking cannot move to the requested status"""

    reason = "invalid_status_transition"
    status_code = 409


class StoreUnavailable(BookingError):
    """The database could not be reached or timed out"""

    reason = "store_unavailable"
    status_code = 503


async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    """Render domain errors as ``{"detail": ..., "reason": ...}``"""
    if isinstance(exc, StoreUnavailable):
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
