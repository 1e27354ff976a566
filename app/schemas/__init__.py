# app/schemas/__init__.py
from .booking import (
    BookingRequest,
    BusinessHoursRequest,
    ClosedDateRequest,
    ServiceResponse,
    BookingResponse,
    BookingListResponse,
    AvailableTimeSlot,
    AvailableTimesResponse,
    BusinessHoursResponse,
    ClosedDateResponse,
    ErrorResponse,
    ERROR_RESPONSES,
)

__all__ = [
    "BookingRequest",
    "BusinessHoursRequest",
    "ClosedDateRequest",
    "ServiceResponse",
    "BookingResponse",
    "BookingListResponse",
    "AvailableTimeSlot",
    "AvailableTimesResponse",
    "BusinessHoursResponse",
    "ClosedDateResponse",
    "ErrorResponse",
    "ERROR_RESPONSES",
]
