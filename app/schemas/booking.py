"""
Pydantic schemas for the booking engine's request and response contracts
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import date, datetime, time
from decimal import Decimal
from uuid import UUID

from app.models.booking import BookingStatus


# ============================================================================
# Request Schemas (for incoming data)
# ============================================================================

class BookingRequest(BaseModel):
    """Schema for a public booking request"""
    service_id: UUID
    start_time: datetime
    customer_name: str = Field(..., min_length=1, max_length=100)
    customer_phone: str = Field(..., min_length=6, max_length=20)

    @field_validator('customer_name')
    @classmethod
    def validate_customer_name(cls, v):
        if not v.strip():
            raise ValueError('Customer name cannot be empty')
        return v.strip()

    @field_validator('customer_phone')
    @classmethod
    def validate_customer_phone(cls, v):
        digits = v.replace(' ', '').replace('-', '')
        if digits.startswith('+'):
            digits = digits[1:]
        if not digits.isdigit():
            raise ValueError('Phone number may only contain digits, spaces, dashes and a leading +')
        return v.strip()


class BusinessHoursRequest(BaseModel):
    """
    Schema for updating the hours of one weekday.
    Invariants (open < close, break inside opening hours) are checked by the
    engine when the record is written.
    """
    is_open: bool
    open_time: Optional[time] = None
    close_time: Optional[time] = None
    break_start_time: Optional[time] = None
    break_end_time: Optional[time] = None


class ClosedDateRequest(BaseModel):
    """Schema for adding a closed date"""
    closed_date: date
    reason: Optional[str] = Field(None, max_length=255)


# ============================================================================
# Response Schemas (for outgoing data)
# ============================================================================

class ServiceResponse(BaseModel):
    """Schema for service data in responses"""
    id: UUID
    name: str
    description: Optional[str] = None
    duration_minutes: int
    formatted_duration: str
    price: Decimal
    active: bool


class BookingResponse(BaseModel):
    """Schema for a reservation"""
    id: UUID
    business_id: UUID
    service: ServiceResponse
    start_time: datetime
    end_time: datetime
    customer_name: str
    customer_phone: str
    status: BookingStatus
    created_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class BookingListResponse(BaseModel):
    """Schema for a list of reservations"""
    total: int
    bookings: List[BookingResponse]


class AvailableTimeSlot(BaseModel):
    start_time: datetime
    end_time: datetime
    available: bool


class AvailableTimesResponse(BaseModel):
    """Schema for the slots of one day"""
    date: date
    slots: List[AvailableTimeSlot]


class BusinessHoursResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    day_of_week: int
    day_name: str
    is_open: bool
    open_time: Optional[time] = None
    close_time: Optional[time] = None
    break_start_time: Optional[time] = None
    break_end_time: Optional[time] = None


class ClosedDateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    closed_date: date
    reason: Optional[str] = None


class ErrorResponse(BaseModel):
    """Schema for engine error responses"""
    error: str
    message: str
    status: int
    timestamp: datetime


# OpenAPI documentation of the engine errors a route can return
ERROR_RESPONSES = {
    403: {"model": ErrorResponse, "description": "Business is not accepting bookings"},
    404: {"model": ErrorResponse, "description": "Business, service or booking not found"},
    409: {"model": ErrorResponse, "description": "Booking conflict"},
}
