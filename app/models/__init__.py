from .base import Base
from .business import Business, BusinessHours, ClosedDate
from .service import Service
from .booking import Booking, BookingStatus

__all__ = [
    "Base",
    "Business",
    "BusinessHours",
    "ClosedDate",
    "Service",
    "Booking",
    "BookingStatus",
]
