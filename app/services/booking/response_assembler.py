# app/services/booking/response_assembler.py
"""Shapes engine results into the response contracts"""
from datetime import date
from typing import Iterable, List

from app.models.booking import Booking
from app.models.service import Service
from app.schemas.booking import (
    AvailableTimeSlot,
    AvailableTimesResponse,
    BookingListResponse,
    BookingResponse,
    ServiceResponse,
)
from app.services.availability.slot_generator import Slot


class ResponseAssembler:

    @staticmethod
    def service(service: Service) -> ServiceResponse:
        return ServiceResponse(
            id=service.id,
            name=service.name,
            description=service.description,
            duration_minutes=service.duration,
            formatted_duration=service.formatted_duration,
            price=service.price,
            active=service.is_active,
        )

    @staticmethod
    def booking(booking: Booking) -> BookingResponse:
        return BookingResponse(
            id=booking.id,
            business_id=booking.business_id,
            service=ResponseAssembler.service(booking.service),
            start_time=booking.start_time,
            end_time=booking.end_time,
            customer_name=booking.customer_name,
            customer_phone=booking.customer_phone,
            status=booking.status,
            created_at=booking.created_at,
            cancelled_at=booking.cancelled_at,
            completed_at=booking.completed_at,
        )

    @staticmethod
    def bookings(bookings: Iterable[Booking]) -> BookingListResponse:
        items: List[BookingResponse] = [ResponseAssembler.booking(b) for b in bookings]
        return BookingListResponse(total=len(items), bookings=items)

    @staticmethod
    def available_times(target_date: date, slots: Iterable[Slot]) -> AvailableTimesResponse:
        return AvailableTimesResponse(
            date=target_date,
            slots=[
                AvailableTimeSlot(start_time=s.start_time, end_time=s.end_time, available=s.available)
                for s in slots
            ],
        )
