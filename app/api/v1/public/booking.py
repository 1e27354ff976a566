# ============================================================================
# app/api/v1/public/booking.py
# Public booking endpoints - thin HTTP layer over the booking engine
# ============================================================================
from fastapi import APIRouter, Depends, Query, Path, status
from sqlalchemy.orm import Session
from datetime import date
from typing import List
from uuid import UUID
import logging

from app.config.database import get_db
from app.schemas.booking import (
    ERROR_RESPONSES,
    AvailableTimesResponse,
    BookingListResponse,
    BookingRequest,
    BookingResponse,
    ServiceResponse,
)
from app.services.availability.availability_service import AvailabilityService
from app.services.booking.booking_service import BookingService
from app.services.booking.response_assembler import ResponseAssembler
from app.services.business.business_service import BusinessService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/{business_slug}", tags=["public-booking"], responses=ERROR_RESPONSES)


@router.get("/services", response_model=List[ServiceResponse])
def list_services(
        business_slug: str = Path(..., description="Public business slug"),
        db: Session = Depends(get_db)
):
    """List the bookable services of a business"""
    services = BusinessService.get_active_services(db, business_slug)
    return [ResponseAssembler.service(s) for s in services]


@router.get("/available-times", response_model=AvailableTimesResponse)
def get_available_times(
        business_slug: str = Path(..., description="Public business slug"),
        date: date = Query(..., description="Day to list slots for (YYYY-MM-DD)"),
        service_id: UUID = Query(..., description="Service to book"),
        db: Session = Depends(get_db)
):
    """
    Get the time slots of a day for a service, each flagged available or not.
    Closed days return an empty slot list.
    """
    logger.info(f"Getting available time slots for business: {business_slug}, date: {date}, service: {service_id}")
    return AvailabilityService.get_available_slots(db, business_slug, date, service_id)


@router.post("/bookings", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
        request: BookingRequest,
        business_slug: str = Path(..., description="Public business slug"),
        db: Session = Depends(get_db)
):
    """Book a service. The end time is derived from the service duration."""
    booking = BookingService.create_booking(
        db=db,
        business_slug=business_slug,
        service_id=request.service_id,
        start_time=request.start_time,
        customer_name=request.customer_name,
        customer_phone=request.customer_phone,
    )
    return ResponseAssembler.booking(booking)


@router.get("/bookings", response_model=BookingListResponse)
def get_bookings_by_date(
        business_slug: str = Path(..., description="Public business slug"),
        date: date = Query(..., description="Day to list bookings for (YYYY-MM-DD)"),
        db: Session = Depends(get_db)
):
    """List the bookings starting on a day"""
    business = BusinessService.require_business(db, business_slug, active=False)
    return ResponseAssembler.bookings(BookingService.get_bookings_by_date(db, business.id, date))
