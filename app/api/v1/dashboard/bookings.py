# ============================================================================
# app/api/v1/dashboard/bookings.py
# Owner booking management - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Query, Path
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional
from uuid import UUID

from app.api.dependencies import get_current_business
from app.config.database import get_db
from app.models.booking import BookingStatus
from app.models.business import Business
from app.schemas.booking import ERROR_RESPONSES, BookingListResponse, BookingResponse
from app.services.booking.booking_service import BookingService
from app.services.booking.response_assembler import ResponseAssembler
from app.services.business.business_service import BusinessService

router = APIRouter(prefix="/businesses/{business_id}/bookings", tags=["dashboard-bookings"], responses=ERROR_RESPONSES)


@router.get("", response_model=BookingListResponse)
def list_bookings(
        status: Optional[BookingStatus] = Query(None, description="Filter by status (confirmed, cancelled, completed)"),
        customer_phone: Optional[str] = Query(None, description="Filter by customer phone number"),
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """Get all bookings of the business, optionally filtered"""
    if customer_phone:
        bookings = BookingService.get_customer_bookings(db, business.id, customer_phone)
        if status:
            bookings = [b for b in bookings if b.status == status]
    else:
        bookings = BookingService.list_bookings(db, business.id, status=status)
    return ResponseAssembler.bookings(bookings)


@router.get("/date", response_model=BookingListResponse)
def get_bookings_by_date(
        date: date = Query(..., description="Day to list bookings for (YYYY-MM-DD)"),
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """Get the bookings starting on a specific day"""
    return ResponseAssembler.bookings(BookingService.get_bookings_by_date(db, business.id, date))


@router.get("/today", response_model=BookingListResponse)
def get_todays_bookings(
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """Get today's bookings (business local date)"""
    today = BusinessService.local_now(business).date()
    return ResponseAssembler.bookings(BookingService.get_bookings_by_date(db, business.id, today))


@router.patch("/{booking_id}/complete", response_model=BookingResponse)
def complete_booking(
        booking_id: UUID = Path(..., description="The booking ID"),
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """Mark a confirmed booking as completed"""
    return ResponseAssembler.booking(BookingService.complete_booking(db, business.id, booking_id))


@router.patch("/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(
        booking_id: UUID = Path(..., description="The booking ID"),
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """Cancel a confirmed booking; the slot becomes available again"""
    return ResponseAssembler.booking(BookingService.cancel_booking(db, business.id, booking_id))
