# ============================================================================
# app/api/v1/dashboard/hours.py
# Owner management of business hours and closed dates - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Query, Path, Response, status
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional

from app.api.dependencies import get_current_business
from app.config.database import get_db
from app.models.business import Business
from app.schemas.booking import (
    ERROR_RESPONSES,
    BusinessHoursRequest,
    BusinessHoursResponse,
    ClosedDateRequest,
    ClosedDateResponse,
)
from app.services.calendar.business_hours_service import BusinessHoursService

router = APIRouter(prefix="/businesses/{business_id}", tags=["dashboard-hours"], responses=ERROR_RESPONSES)


# ============================================================================
# BUSINESS HOURS
# ============================================================================

@router.get("/hours", response_model=List[BusinessHoursResponse])
def get_business_hours(
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """Get business hours for all configured days"""
    return BusinessHoursService.get_business_hours(db, business.id)


@router.put("/hours/{day_of_week}", response_model=BusinessHoursResponse)
def update_business_hours(
        request: BusinessHoursRequest,
        day_of_week: int = Path(..., ge=0, le=6, description="0=Monday, 6=Sunday"),
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """Create or replace the hours of one weekday"""
    return BusinessHoursService.update_business_hours(
        db,
        business.id,
        day_of_week,
        is_open=request.is_open,
        open_time=request.open_time,
        close_time=request.close_time,
        break_start_time=request.break_start_time,
        break_end_time=request.break_end_time,
    )


@router.post("/hours/defaults", response_model=List[BusinessHoursResponse])
def initialize_default_hours(
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """Set Monday-Friday 09:00-18:00 if no hours are configured yet"""
    return BusinessHoursService.initialize_default_hours(db, business.id)


# ============================================================================
# CLOSED DATES
# ============================================================================

@router.get("/closed-dates", response_model=List[ClosedDateResponse])
def get_closed_dates(
        from_date: Optional[date] = Query(None, description="Only closed dates on or after this date"),
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """Get closed dates (holidays, vacation, etc.)"""
    return BusinessHoursService.get_closed_dates(db, business.id, from_date=from_date)


@router.post("/closed-dates", response_model=ClosedDateResponse, status_code=status.HTTP_201_CREATED)
def add_closed_date(
        request: ClosedDateRequest,
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """Close the business on a specific date"""
    return BusinessHoursService.add_closed_date(db, business.id, request.closed_date, request.reason)


@router.delete("/closed-dates/{closed_date_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_closed_date(
        closed_date_id: int = Path(..., description="The closed date ID"),
        business: Business = Depends(get_current_business),
        db: Session = Depends(get_db)
):
    """Remove a closed date"""
    BusinessHoursService.delete_closed_date(db, business.id, closed_date_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
