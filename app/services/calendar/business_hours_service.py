# app/services/calendar/business_hours_service.py
"""Owner-side writes for business hours and closed dates"""
from datetime import date, time
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from app.core.exceptions import InvalidConfiguration, ResourceNotFound
from app.models.business import BusinessHours, ClosedDate, DAY_NAMES
from app.services.business.business_service import BusinessService

logger = logging.getLogger(__name__)

DEFAULT_OPEN_TIME = time(9, 0)
DEFAULT_CLOSE_TIME = time(18, 0)


class BusinessHoursService:
    """Manage weekly hours and closed dates for a business"""

    @staticmethod
    def get_business_hours(db: Session, business_id: UUID) -> List[BusinessHours]:
        return db.query(BusinessHours).filter(
            BusinessHours.business_id == business_id
        ).order_by(BusinessHours.day_of_week).all()

    @staticmethod
    def update_business_hours(
            db: Session,
            business_id: UUID,
            day_of_week: int,
            is_open: bool,
            open_time: Optional[time] = None,
            close_time: Optional[time] = None,
            break_start_time: Optional[time] = None,
            break_end_time: Optional[time] = None
    ) -> BusinessHours:
        """
        Create or replace the hours of one weekday.

        The record is validated before it is written; an invalid record raises
        InvalidConfiguration and leaves the stored hours untouched.
        """
        BusinessService.require_business_by_id(db, business_id)
        if not 0 <= day_of_week <= 6:
            raise InvalidConfiguration(f"day_of_week must be between 0 and 6, got {day_of_week}")

        logger.info(f"Updating business hours for business {business_id} on {DAY_NAMES[day_of_week]}: is_open={is_open}")

        hours = db.query(BusinessHours).filter(
            BusinessHours.business_id == business_id,
            BusinessHours.day_of_week == day_of_week
        ).first()

        candidate = BusinessHours(
            business_id=business_id,
            day_of_week=day_of_week,
            is_open=is_open,
            open_time=open_time,
            close_time=close_time,
            break_start_time=break_start_time,
            break_end_time=break_end_time,
        )
        candidate.validate()

        if hours is None:
            hours = candidate
            db.add(hours)
        else:
            hours.is_open = candidate.is_open
            hours.open_time = candidate.open_time
            hours.close_time = candidate.close_time
            hours.break_start_time = candidate.break_start_time
            hours.break_end_time = candidate.break_end_time

        try:
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating business hours for business {business_id} on day {day_of_week}: {e}")
            raise
        db.refresh(hours)
        return hours

    @staticmethod
    def initialize_default_hours(db: Session, business_id: UUID) -> List[BusinessHours]:
        """Monday-Friday 09:00-18:00, weekends closed. No-op if hours already exist."""
        BusinessService.require_business_by_id(db, business_id)

        existing = BusinessHoursService.get_business_hours(db, business_id)
        if existing:
            return existing

        for day in range(7):
            is_weekday = day < 5
            db.add(BusinessHours(
                business_id=business_id,
                day_of_week=day,
                is_open=is_weekday,
                open_time=DEFAULT_OPEN_TIME if is_weekday else None,
                close_time=DEFAULT_CLOSE_TIME if is_weekday else None,
            ))
        db.commit()

        logger.info(f"Initialized default business hours for business {business_id}")
        return BusinessHoursService.get_business_hours(db, business_id)

    # ============================================
    # CLOSED DATES
    # ============================================

    @staticmethod
    def get_closed_dates(db: Session, business_id: UUID, from_date: Optional[date] = None) -> List[ClosedDate]:
        """Closed dates on or after ``from_date`` (all of them when omitted)"""
        query = db.query(ClosedDate).filter(ClosedDate.business_id == business_id)
        if from_date:
            query = query.filter(ClosedDate.closed_date >= from_date)
        return query.order_by(ClosedDate.closed_date).all()

    @staticmethod
    def add_closed_date(db: Session, business_id: UUID, closed_date: date, reason: Optional[str] = None) -> ClosedDate:
        """Mark a date closed; marking an already closed date only updates the reason"""
        BusinessService.require_business_by_id(db, business_id)

        record = db.query(ClosedDate).filter(
            ClosedDate.business_id == business_id,
            ClosedDate.closed_date == closed_date
        ).first()

        if record is None:
            record = ClosedDate(business_id=business_id, closed_date=closed_date, reason=reason)
            db.add(record)
        else:
            record.reason = reason

        db.commit()
        db.refresh(record)
        logger.info(f"Added closed date {closed_date} for business {business_id}")
        return record

    @staticmethod
    def delete_closed_date(db: Session, business_id: UUID, closed_date_id: int) -> None:
        record = db.query(ClosedDate).filter(
            ClosedDate.id == closed_date_id,
            ClosedDate.business_id == business_id
        ).first()
        if not record:
            raise ResourceNotFound("Closed date not found")

        db.delete(record)
        db.commit()
        logger.info(f"Deleted closed date {closed_date_id} for business {business_id}")
