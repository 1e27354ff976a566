# app/services/calendar/operating_calendar.py
"""
Operating calendar: answers whether a business is open on a date and what
its opening and break windows are for that date.

Resolution order for a date:
1. a ClosedDate row for the date closes the business for the whole day;
2. the BusinessHours row for the weekday decides (closed if it is not open);
3. a weekday without a row is closed, unless the business has no hours
   configured at all, in which case the fallback hours apply (when enabled).
"""
from dataclasses import dataclass
from datetime import date, time
from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from app.config.settings import get_settings
from app.models.business import BusinessHours, ClosedDate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayWindows:
    """Opening window of one day, with an optional break"""
    open_time: time
    close_time: time
    break_start: Optional[time] = None
    break_end: Optional[time] = None
    is_fallback: bool = False

    @property
    def has_break(self) -> bool:
        return self.break_start is not None and self.break_end is not None

    def in_break(self, moment: time) -> bool:
        return self.has_break and self.break_start <= moment < self.break_end

    @classmethod
    def from_hours(cls, hours: BusinessHours) -> "DayWindows":
        return cls(
            open_time=hours.open_time,
            close_time=hours.close_time,
            break_start=hours.break_start_time,
            break_end=hours.break_end_time,
        )


class OperatingCalendar:
    """Read-only view over business hours and closed dates"""

    @staticmethod
    def is_closed_date(db: Session, business_id: UUID, target_date: date) -> bool:
        return db.query(ClosedDate.id).filter(
            ClosedDate.business_id == business_id,
            ClosedDate.closed_date == target_date
        ).first() is not None

    @staticmethod
    def get_hours_for_day(db: Session, business_id: UUID, day_of_week: int) -> Optional[BusinessHours]:
        return db.query(BusinessHours).filter(
            BusinessHours.business_id == business_id,
            BusinessHours.day_of_week == day_of_week
        ).first()

    @staticmethod
    def has_configured_hours(db: Session, business_id: UUID) -> bool:
        return db.query(BusinessHours.id).filter(
            BusinessHours.business_id == business_id
        ).first() is not None

    @staticmethod
    def fallback_windows() -> DayWindows:
        settings = get_settings()
        return DayWindows(
            open_time=settings.FALLBACK_OPEN_TIME,
            close_time=settings.FALLBACK_CLOSE_TIME,
            is_fallback=True,
        )

    @staticmethod
    def windows_for(db: Session, business_id: UUID, target_date: date) -> Optional[DayWindows]:
        """
        Opening windows for a date, or None when the business is closed.

        Returned windows carry ``is_fallback=True`` when they come from the
        default hours rather than from the owner's configuration.
        """
        if OperatingCalendar.is_closed_date(db, business_id, target_date):
            logger.debug(f"Business {business_id} closed on {target_date} (closed date)")
            return None

        hours = OperatingCalendar.get_hours_for_day(db, business_id, target_date.weekday())
        if hours is not None:
            return DayWindows.from_hours(hours) if hours.is_open else None

        if get_settings().HOURS_FALLBACK_ENABLED and not OperatingCalendar.has_configured_hours(db, business_id):
            windows = OperatingCalendar.fallback_windows()
            logger.warning(
                f"Business {business_id} has no business hours configured, "
                f"using fallback hours {windows.open_time:%H:%M}-{windows.close_time:%H:%M} for {target_date}"
            )
            return windows

        return None

    @staticmethod
    def is_open(db: Session, business_id: UUID, target_date: date) -> bool:
        """Whether the business takes appointments on the given date"""
        return OperatingCalendar.windows_for(db, business_id, target_date) is not None
