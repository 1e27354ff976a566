# ===== app/services/availability/availability_service.py =====
from datetime import date, datetime
from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from app.config.settings import get_settings
from app.schemas.booking import AvailableTimesResponse
from app.services.availability.slot_generator import generate_slots
from app.services.booking.booking_store import BookingStore
from app.services.booking.response_assembler import ResponseAssembler
from app.services.business.business_service import BusinessService
from app.services.calendar.operating_calendar import OperatingCalendar

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Computes the bookable slots of a service on a day"""

    @staticmethod
    def get_available_slots(
            db: Session,
            business_slug: str,
            target_date: date,
            service_id: UUID,
            now: Optional[datetime] = None
    ) -> AvailableTimesResponse:
        """
        Slots for ``service_id`` on ``target_date``, flagged available or not.

        No lock is taken: a slot shown available can still be taken by a
        concurrent booking, which admission then rejects.

        A closed day yields no slots before the service is even looked up.
        """
        business = BusinessService.require_business(db, business_slug)

        windows = OperatingCalendar.windows_for(db, business.id, target_date)
        if windows is None:
            logger.info(f"Business {business_slug} closed on {target_date}, no slots")
            return ResponseAssembler.available_times(target_date, [])

        service = BusinessService.require_active_service(db, business.id, service_id)

        bookings = BookingStore.find_for_day(db, business.id, target_date)
        if now is None:
            now = BusinessService.local_now(business)

        slots = list(generate_slots(
            target_date,
            windows,
            bookings,
            service.duration,
            now,
            interval_minutes=get_settings().SLOT_INTERVAL_MINUTES,
        ))

        logger.info(
            f"Generated {len(slots)} slots ({sum(s.available for s in slots)} available) "
            f"for business {business_slug}, service {service_id} on {target_date}"
            + (" using fallback hours" if windows.is_fallback else "")
        )
        return ResponseAssembler.available_times(target_date, slots)
