# app/services/booking/booking_service.py
"""
Booking admission and reservation lifecycle.

Admission checks, in order: the business exists and is active, the service
exists, belongs to the business and is active, the start is in the future,
and no active booking overlaps. The overlap check and the insert are one
critical section per business (see BookingStore.insert_if_no_conflict).

Lifecycle: confirmed -> cancelled | completed. Both targets are terminal and
any transition out of them is rejected with BookingConflict.
"""
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from app.config.settings import get_settings
from app.core.exceptions import BookingConflict, ResourceNotFound
from app.models.booking import Booking, BookingStatus
from app.models.business import Business
from app.services.booking.booking_store import BookingStore
from app.services.business.business_service import BusinessService
from app.services.calendar.operating_calendar import OperatingCalendar

logger = logging.getLogger(__name__)


class BookingService:
    """Handles booking admission and status changes"""

    @staticmethod
    def create_booking(
            db: Session,
            business_slug: str,
            service_id: UUID,
            start_time: datetime,
            customer_name: str,
            customer_phone: str,
            now: Optional[datetime] = None
    ) -> Booking:
        """Admit a new booking or raise the first failing precondition"""
        business = BusinessService.require_business(db, business_slug)
        service = BusinessService.require_active_service(db, business.id, service_id)

        start_time = BusinessService.to_business_time(business, start_time)
        if now is None:
            now = BusinessService.local_now(business)

        if start_time <= now:
            raise BookingConflict("Cannot book in the past")

        end_time = start_time + timedelta(minutes=service.duration)

        if get_settings().ENFORCE_OPERATING_HOURS:
            BookingService._check_operating_hours(db, business, start_time, end_time)

        booking = Booking(
            business_id=business.id,
            service_id=service.id,
            start_time=start_time,
            end_time=end_time,
            customer_name=customer_name,
            customer_phone=customer_phone,
            status=BookingStatus.CONFIRMED,
        )
        booking = BookingStore.insert_if_no_conflict(db, booking)

        logger.info(f"Booking created: {booking.id} for business: {business_slug} at {start_time}")
        return booking

    @staticmethod
    def _check_operating_hours(db: Session, business: Business, start_time: datetime, end_time: datetime):
        """Reject bookings the slot generator would never offer"""
        windows = OperatingCalendar.windows_for(db, business.id, start_time.date())
        if windows is None:
            raise BookingConflict("Business is closed on the requested date")

        opens = datetime.combine(start_time.date(), windows.open_time)
        closes = datetime.combine(start_time.date(), windows.close_time)
        if start_time < opens or end_time > closes:
            raise BookingConflict("Requested time is outside business hours")
        if windows.in_break(start_time.time()):
            raise BookingConflict("Requested time falls within a break")

    # ============================================
    # LIFECYCLE
    # ============================================

    @staticmethod
    def get_booking(db: Session, business_id: UUID, booking_id: UUID, for_update: bool = False) -> Booking:
        query = db.query(Booking).filter(
            Booking.id == booking_id,
            Booking.business_id == business_id
        )
        if for_update:
            query = query.with_for_update()
        booking = query.first()
        if not booking:
            raise ResourceNotFound("Booking not found")
        return booking

    @staticmethod
    def cancel_booking(db: Session, business_id: UUID, booking_id: UUID) -> Booking:
        return BookingService._transition(db, business_id, booking_id, BookingStatus.CANCELLED)

    @staticmethod
    def complete_booking(db: Session, business_id: UUID, booking_id: UUID) -> Booking:
        return BookingService._transition(db, business_id, booking_id, BookingStatus.COMPLETED)

    @staticmethod
    def _transition(db: Session, business_id: UUID, booking_id: UUID, target: BookingStatus) -> Booking:
        booking = BookingService.get_booking(db, business_id, booking_id, for_update=True)

        if booking.status != BookingStatus.CONFIRMED:
            raise BookingConflict(
                f"Booking is already {booking.status.value} and cannot be {target.value}"
            )

        booking.status = target
        stamp = datetime.now(timezone.utc)
        if target == BookingStatus.CANCELLED:
            booking.cancelled_at = stamp
        else:
            booking.completed_at = stamp

        db.commit()
        db.refresh(booking)

        logger.info(f"Booking {target.value}: {booking_id}")
        return booking

    # ============================================
    # QUERIES
    # ============================================

    @staticmethod
    def list_bookings(db: Session, business_id: UUID, status: Optional[BookingStatus] = None) -> List[Booking]:
        query = db.query(Booking).filter(Booking.business_id == business_id)
        if status:
            query = query.filter(Booking.status == status)
        return query.order_by(Booking.start_time).all()

    @staticmethod
    def get_bookings_by_date(db: Session, business_id: UUID, target_date: date) -> List[Booking]:
        """All bookings (any status) starting on ``target_date``"""
        start_of_day = datetime.combine(target_date, time.min)
        return db.query(Booking).filter(
            Booking.business_id == business_id,
            Booking.start_time >= start_of_day,
            Booking.start_time < start_of_day + timedelta(days=1)
        ).order_by(Booking.start_time).all()

    @staticmethod
    def get_customer_bookings(db: Session, business_id: UUID, phone: str) -> List[Booking]:
        return db.query(Booking).filter(
            Booking.business_id == business_id,
            Booking.customer_phone == phone
        ).order_by(Booking.start_time).all()
