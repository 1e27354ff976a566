# app/services/booking/booking_store.py
"""
Reservation store accessor.

All queries are scoped by business id. "Active" bookings are the ones whose
status is not cancelled; only those take up capacity.
"""
from datetime import date, datetime, time, timedelta
from typing import List
from uuid import UUID
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from app.core.exceptions import BookingConflict
from app.models.booking import Booking, BookingStatus
from app.services.booking.booking_lock import booking_lock

logger = logging.getLogger(__name__)

CONFLICT_MESSAGE = "Time slot is not available. Booking conflicts with existing appointment."


class BookingStore:
    """Range queries and conflict-checked inserts for bookings"""

    @staticmethod
    def find_overlapping(db: Session, business_id: UUID, start: datetime, end: datetime) -> List[Booking]:
        """Active bookings whose [start_time, end_time) intersects [start, end)"""
        return db.query(Booking).filter(
            Booking.business_id == business_id,
            Booking.status != BookingStatus.CANCELLED,
            Booking.start_time < end,
            Booking.end_time > start
        ).order_by(Booking.start_time).all()

    @staticmethod
    def find_for_day(db: Session, business_id: UUID, day: date) -> List[Booking]:
        """Active bookings overlapping [day 00:00, day+1 00:00)"""
        start_of_day = datetime.combine(day, time.min)
        return BookingStore.find_overlapping(db, business_id, start_of_day, start_of_day + timedelta(days=1))

    @staticmethod
    def insert_if_no_conflict(db: Session, booking: Booking) -> Booking:
        """
        Insert ``booking`` unless an active booking of the same business
        overlaps it. The check and the insert run under the business's
        admission lock, which is held until the commit.

        Raises BookingConflict on overlap, on lock timeout, or when the
        database rejects the row through its exclusion constraint.
        """
        with booking_lock(db, booking.business_id):
            overlapping = BookingStore.find_overlapping(
                db, booking.business_id, booking.start_time, booking.end_time
            )
            if overlapping:
                db.rollback()
                logger.info(
                    f"Booking conflict for business {booking.business_id} at {booking.start_time}: "
                    f"{len(overlapping)} overlapping booking(s)"
                )
                raise BookingConflict(CONFLICT_MESSAGE)

            db.add(booking)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                logger.warning(f"Storage rejected booking for business {booking.business_id}: {e.orig}")
                raise BookingConflict(CONFLICT_MESSAGE)

        db.refresh(booking)
        return booking
