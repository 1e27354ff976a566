# app/models/booking.py
"""
Booking (reservation) model.

Bookings are never deleted: cancellation is a status change so history is
kept. start_time/end_time are business-local wall clock times and end_time is
always start_time + service duration.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Index, CheckConstraint, DDL, event, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
import enum
from app.models.base import Base


class BookingStatus(str, enum.Enum):
    """Booking lifecycle: confirmed -> cancelled | completed (both terminal)"""
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_business_start", "business_id", "start_time"),
        CheckConstraint("end_time > start_time", name="ck_bookings_end_after_start"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # References
    business_id = Column(UUID(as_uuid=True), ForeignKey("businesses.id"), nullable=False)
    service_id = Column(UUID(as_uuid=True), ForeignKey("services.id"), nullable=False)

    # Appointment window
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)

    # Customer info
    customer_name = Column(String(100), nullable=False)
    customer_phone = Column(String(20), nullable=False, index=True)

    # Status tracking
    status = Column(
        SQLEnum(
            BookingStatus,
            name="bookingstatus",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        default=BookingStatus.CONFIRMED,
        nullable=False,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    business = relationship("Business")
    service = relationship("Service", back_populates="bookings")

    def __repr__(self):
        return f"<Booking(id={self.id}, business_id={self.business_id}, start={self.start_time}, status={self.status})>"


# PostgreSQL backstop for the no-overlap invariant; mirrors the initial migration
event.listen(
    Booking.__table__,
    "after_create",
    DDL("CREATE EXTENSION IF NOT EXISTS btree_gist").execute_if(dialect="postgresql"),
)
event.listen(
    Booking.__table__,
    "after_create",
    DDL(
        "ALTER TABLE bookings ADD CONSTRAINT ex_bookings_no_overlap "
        "EXCLUDE USING gist (business_id WITH =, tsrange(start_time, end_time, '[)') WITH &&) "
        "WHERE (status <> 'cancelled')"
    ).execute_if(dialect="postgresql"),
)
