# app/models/business.py
"""
Business (tenant) model plus the calendar records the booking engine reads:
weekly business hours and ad-hoc closed dates.
"""
from sqlalchemy import (
    Column, String, Boolean, DateTime, Date, Time, Integer, ForeignKey, UniqueConstraint, event
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from app.models.base import Base
from app.core.exceptions import InvalidConfiguration

DAY_NAMES = ["MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY", "SUNDAY"]


class Business(Base):
    __tablename__ = "businesses"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    slug = Column(String(100), nullable=False, unique=True, index=True)  # immutable, used in URLs

    # System configuration
    timezone = Column(String(50), default="UTC")

    # Technical fields
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
    is_active = Column(Boolean, default=True, nullable=False)

    services = relationship("Service", back_populates="business")
    hours = relationship("BusinessHours", back_populates="business", order_by="BusinessHours.day_of_week")
    closed_dates = relationship("ClosedDate", back_populates="business")

    def __repr__(self):
        return f"<Business(id={self.id}, slug={self.slug})>"


class BusinessHours(Base):
    """Operating hours for one weekday of one business"""
    __tablename__ = "business_hours"
    __table_args__ = (
        UniqueConstraint("business_id", "day_of_week", name="uq_business_hours_business_day"),
    )

    id = Column(Integer, primary_key=True)
    business_id = Column(UUID(as_uuid=True), ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False)
    day_of_week = Column(Integer, nullable=False)  # 0=Monday, 6=Sunday
    is_open = Column(Boolean, default=False, nullable=False)
    open_time = Column(Time, nullable=True)
    close_time = Column(Time, nullable=True)
    break_start_time = Column(Time, nullable=True)
    break_end_time = Column(Time, nullable=True)

    business = relationship("Business", back_populates="hours")

    def __repr__(self):
        return f"<BusinessHours(business_id={self.business_id}, day={self.day_of_week}, open={self.is_open})>"

    @property
    def day_name(self) -> str:
        return DAY_NAMES[self.day_of_week]

    def validate(self):
        """
        Enforce the record invariants. Closed days drop all times; open days
        need open < close and, if a break is given, a complete break that
        lies inside the opening window.
        """
        if self.day_of_week is None or not 0 <= self.day_of_week <= 6:
            raise InvalidConfiguration(f"day_of_week must be between 0 and 6, got {self.day_of_week}")

        if not self.is_open:
            self.open_time = None
            self.close_time = None
            self.break_start_time = None
            self.break_end_time = None
            return

        if self.open_time is None or self.close_time is None:
            raise InvalidConfiguration("Open time and close time must be set when business is open")
        if self.open_time >= self.close_time:
            raise InvalidConfiguration("Open time must be before close time")

        has_start = self.break_start_time is not None
        has_end = self.break_end_time is not None
        if has_start != has_end:
            raise InvalidConfiguration("Break start and break end must be set together")
        if has_start:
            if self.break_start_time >= self.break_end_time:
                raise InvalidConfiguration("Break start must be before break end")
            if self.break_start_time < self.open_time or self.break_end_time > self.close_time:
                raise InvalidConfiguration("Break must lie within opening hours")


@event.listens_for(BusinessHours, "before_insert")
@event.listens_for(BusinessHours, "before_update")
def _validate_business_hours(mapper, connection, target):
    target.validate()


class ClosedDate(Base):
    """A specific date the business is closed (holiday, vacation, ...)"""
    __tablename__ = "closed_dates"
    __table_args__ = (
        UniqueConstraint("business_id", "closed_date", name="uq_closed_dates_business_date"),
    )

    id = Column(Integer, primary_key=True)
    business_id = Column(UUID(as_uuid=True), ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False)
    closed_date = Column(Date, nullable=False)
    reason = Column(String(255), nullable=True)  # "Holiday", "Vacation", etc.

    business = relationship("Business", back_populates="closed_dates")

    def __repr__(self):
        return f"<ClosedDate(business_id={self.business_id}, date={self.closed_date})>"
