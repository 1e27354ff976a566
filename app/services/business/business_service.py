# app/services/business/business_service.py
"""Tenant and service lookups used by the booking engine"""
from datetime import datetime, timezone, tzinfo
from typing import List, Optional
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from sqlalchemy.orm import Session
import logging

from app.config.settings import get_settings
from app.core.exceptions import ResourceNotFound, TenantInactive
from app.models.business import Business
from app.models.service import Service

logger = logging.getLogger(__name__)


class BusinessService:
    """Handles business (tenant) and service lookups"""

    @staticmethod
    def get_business_by_slug(db: Session, slug: str) -> Optional[Business]:
        """Get business by its public slug"""
        return db.query(Business).filter(Business.slug == slug).first()

    @staticmethod
    def get_business_by_id(db: Session, business_id: UUID) -> Optional[Business]:
        """Get business by id"""
        return db.query(Business).filter(Business.id == business_id).first()

    @staticmethod
    def require_business(db: Session, slug: str, active: bool = True) -> Business:
        """
        Resolve a business by slug or raise.

        Raises ResourceNotFound when the slug is unknown and, when ``active``
        is set, TenantInactive when the business is not accepting bookings.
        """
        business = BusinessService.get_business_by_slug(db, slug)
        if not business:
            raise ResourceNotFound(f"Business not found: {slug}")
        if active and not business.is_active:
            raise TenantInactive("Business is not accepting bookings")
        return business

    @staticmethod
    def require_business_by_id(db: Session, business_id: UUID) -> Business:
        business = BusinessService.get_business_by_id(db, business_id)
        if not business:
            raise ResourceNotFound(f"Business not found: {business_id}")
        return business

    @staticmethod
    def get_service(db: Session, business_id: UUID, service_id: UUID) -> Optional[Service]:
        """Get a service scoped to its business"""
        return db.query(Service).filter(
            Service.id == service_id,
            Service.business_id == business_id
        ).first()

    @staticmethod
    def require_active_service(db: Session, business_id: UUID, service_id: UUID) -> Service:
        """Resolve a bookable service; missing, foreign and inactive all look the same"""
        service = BusinessService.get_service(db, business_id, service_id)
        if not service:
            raise ResourceNotFound("Service not found")
        if not service.is_active:
            raise ResourceNotFound("Service is not available")
        return service

    @staticmethod
    def get_active_services(db: Session, slug: str) -> List[Service]:
        """List the bookable services of an active business"""
        business = BusinessService.require_business(db, slug)
        return db.query(Service).filter(
            Service.business_id == business.id,
            Service.is_active == True
        ).order_by(Service.name).all()

    @staticmethod
    def business_tz(business: Business) -> tzinfo:
        """Timezone of the business; unknown names fall back to UTC"""
        tz_name = business.timezone or get_settings().DEFAULT_TIMEZONE
        try:
            return ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.error(f"Invalid timezone '{tz_name}' for business {business.id}, using UTC")
            return timezone.utc

    @staticmethod
    def local_now(business: Business) -> datetime:
        """Current wall clock time in the business's timezone (naive)"""
        return datetime.now(BusinessService.business_tz(business)).replace(tzinfo=None)

    @staticmethod
    def to_business_time(business: Business, moment: datetime) -> datetime:
        """Aware datetimes are converted to the business's wall clock, naive ones kept"""
        if moment.tzinfo is None:
            return moment
        return moment.astimezone(BusinessService.business_tz(business)).replace(tzinfo=None)
