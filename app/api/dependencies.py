# ============================================================================
# FILE: app/api/dependencies.py
# Shared dependencies for dashboard routes
# ============================================================================
from fastapi import Depends, Path
from sqlalchemy.orm import Session
from uuid import UUID

from app.config.database import get_db
from app.models.business import Business
from app.services.business.business_service import BusinessService


def get_current_business(
        business_id: UUID = Path(..., description="The business ID"),
        db: Session = Depends(get_db)
) -> Business:
    """
    Resolve the business a dashboard request operates on.

    Owner authentication happens upstream (API gateway); this only makes
    sure the business exists so every query stays scoped to it.
    """
    return BusinessService.require_business_by_id(db, business_id)
