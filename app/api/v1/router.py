"""
API v1 router setup
Organized into: public (customer booking pages) and dashboard (business owners)
"""
from fastapi import APIRouter

from app.api.v1.public import booking
from app.api.v1.dashboard import bookings, hours

api_v1_router = APIRouter()

# ============================================================================
# PUBLIC ROUTES (No authentication required)
# ============================================================================
api_v1_router.include_router(
    booking.router,
    prefix="/public",
    tags=["Public"]
)

# ============================================================================
# DASHBOARD ROUTES (owner authentication enforced by the gateway)
# ============================================================================
api_v1_router.include_router(
    bookings.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)

api_v1_router.include_router(
    hours.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)


# ============================================================================
# ROOT ENDPOINT - API Info
# ============================================================================
@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """
    API information and available endpoints.
    """
    return {
        "version": "1.0",
        "endpoints": {
            "public": "/api/v1/public/{business_slug}/...",
            "dashboard": "/api/v1/dashboard/businesses/{business_id}/..."
        }
    }
