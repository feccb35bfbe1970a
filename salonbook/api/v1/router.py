from fastapi import APIRouter

from salonbook.api.v1.public import booking as public_booking
from salonbook.api.v1.dashboard import profile, services, availability, bookings

api_v1_router = APIRouter()

# ============================================================================
# PUBLIC ROUTES (no authentication required)
# ============================================================================
api_v1_router.include_router(
    public_booking.router,
    prefix="/public",
    tags=["Public"]
)

# ============================================================================
# DASHBOARD ROUTES (JWT from the auth service required)
# ============================================================================
api_v1_router.include_router(profile.router, prefix="/dashboard", tags=["Dashboard"])
api_v1_router.include_router(services.router, prefix="/dashboard", tags=["Dashboard"])
api_v1_router.include_router(availability.router, prefix="/dashboard", tags=["Dashboard"])
api_v1_router.include_router(bookings.router, prefix="/dashboard", tags=["Dashboard"])


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
        "authentication": {
            "public": "No authentication required",
            "dashboard": "JWT Bearer token from the auth service required",
        }
    }
