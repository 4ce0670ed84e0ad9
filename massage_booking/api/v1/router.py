"""
API v1 router setup
Organized into: public (booking flow) and admin (JWT + admin role) routes
"""
from fastapi import APIRouter

from massage_booking.api.v1.public import booking
from massage_booking.api.v1.admin import appointments, availability, catalog, revenue, settings

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
# ADMIN ROUTES (JWT authentication + admin role required)
# ============================================================================
for admin_router in (appointments.router, availability.router, catalog.router,
                     settings.router, revenue.router):
    api_v1_router.include_router(
        admin_router,
        prefix="/admin",
        tags=["Admin"]
    )


# ============================================================================
# ROOT ENDPOINT - API Info
# ============================================================================
@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """
    API information and available endpoints.
    Shows the structure of all API routes organized by authentication type.
    """
    return {
        "version": "1.0",
        "public": {
            "authentication": "none (a bearer token links bookings to the customer)",
            "endpoints": ["/public/packages", "/public/availability", "/public/bookings"],
        },
        "admin": {
            "authentication": "JWT bearer token with the admin role",
            "endpoints": ["/admin/appointments", "/admin/availability", "/admin/packages",
                          "/admin/addons", "/admin/settings", "/admin/revenue"],
        },
    }
