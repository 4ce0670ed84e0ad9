"""
Availability administration routes
Blocked dates, weekly business hours and booking settings
"""
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session
from uuid import UUID

from massage_booking.config.database import get_db
from massage_booking.api.dependencies import Identity, require_admin
from massage_booking.core.exceptions import ConfigurationUnavailable
from massage_booking.schemas.availability import (
    BlockedDateCreate,
    BusinessHoursUpdate,
    BookingSettingsUpdate
)
from massage_booking.services.availability.availability_config_service import AvailabilityConfigService

router = APIRouter(prefix="/availability", tags=["admin-availability"])


def _serialize_blocked(blocked):
    return {
        "id": str(blocked.id),
        "date": blocked.date.isoformat(),
        "reason": blocked.reason,
        "created_by": blocked.created_by,
        "created_at": blocked.created_at.isoformat() if blocked.created_at else None,
    }


# ============================================================================
# Blocked dates
# ============================================================================

@router.get("/blocked-dates")
def list_blocked_dates(
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    return [_serialize_blocked(b) for b in AvailabilityConfigService.list_blocked_dates(db)]


@router.post("/blocked-dates", status_code=201)
def add_blocked_date(
        data: BlockedDateCreate,
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    blocked = AvailabilityConfigService.add_blocked_date(
        db, data.date, reason=data.reason, created_by=admin.user_id
    )
    return _serialize_blocked(blocked)


@router.delete("/blocked-dates/{blocked_date_id}")
def remove_blocked_date(
        blocked_date_id: UUID = Path(...),
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    return {"success": AvailabilityConfigService.remove_blocked_date(db, blocked_date_id)}


# ============================================================================
# Business hours
# ============================================================================

@router.get("/hours")
def get_business_hours(
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    return [AvailabilityConfigService.serialize_hours(h) for h in AvailabilityConfigService.get_business_hours(db)]


@router.patch("/hours/{day_of_week}")
def update_business_hours(
        updates: BusinessHoursUpdate,
        day_of_week: int = Path(..., description="0=Sunday ... 6=Saturday"),
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    hours = AvailabilityConfigService.update_business_hours(db, day_of_week, updates)
    return AvailabilityConfigService.serialize_hours(hours)


# ============================================================================
# Booking settings
# ============================================================================

@router.get("/booking-settings")
def get_booking_settings(
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    settings = AvailabilityConfigService.get_booking_settings(db)
    if not settings:
        raise ConfigurationUnavailable("Booking settings are not configured")
    return AvailabilityConfigService.serialize_booking_settings(settings)


@router.patch("/booking-settings")
def update_booking_settings(
        updates: BookingSettingsUpdate,
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    settings = AvailabilityConfigService.update_booking_settings(db, updates, updated_by=admin.user_id)
    return AvailabilityConfigService.serialize_booking_settings(settings)
