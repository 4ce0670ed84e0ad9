"""
Public booking routes (no authentication required)
Catalog, availability and the customer booking flow
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional
import logging

from massage_booking.config.database import get_db
from massage_booking.api.dependencies import Identity, optional_identity
from massage_booking.core.exceptions import ValidationError
from massage_booking.schemas.appointment import BookingRequest
from massage_booking.schemas.common import format_clock_time
from massage_booking.services.appointment.appointment_query_service import AppointmentQueryService
from massage_booking.services.availability.availability_service import AvailabilityService
from massage_booking.services.booking.booking_service import BookingService
from massage_booking.services.catalog.catalog_service import CatalogService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["public-booking"])


@router.get("/packages")
def get_catalog(db: Session = Depends(get_db)):
    """Active packages and add-ons in display order."""
    return CatalogService.get_public_catalog(db)


@router.get("/availability")
def get_availability(
        date: date = Query(..., description="Date to check (YYYY-MM-DD)"),
        duration: Optional[int] = Query(None, description="Service duration in minutes"),
        package_id: Optional[str] = Query(None, description="Use this package's duration"),
        db: Session = Depends(get_db)
):
    """
    Offerable start times for a date.
    Pass either a duration in minutes or a package_id.
    """
    if duration is None:
        if not package_id:
            raise ValidationError.for_field("duration", "duration or package_id is required")
        package = CatalogService.find_active_package(db, package_id)
        if not package:
            raise ValidationError.for_field("package_id", f"package '{package_id}' is not available")
        duration = package.duration_minutes

    slots = AvailabilityService.get_availability(db, date, duration)
    return {
        "date": date.isoformat(),
        "duration": duration,
        "slots": [format_clock_time(slot) for slot in slots],
    }


@router.post("/bookings", status_code=201)
def create_booking(
        request: BookingRequest,
        identity: Optional[Identity] = Depends(optional_identity),
        db: Session = Depends(get_db)
):
    """
    Book a package. Signed-in customers are linked by their user id;
    anonymous bookings are stored as walk-ins.
    """
    appointment = BookingService.book_appointment(
        db,
        request,
        customer_id=identity.user_id if identity else None,
    )
    return AppointmentQueryService.serialize_appointment(appointment)
