# massage_booking/services/booking/booking_service.py
"""Client-facing booking: catalog + availability + appointment store"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from massage_booking.core.exceptions import BookingError, ValidationError
from massage_booking.models.appointment import Appointment
from massage_booking.schemas.appointment import AppointmentCreate, BookingRequest
from massage_booking.services.appointment.appointment_service import AppointmentService
from massage_booking.services.availability.availability_service import AvailabilityService
from massage_booking.services.catalog.catalog_service import CatalogService

logger = logging.getLogger(__name__)


class BookingService:

    @staticmethod
    def book_appointment(
            db: Session,
            request: BookingRequest,
            customer_id: Optional[str] = None,
            now: Optional[datetime] = None
    ) -> Appointment:
        """
        Book a catalog package for a customer.

        Name, price and duration are taken from the catalog at this moment and
        stored on the appointment. The date lock is taken before the
        availability engine runs, so buffer, daily-limit and notice rules are
        judged against every booking already committed for that date. The
        store re-checks overlap under the same lock.
        """
        package = CatalogService.find_active_package(db, request.package_id)
        if not package:
            raise ValidationError.for_field("package_id", f"package '{request.package_id}' is not available")

        addons = CatalogService.resolve_addons(db, request.addon_ids)
        addons_total = sum((Decimal(str(addon.price)) for addon in addons), Decimal("0"))

        AppointmentService.lock_date(db, request.date)
        try:
            if not AvailabilityService.is_slot_offerable(
                    db, request.date, request.time, package.duration_minutes, now=now
            ):
                raise ValidationError.for_field(
                    "time",
                    f"{request.time.strftime('%H:%M')} on {request.date.isoformat()} is not available",
                )

            appointment = AppointmentService.create_appointment(
                db,
                AppointmentCreate(
                    customer_id=customer_id,
                    customer_name=request.customer_name,
                    customer_email=request.customer_email,
                    customer_phone=request.customer_phone,
                    service_id=package.id,
                    service_name=package.name,
                    service_price=Decimal(str(package.current_price)),
                    addons=[addon.id for addon in addons],
                    addons_total=addons_total,
                    date=request.date,
                    time=request.time,
                    duration=package.duration_minutes,
                    notes=request.notes,
                ),
                created_by="customer",
            )
        except BookingError:
            # Release the date lock before reporting the rejection
            db.rollback()
            raise

        logger.info(f"Customer booking {appointment.id} for package {package.id}")
        return appointment
