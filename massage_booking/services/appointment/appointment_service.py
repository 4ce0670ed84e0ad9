# ============================================================================
# massage_booking/services/appointment/appointment_service.py
# ============================================================================
"""Service for managing appointments"""
import logging
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from massage_booking.core.exceptions import NotFound, SlotConflict, ValidationError
from massage_booking.models.appointment import Appointment, AppointmentStatus, ScheduleLock
from massage_booking.models.catalog import CENTS
from massage_booking.schemas.appointment import AppointmentCreate, AppointmentUpdate
from massage_booking.services.availability.availability_service import MAX_DURATION_MINUTES, overlaps
from massage_booking.services.revenue.revenue_service import RevenueService

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    AppointmentStatus.SCHEDULED: {
        AppointmentStatus.CONFIRMED,
        AppointmentStatus.COMPLETED,
        AppointmentStatus.CANCELLED,
        AppointmentStatus.NO_SHOW,
    },
    AppointmentStatus.CONFIRMED: {
        AppointmentStatus.COMPLETED,
        AppointmentStatus.CANCELLED,
        AppointmentStatus.NO_SHOW,
    },
}

# Fields an update may not set to null
REQUIRED_ON_UPDATE = ("customer_name", "customer_email", "customer_phone",
                      "date", "time", "duration", "status", "notes")


class AppointmentService:
    """Handles appointment writes. Every write that places an interval on a
    date holds that date's schedule lock until commit."""

    @staticmethod
    def create_appointment(
            db: Session,
            data: AppointmentCreate,
            created_by: str = "admin"
    ) -> Appointment:
        """Create a new appointment, rejecting overlaps with SlotConflict"""
        AppointmentService._validate_create(data, created_by)

        if data.status != AppointmentStatus.CANCELLED:
            AppointmentService.lock_date(db, data.date)
            AppointmentService._ensure_no_overlap(db, data.date, data.time, data.duration)

        appointment = Appointment(
            customer_id=data.customer_id or None,
            customer_name=data.customer_name.strip(),
            customer_email=data.customer_email.strip(),
            customer_phone=data.customer_phone.strip(),
            service_id=data.service_id,
            service_name=data.service_name,
            service_price=data.service_price.quantize(CENTS),
            addons=list(data.addons),
            addons_total=data.addons_total.quantize(CENTS),
            date=data.date,
            time=data.time,
            duration=data.duration,
            status=data.status,
            notes=data.notes,
            created_by=created_by,
        )
        db.add(appointment)
        db.flush()

        if appointment.status == AppointmentStatus.COMPLETED:
            RevenueService.record_for_appointment(db, appointment, created_by)

        db.commit()
        db.refresh(appointment)

        logger.info(
            f"Created appointment {appointment.id} on {appointment.date.isoformat()} "
            f"at {appointment.time.strftime('%H:%M')} ({appointment.duration} min) by {created_by}"
        )
        return appointment

    @staticmethod
    def get_appointment(db: Session, appointment_id: UUID) -> Appointment:
        appointment = db.get(Appointment, appointment_id)
        if not appointment:
            raise NotFound(f"Appointment {appointment_id} not found")
        return appointment

    @staticmethod
    def update_appointment(
            db: Session,
            appointment_id: UUID,
            updates: AppointmentUpdate,
            updated_by: str = "admin"
    ) -> Appointment:
        """Apply a partial update; rescheduling re-runs the overlap check"""
        appointment = AppointmentService.get_appointment(db, appointment_id)
        patch = updates.model_dump(exclude_unset=True)

        null_fields = {field: "cannot be null" for field in REQUIRED_ON_UPDATE
                       if field in patch and patch[field] is None}
        if patch.get("customer_name") is not None and not patch["customer_name"].strip():
            null_fields["customer_name"] = "is required"
        if null_fields:
            raise ValidationError("Required fields cannot be cleared", null_fields)

        old_status = appointment.status
        new_status = patch.get("status", old_status)
        if new_status != old_status and new_status not in ALLOWED_TRANSITIONS.get(old_status, set()):
            raise ValidationError.for_field(
                "status", f"cannot change from '{old_status}' to '{new_status}'"
            )

        new_date = patch.get("date", appointment.date)
        new_time = patch.get("time", appointment.time)
        new_duration = patch.get("duration", appointment.duration)
        rescheduled = (new_date, new_time, new_duration) != (
            appointment.date, appointment.time, appointment.duration
        )

        if rescheduled:
            if old_status in AppointmentStatus.TERMINAL:
                raise ValidationError.for_field("date", f"a {old_status} appointment cannot be rescheduled")
            AppointmentService._validate_schedule(new_date, new_time, new_duration)

        if rescheduled and new_status != AppointmentStatus.CANCELLED:
            AppointmentService.lock_date(db, new_date)
            AppointmentService._ensure_no_overlap(
                db, new_date, new_time, new_duration, exclude_id=appointment.id
            )

        for field, value in patch.items():
            if isinstance(value, str) and field != "notes":
                value = value.strip()
            setattr(appointment, field, value)
        if "customer_id" in patch and not patch["customer_id"]:
            appointment.customer_id = None

        if new_status == AppointmentStatus.COMPLETED and old_status != AppointmentStatus.COMPLETED:
            RevenueService.record_for_appointment(db, appointment, updated_by)

        db.commit()
        db.refresh(appointment)

        if new_status != old_status:
            logger.info(f"Appointment {appointment.id} status {old_status} -> {new_status}")
        if rescheduled:
            logger.info(
                f"Appointment {appointment.id} moved to {new_date.isoformat()} "
                f"{new_time.strftime('%H:%M')} ({new_duration} min)"
            )
        return appointment

    @staticmethod
    def delete_appointment(db: Session, appointment_id: UUID) -> bool:
        """Hard delete; the row and its history are removed"""
        appointment = AppointmentService.get_appointment(db, appointment_id)
        db.delete(appointment)
        db.commit()
        logger.info(f"Deleted appointment {appointment_id}")
        return True

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_create(data: AppointmentCreate, created_by: str):
        errors: Dict[str, str] = {}

        if not data.customer_name.strip():
            errors["customer_name"] = "is required"
        if created_by == "customer" and not (data.customer_email.strip() or data.customer_phone.strip()):
            errors["customer_email"] = "an email or phone number is required"
        if not data.service_id.strip():
            errors["service_id"] = "is required"
        if not data.service_name.strip():
            errors["service_name"] = "is required"

        try:
            AppointmentService._validate_schedule(data.date, data.time, data.duration)
        except ValidationError as e:
            errors.update(e.fields)

        if errors:
            raise ValidationError("Invalid appointment", errors)

    @staticmethod
    def _validate_schedule(on: date, at: time, duration: int):
        if duration <= 0 or duration > MAX_DURATION_MINUTES:
            raise ValidationError.for_field(
                "duration", f"must be between 1 and {MAX_DURATION_MINUTES} minutes"
            )
        start = datetime.combine(on, at)
        if start + timedelta(minutes=duration) > datetime.combine(on + timedelta(days=1), time.min):
            raise ValidationError.for_field("duration", "appointment must end on the same day")

    # ------------------------------------------------------------------
    # Conflict detection
    # ------------------------------------------------------------------

    @staticmethod
    def lock_date(db: Session, on: date):
        """
        Take the row lock for ``on`` inside the current transaction.
        Concurrent writers for the same date block here until the holder
        commits or rolls back.
        """
        bump = (
            update(ScheduleLock)
            .where(ScheduleLock.date == on)
            .values(version=ScheduleLock.version + 1)
        )
        if db.execute(bump).rowcount:
            return

        try:
            with db.begin_nested():
                db.add(ScheduleLock(date=on, version=1))
        except IntegrityError:
            # Another transaction created the row first; lock it now
            db.execute(bump)

    @staticmethod
    def _ensure_no_overlap(
            db: Session,
            on: date,
            at: time,
            duration: int,
            exclude_id: Optional[UUID] = None
    ):
        conflicts = AppointmentService.find_conflicts(db, on, at, duration, exclude_id)
        if conflicts:
            db.rollback()
            ids = [str(appt.id) for appt in conflicts]
            logger.warning(
                f"Slot conflict on {on.isoformat()} at {at.strftime('%H:%M')} "
                f"({duration} min) with {', '.join(ids)}"
            )
            raise SlotConflict(conflicting_ids=ids)

    @staticmethod
    def find_conflicts(
            db: Session,
            on: date,
            at: time,
            duration: int,
            exclude_id: Optional[UUID] = None
    ) -> List[Appointment]:
        """Non-cancelled appointments on ``on`` whose interval overlaps the given one"""
        start = datetime.combine(on, at)
        wanted = (start, start + timedelta(minutes=duration))

        query = db.query(Appointment).filter(
            Appointment.date == on,
            Appointment.status != AppointmentStatus.CANCELLED,
        )
        if exclude_id is not None:
            query = query.filter(Appointment.id != exclude_id)

        return [appt for appt in query.all() if overlaps(wanted, (appt.starts_at, appt.ends_at))]
