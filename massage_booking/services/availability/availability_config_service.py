# massage_booking/services/availability/availability_config_service.py
"""Admin-edited availability data: blocked dates, weekly hours, booking settings"""
import logging
from datetime import date, time
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from massage_booking.core.exceptions import NotFound, ValidationError
from massage_booking.models.availability import BlockedDate, BusinessHours, BookingSettings
from massage_booking.schemas.availability import BusinessHoursUpdate, BookingSettingsUpdate
from massage_booking.schemas.common import format_clock_time

logger = logging.getLogger(__name__)

BOOKING_SETTINGS_ID = 1
DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def day_of_week(value: date) -> int:
    """0=Sunday ... 6=Saturday"""
    return (value.weekday() + 1) % 7


class AvailabilityConfigService:
    """CRUD for the data the availability engine consumes"""

    # ===== BLOCKED DATES =====

    @staticmethod
    def list_blocked_dates(db: Session) -> List[BlockedDate]:
        return db.query(BlockedDate).order_by(BlockedDate.date.desc()).all()

    @staticmethod
    def add_blocked_date(
            db: Session,
            blocked_on: date,
            reason: Optional[str] = None,
            created_by: str = "admin"
    ) -> BlockedDate:
        blocked = BlockedDate(date=blocked_on, reason=reason, created_by=created_by)
        db.add(blocked)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationError.for_field("date", f"{blocked_on.isoformat()} is already blocked")

        db.refresh(blocked)
        logger.info(f"Blocked {blocked_on.isoformat()} ({reason or 'no reason'}) by {created_by}")
        return blocked

    @staticmethod
    def remove_blocked_date(db: Session, blocked_date_id: UUID) -> bool:
        blocked = db.get(BlockedDate, blocked_date_id)
        if not blocked:
            raise NotFound(f"Blocked date {blocked_date_id} not found")

        unblocked_on = blocked.date
        db.delete(blocked)
        db.commit()
        logger.info(f"Unblocked {unblocked_on.isoformat()}")
        return True

    @staticmethod
    def is_date_blocked(db: Session, value: date) -> bool:
        return db.query(BlockedDate.id).filter(BlockedDate.date == value).first() is not None

    # ===== BUSINESS HOURS =====

    @staticmethod
    def get_business_hours(db: Session) -> List[BusinessHours]:
        return db.query(BusinessHours).order_by(BusinessHours.day_of_week.asc()).all()

    @staticmethod
    def get_hours_for_day(db: Session, weekday: int) -> Optional[BusinessHours]:
        return db.get(BusinessHours, weekday)

    @staticmethod
    def update_business_hours(db: Session, weekday: int, updates: BusinessHoursUpdate) -> BusinessHours:
        if weekday not in range(7):
            raise ValidationError.for_field("day_of_week", "must be between 0 (Sunday) and 6 (Saturday)")

        hours = db.get(BusinessHours, weekday)
        if not hours:
            raise NotFound(f"Business hours for {DAY_NAMES[weekday]} not found")

        for field, value in updates.model_dump(exclude_unset=True).items():
            if field == "is_open" and value is None:
                continue
            setattr(hours, field, value)

        try:
            AvailabilityConfigService._validate_hours(hours)
        except ValidationError:
            db.rollback()
            raise

        db.commit()
        db.refresh(hours)
        logger.info(f"Business hours updated for {hours.day_name}")
        return hours

    @staticmethod
    def _validate_hours(hours: BusinessHours):
        if not hours.is_open:
            return

        if hours.open_time is None or hours.close_time is None:
            raise ValidationError(
                "An open day needs both open_time and close_time",
                {"open_time": "required", "close_time": "required"},
            )
        if hours.open_time >= hours.close_time:
            raise ValidationError.for_field("close_time", "must be after open_time")

        if (hours.break_start_time is None) != (hours.break_end_time is None):
            raise ValidationError.for_field("break_end_time", "break needs both a start and an end")
        if hours.break_start_time is not None:
            if hours.break_start_time >= hours.break_end_time:
                raise ValidationError.for_field("break_end_time", "must be after break_start_time")
            if hours.break_start_time < hours.open_time or hours.break_end_time > hours.close_time:
                raise ValidationError.for_field("break_start_time", "break must fall within open hours")

    @staticmethod
    def serialize_hours(hours: BusinessHours) -> dict:
        def fmt(value: Optional[time]) -> Optional[str]:
            return format_clock_time(value) if value else None

        return {
            "day_of_week": hours.day_of_week,
            "day_name": hours.day_name,
            "is_open": hours.is_open,
            "open_time": fmt(hours.open_time),
            "close_time": fmt(hours.close_time),
            "break_start_time": fmt(hours.break_start_time),
            "break_end_time": fmt(hours.break_end_time),
        }

    # ===== BOOKING SETTINGS =====

    @staticmethod
    def get_booking_settings(db: Session) -> Optional[BookingSettings]:
        return db.get(BookingSettings, BOOKING_SETTINGS_ID)

    @staticmethod
    def update_booking_settings(
            db: Session,
            updates: BookingSettingsUpdate,
            updated_by: str
    ) -> BookingSettings:
        settings = db.get(BookingSettings, BOOKING_SETTINGS_ID)
        if not settings:
            settings = BookingSettings(id=BOOKING_SETTINGS_ID)
            db.add(settings)

        for field, value in updates.model_dump(exclude_unset=True).items():
            if value is None:
                continue
            setattr(settings, field, value)
        settings.updated_by = updated_by

        db.commit()
        db.refresh(settings)
        logger.info(f"Booking settings updated by {updated_by}")
        return settings

    @staticmethod
    def serialize_booking_settings(settings: BookingSettings) -> dict:
        return {
            "slot_interval_minutes": settings.slot_interval_minutes,
            "buffer_minutes": settings.buffer_minutes,
            "minimum_notice_hours": settings.minimum_notice_hours,
            "advance_booking_days": settings.advance_booking_days,
            "allow_same_day_booking": settings.allow_same_day_booking,
            "max_appointments_per_day": settings.max_appointments_per_day,
            "updated_by": settings.updated_by,
            "updated_at": settings.updated_at.isoformat() if settings.updated_at else None,
        }
