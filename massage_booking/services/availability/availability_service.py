# ===== massage_booking/services/availability/availability_service.py =====
from typing import List, Optional, Tuple
from datetime import date, datetime, time, timedelta

import pytz
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from massage_booking.config.settings import get_settings
from massage_booking.core.exceptions import ConfigurationUnavailable, ValidationError
from massage_booking.models.appointment import Appointment, AppointmentStatus
from massage_booking.services.availability.availability_config_service import (
    AvailabilityConfigService,
    day_of_week,
)
import logging

logger = logging.getLogger(__name__)

MAX_DURATION_MINUTES = 8 * 60

Interval = Tuple[datetime, datetime]


class DayHours(BaseModel):
    """Business hours for one weekday"""
    model_config = ConfigDict(from_attributes=True)

    day_of_week: int
    is_open: bool
    open_time: Optional[time] = None
    close_time: Optional[time] = None
    break_start_time: Optional[time] = None
    break_end_time: Optional[time] = None


class BookingRules(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    slot_interval_minutes: int = 30
    buffer_minutes: int = 0
    minimum_notice_hours: int = 0
    advance_booking_days: int = 60
    allow_same_day_booking: bool = True
    max_appointments_per_day: Optional[int] = None


class AvailabilityConfig(BaseModel):
    """Everything the slot computation needs for one date, loaded up front"""
    hours: DayHours
    rules: BookingRules
    is_blocked: bool = False


def business_now(timezone_name: Optional[str] = None) -> datetime:
    """Current wall-clock time in the business timezone, naive"""
    tz = pytz.timezone(timezone_name or get_settings().BUSINESS_TIMEZONE)
    return datetime.now(tz).replace(tzinfo=None)


def overlaps(a: Interval, b: Interval) -> bool:
    """Half-open intervals [start, end) share at least one instant"""
    return a[0] < b[1] and b[0] < a[1]


def compute_slots(
        config: AvailabilityConfig,
        target_date: date,
        duration_minutes: int,
        booked: List[Interval],
        now: datetime,
) -> List[time]:
    """
    Offerable start times on target_date for a service of duration_minutes.

    ``booked`` holds the intervals of the day's non-cancelled appointments.
    Pure function: all inputs are passed in, nothing is read from the store.
    """
    hours = config.hours
    rules = config.rules

    if config.is_blocked or not hours.is_open:
        return []
    if hours.open_time is None or hours.close_time is None:
        return []

    today = now.date()
    if target_date < today:
        return []
    if target_date > today + timedelta(days=rules.advance_booking_days):
        return []
    if target_date == today and not rules.allow_same_day_booking:
        return []
    if rules.max_appointments_per_day and len(booked) >= rules.max_appointments_per_day:
        return []

    duration = timedelta(minutes=duration_minutes)
    step = timedelta(minutes=rules.slot_interval_minutes)
    buffer = timedelta(minutes=rules.buffer_minutes)
    earliest = now + timedelta(hours=rules.minimum_notice_hours)

    day_open = datetime.combine(target_date, hours.open_time)
    day_close = datetime.combine(target_date, hours.close_time)

    break_interval = None
    if hours.break_start_time and hours.break_end_time:
        break_interval = (
            datetime.combine(target_date, hours.break_start_time),
            datetime.combine(target_date, hours.break_end_time),
        )

    slots = []
    start = day_open
    while start < day_close:
        end = start + duration
        if end > day_close:
            break

        candidate = (start, end)
        padded = (start - buffer, end + buffer)

        unavailable = (
            (break_interval is not None and overlaps(candidate, break_interval))
            or any(overlaps(padded, interval) for interval in booked)
            or start < earliest
        )
        if not unavailable:
            slots.append(start.time())

        start += step

    return slots


class AvailabilityService:
    """Loads availability configuration and computes bookable slots"""

    @staticmethod
    def load_config(db: Session, target_date: date) -> AvailabilityConfig:
        """
        Load hours, rules and the blocked flag for target_date.
        Fails closed: missing hours or settings raise ConfigurationUnavailable.
        """
        weekday = day_of_week(target_date)
        hours = AvailabilityConfigService.get_hours_for_day(db, weekday)
        if hours is None:
            logger.error(f"No business hours configured for day {weekday}")
            raise ConfigurationUnavailable(f"Business hours are not configured for day {weekday}")

        settings = AvailabilityConfigService.get_booking_settings(db)
        if settings is None:
            logger.error("Booking settings are not configured")
            raise ConfigurationUnavailable("Booking settings are not configured")

        return AvailabilityConfig(
            hours=DayHours.model_validate(hours),
            rules=BookingRules.model_validate(settings),
            is_blocked=AvailabilityConfigService.is_date_blocked(db, target_date),
        )

    @staticmethod
    def booked_intervals(
            db: Session,
            target_date: date,
            exclude_id=None
    ) -> List[Interval]:
        query = db.query(Appointment).filter(
            Appointment.date == target_date,
            Appointment.status != AppointmentStatus.CANCELLED,
        )
        if exclude_id is not None:
            query = query.filter(Appointment.id != exclude_id)
        return [(appt.starts_at, appt.ends_at) for appt in query.all()]

    @staticmethod
    def get_availability(
            db: Session,
            target_date: date,
            service_duration: int,
            now: Optional[datetime] = None
    ) -> List[time]:
        """Ordered list of offerable start times for target_date"""
        if service_duration <= 0 or service_duration > MAX_DURATION_MINUTES:
            raise ValidationError.for_field(
                "duration", f"must be between 1 and {MAX_DURATION_MINUTES} minutes"
            )

        config = AvailabilityService.load_config(db, target_date)
        booked = AvailabilityService.booked_intervals(db, target_date)
        slots = compute_slots(config, target_date, service_duration, booked, now or business_now())

        logger.info(
            f"Computed {len(slots)} slots for {target_date.isoformat()} "
            f"({service_duration} min)"
        )
        return slots

    @staticmethod
    def is_slot_offerable(
            db: Session,
            target_date: date,
            start_time: time,
            service_duration: int,
            now: Optional[datetime] = None
    ) -> bool:
        return start_time in AvailabilityService.get_availability(db, target_date, service_duration, now)
