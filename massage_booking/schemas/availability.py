"""
Pydantic schemas for availability configuration
"""
import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from massage_booking.schemas.common import check_clock_time, parse_clock_time


class BlockedDateCreate(BaseModel):
    date: dt.date
    reason: Optional[str] = Field(None, max_length=255)


class BusinessHoursUpdate(BaseModel):
    """
    Per-weekday hours patch. Send null for a break field to clear it.
    """
    is_open: Optional[bool] = None
    open_time: Optional[dt.time] = None
    close_time: Optional[dt.time] = None
    break_start_time: Optional[dt.time] = None
    break_end_time: Optional[dt.time] = None

    @field_validator("open_time", "close_time", "break_start_time", "break_end_time", mode="before")
    @classmethod
    def parse_times(cls, v):
        return parse_clock_time(v)

    @field_validator("open_time", "close_time", "break_start_time", "break_end_time")
    @classmethod
    def check_times(cls, v):
        return check_clock_time(v)


class BookingSettingsUpdate(BaseModel):
    slot_interval_minutes: Optional[int] = Field(None, ge=5, le=240)
    buffer_minutes: Optional[int] = Field(None, ge=0, le=240)
    minimum_notice_hours: Optional[int] = Field(None, ge=0, le=24 * 30)
    advance_booking_days: Optional[int] = Field(None, ge=1, le=730)
    allow_same_day_booking: Optional[bool] = None
    max_appointments_per_day: Optional[int] = Field(None, ge=1, le=100)
