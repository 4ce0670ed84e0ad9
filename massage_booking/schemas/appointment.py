"""
Pydantic schemas for appointment and booking requests
"""
import datetime as dt
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from massage_booking.schemas.common import check_clock_time, parse_clock_time

StatusLiteral = Literal["scheduled", "confirmed", "completed", "cancelled", "no-show"]


class AppointmentCreate(BaseModel):
    """Admin-side creation; the service snapshot is supplied by the caller"""
    customer_id: Optional[str] = None
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""

    service_id: str = ""
    service_name: str = ""
    service_price: Decimal = Field(..., ge=0)
    addons: List[str] = Field(default_factory=list)
    addons_total: Decimal = Field(default=Decimal("0"), ge=0)

    date: dt.date
    time: dt.time
    duration: int = Field(..., description="Duration in minutes")

    status: StatusLiteral = "scheduled"
    notes: str = ""

    @field_validator("time", mode="before")
    @classmethod
    def parse_time(cls, v):
        return parse_clock_time(v)

    @field_validator("time")
    @classmethod
    def check_time(cls, v):
        return check_clock_time(v)


class AppointmentUpdate(BaseModel):
    """
    Partial update. Only fields present in the request are applied.
    The service/price snapshot is a historical fact and cannot be patched.
    """
    customer_id: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None

    date: Optional[dt.date] = None
    time: Optional[dt.time] = None
    duration: Optional[int] = None

    status: Optional[StatusLiteral] = None
    notes: Optional[str] = None

    @field_validator("time", mode="before")
    @classmethod
    def parse_time(cls, v):
        return parse_clock_time(v)

    @field_validator("time")
    @classmethod
    def check_time(cls, v):
        return check_clock_time(v)


class BookingRequest(BaseModel):
    """Public booking request; prices and duration come from the catalog"""
    package_id: str = Field(..., min_length=1)
    addon_ids: List[str] = Field(default_factory=list)
    date: dt.date
    time: dt.time

    customer_name: str = Field(..., min_length=1, max_length=255)
    customer_email: str = ""
    customer_phone: str = ""
    notes: str = Field(default="", max_length=2000)

    @field_validator("time", mode="before")
    @classmethod
    def parse_time(cls, v):
        return parse_clock_time(v)

    @field_validator("time")
    @classmethod
    def check_time(cls, v):
        return check_clock_time(v)
