# massage_booking/models/__init__.py
from .base import Base
from .business import BusinessSettings, Setting
from .appointment import Appointment, AppointmentStatus, ScheduleLock
from .availability import BlockedDate, BusinessHours, BookingSettings
from .catalog import Package, AddOn
from .revenue import RevenueRecord

__all__ = [
    "Base",
    "BusinessSettings",
    "Setting",
    "Appointment",
    "AppointmentStatus",
    "ScheduleLock",
    "BlockedDate",
    "BusinessHours",
    "BookingSettings",
    "Package",
    "AddOn",
    "RevenueRecord",
]
