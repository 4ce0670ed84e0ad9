# ===== massage_booking/models/availability.py =====
from sqlalchemy import Column, String, Integer, Boolean, Time, Date, DateTime, Uuid
from sqlalchemy.sql import func
from massage_booking.models.base import Base
import uuid


class BlockedDate(Base):
    """Specific dates with no availability (holidays, time-off)"""
    __tablename__ = "blocked_dates"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    date = Column(Date, nullable=False, unique=True)
    reason = Column(String(255), nullable=True)  # "Holiday", "Vacation", etc.
    created_by = Column(String(100), nullable=False, default="admin")
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class BusinessHours(Base):
    __tablename__ = "business_hours"

    day_of_week = Column(Integer, primary_key=True, autoincrement=False)  # 0=Sunday, 6=Saturday
    day_name = Column(String(10), nullable=False)
    is_open = Column(Boolean, nullable=False, default=True)
    open_time = Column(Time, nullable=True)
    close_time = Column(Time, nullable=True)
    break_start_time = Column(Time, nullable=True)
    break_end_time = Column(Time, nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<BusinessHours(day={self.day_of_week}, open={self.is_open})>"


class BookingSettings(Base):
    """Singleton row (id=1) with the global booking knobs"""
    __tablename__ = "booking_settings"

    id = Column(Integer, primary_key=True, default=1)
    slot_interval_minutes = Column(Integer, nullable=False, default=30)
    buffer_minutes = Column(Integer, nullable=False, default=15)  # Between appointments
    minimum_notice_hours = Column(Integer, nullable=False, default=24)
    advance_booking_days = Column(Integer, nullable=False, default=60)
    allow_same_day_booking = Column(Boolean, nullable=False, default=False)
    max_appointments_per_day = Column(Integer, nullable=False, default=8)
    updated_by = Column(String(100), nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
