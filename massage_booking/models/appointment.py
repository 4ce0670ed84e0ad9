# ===== massage_booking/models/appointment.py =====
from datetime import datetime, timedelta
from sqlalchemy import Column, String, Integer, Text, DateTime, Date, Time, Numeric, JSON, Uuid, Index
from sqlalchemy.sql import func
from .base import Base
import uuid


class AppointmentStatus:
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"

    ALL = (SCHEDULED, CONFIRMED, COMPLETED, CANCELLED, NO_SHOW)
    TERMINAL = (COMPLETED, CANCELLED, NO_SHOW)


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        Index("idx_appointments_date_time", "date", "time"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Customer info (customer_id is null for walk-ins)
    customer_id = Column(String(100), nullable=True, index=True)
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False, default="")
    customer_phone = Column(String(50), nullable=False, default="")

    # Service snapshot, copied from the catalog at booking time
    service_id = Column(String(50), nullable=False)
    service_name = Column(String(255), nullable=False)
    service_price = Column(Numeric(10, 2), nullable=False)
    addons = Column(JSON, nullable=False, default=list)  # ordered add-on ids
    addons_total = Column(Numeric(10, 2), nullable=False, default=0)

    # Schedule
    date = Column(Date, nullable=False)
    time = Column(Time, nullable=False)
    duration = Column(Integer, nullable=False)  # minutes

    status = Column(String(20), nullable=False, default=AppointmentStatus.SCHEDULED)
    notes = Column(Text, nullable=False, default="")
    created_by = Column(String(20), nullable=False, default="admin")  # customer, admin

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Appointment(id={self.id}, date={self.date}, time={self.time}, status={self.status})>"

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.date, self.time)

    @property
    def ends_at(self) -> datetime:
        return self.starts_at + timedelta(minutes=self.duration)

    @property
    def is_active(self) -> bool:
        """Cancelled appointments release their interval"""
        return self.status != AppointmentStatus.CANCELLED


class ScheduleLock(Base):
    """
    One row per calendar date. Writers that place an interval on a date
    update this row first, which serializes them for the rest of the
    transaction.
    """
    __tablename__ = "schedule_locks"

    date = Column(Date, primary_key=True)
    version = Column(Integer, nullable=False, default=0)
