# massage_booking/models/revenue.py
from sqlalchemy import Column, String, Numeric, Date, DateTime, Text, Uuid
from sqlalchemy.sql import func
from massage_booking.models.base import Base


class RevenueRecord(Base):
    """Income recorded when an appointment is completed"""
    __tablename__ = "revenue_records"

    id = Column(String(60), primary_key=True)  # rev_<appointment id>
    # No FK constraint: revenue survives a hard delete of its appointment
    appointment_id = Column(Uuid, nullable=False, unique=True)
    customer_id = Column(String(100), nullable=True, index=True)
    date = Column(Date, nullable=False, index=True)

    service_id = Column(String(50), nullable=False)
    service_name = Column(String(255), nullable=False)
    service_price = Column(Numeric(10, 2), nullable=False)
    addons_total = Column(Numeric(10, 2), nullable=False, default=0)
    discount_amount = Column(Numeric(10, 2), nullable=False, default=0)
    subtotal = Column(Numeric(10, 2), nullable=False)
    tax_amount = Column(Numeric(10, 2), nullable=False, default=0)
    total_amount = Column(Numeric(10, 2), nullable=False)

    payment_status = Column(String(20), nullable=False, default="paid")  # pending, paid, refunded
    payment_method = Column(String(30), nullable=True)
    paid_at = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
    created_by = Column(String(100), nullable=False, default="admin")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def to_dict(self):
        return {
            "id": self.id,
            "appointment_id": str(self.appointment_id),
            "customer_id": self.customer_id,
            "date": self.date.isoformat(),
            "service_id": self.service_id,
            "service_name": self.service_name,
            "service_price": float(self.service_price),
            "addons_total": float(self.addons_total),
            "discount_amount": float(self.discount_amount),
            "subtotal": float(self.subtotal),
            "tax_amount": float(self.tax_amount),
            "total_amount": float(self.total_amount),
            "payment_status": self.payment_status,
            "payment_method": self.payment_method,
            "paid_at": self.paid_at.isoformat() if self.paid_at else None,
            "notes": self.notes,
            "created_by": self.created_by,
        }
