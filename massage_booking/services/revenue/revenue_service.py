# massage_booking/services/revenue/revenue_service.py
"""Revenue records created from completed appointments"""
import logging
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from sqlalchemy.orm import Session

from massage_booking.models.catalog import CENTS
from massage_booking.models.revenue import RevenueRecord
from massage_booking.services.business.settings_service import SettingsService

logger = logging.getLogger(__name__)


class RevenueService:

    @staticmethod
    def record_for_appointment(db: Session, appointment, created_by: str = "admin") -> RevenueRecord:
        """
        Add a revenue record for a completed appointment to the current
        transaction. At most one record exists per appointment; the caller commits.
        """
        existing = db.query(RevenueRecord).filter(
            RevenueRecord.appointment_id == appointment.id
        ).first()
        if existing:
            return existing

        service_price = Decimal(str(appointment.service_price))
        addons_total = Decimal(str(appointment.addons_total or 0))
        subtotal = (service_price + addons_total).quantize(CENTS)
        tax_rate = SettingsService.get_tax_rate(db)
        tax_amount = (subtotal * tax_rate / Decimal(100)).quantize(CENTS, rounding=ROUND_HALF_UP)

        record = RevenueRecord(
            id=f"rev_{appointment.id}",
            appointment_id=appointment.id,
            customer_id=appointment.customer_id,
            date=appointment.date,
            service_id=appointment.service_id,
            service_name=appointment.service_name,
            service_price=service_price,
            addons_total=addons_total,
            discount_amount=Decimal("0"),
            subtotal=subtotal,
            tax_amount=tax_amount,
            total_amount=subtotal + tax_amount,
            payment_status="paid",
            paid_at=datetime.now(timezone.utc),
            notes=appointment.notes,
            created_by=created_by,
        )
        db.add(record)
        logger.info(f"Revenue record for appointment {appointment.id}: ${record.total_amount}")
        return record

    @staticmethod
    def list_revenue(
            db: Session,
            start_date: Optional[date] = None,
            end_date: Optional[date] = None
    ) -> List[RevenueRecord]:
        query = db.query(RevenueRecord)
        if start_date:
            query = query.filter(RevenueRecord.date >= start_date)
        if end_date:
            query = query.filter(RevenueRecord.date <= end_date)
        return query.order_by(RevenueRecord.date.desc()).all()
