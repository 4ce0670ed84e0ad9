# ============================================================================
# massage_booking/services/appointment/appointment_query_service.py
# Read-side queries for the admin surface - no FastAPI dependencies
# ============================================================================
from sqlalchemy.orm import Session
from sqlalchemy import desc
from datetime import date
from decimal import Decimal
from typing import Optional, Dict, Any, List

from massage_booking.models.appointment import Appointment, AppointmentStatus


class AppointmentQueryService:
    """Service layer for appointment listings and statistics."""

    @staticmethod
    def list_appointments(
            db: Session,
            customer_id: Optional[str] = None,
            on_date: Optional[date] = None,
            status: Optional[str] = None
    ) -> List[Appointment]:
        """Filtered appointments, most recent first (date desc, then time desc)."""
        query = db.query(Appointment)

        if customer_id:
            query = query.filter(Appointment.customer_id == customer_id)
        if on_date:
            query = query.filter(Appointment.date == on_date)
        if status:
            query = query.filter(Appointment.status == status)

        return query.order_by(desc(Appointment.date), desc(Appointment.time)).all()

    @staticmethod
    def get_appointment_stats(
            db: Session,
            start_date: Optional[date] = None,
            end_date: Optional[date] = None
    ) -> Dict[str, Any]:
        """Calculate appointment statistics for a period."""
        query = db.query(Appointment)

        if start_date:
            query = query.filter(Appointment.date >= start_date)
        if end_date:
            query = query.filter(Appointment.date <= end_date)

        appointments = query.all()
        total_appointments = len(appointments)

        by_status = {status: 0 for status in AppointmentStatus.ALL}
        for appt in appointments:
            by_status[appt.status] = by_status.get(appt.status, 0) + 1

        by_service = {}
        for appt in appointments:
            by_service[appt.service_name] = by_service.get(appt.service_name, 0) + 1

        def rate(count: int) -> float:
            return round(count / total_appointments * 100, 2) if total_appointments else 0.0

        completed_revenue = sum(
            (Decimal(str(appt.service_price)) + Decimal(str(appt.addons_total or 0))
             for appt in appointments if appt.status == AppointmentStatus.COMPLETED),
            Decimal("0"),
        )
        avg_duration = (
            sum(appt.duration for appt in appointments) / total_appointments
            if total_appointments else None
        )

        return {
            "period": {
                "start": start_date.isoformat() if start_date else None,
                "end": end_date.isoformat() if end_date else None
            },
            "total_appointments": total_appointments,
            "by_status": by_status,
            "by_service": by_service,
            "completion_rate": rate(by_status[AppointmentStatus.COMPLETED]),
            "no_show_rate": rate(by_status[AppointmentStatus.NO_SHOW]),
            "cancellation_rate": rate(by_status[AppointmentStatus.CANCELLED]),
            "completed_revenue": float(completed_revenue),
            "unique_customers": len({appt.customer_id for appt in appointments if appt.customer_id}),
            "avg_duration_minutes": round(avg_duration, 2) if avg_duration else None
        }

    @staticmethod
    def serialize_appointment(appointment: Appointment) -> Dict[str, Any]:
        """Convert Appointment model to dictionary."""
        return {
            "id": str(appointment.id),
            "customer_id": appointment.customer_id,
            "customer_name": appointment.customer_name,
            "customer_email": appointment.customer_email,
            "customer_phone": appointment.customer_phone,
            "service_id": appointment.service_id,
            "service_name": appointment.service_name,
            "service_price": float(appointment.service_price),
            "addons": list(appointment.addons or []),
            "addons_total": float(appointment.addons_total or 0),
            "date": appointment.date.isoformat(),
            "time": appointment.time.strftime("%H:%M"),
            "duration": appointment.duration,
            "status": appointment.status,
            "notes": appointment.notes,
            "created_by": appointment.created_by,
            "created_at": appointment.created_at.isoformat() if appointment.created_at else None,
            "updated_at": appointment.updated_at.isoformat() if appointment.updated_at else None
        }
