
# ============================================================================
# FILE: massage_booking/api/v1/admin/appointments.py
# Admin endpoints - thin HTTP layer over the appointment services
# ============================================================================
from fastapi import APIRouter, Depends, Query, Path
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional
from uuid import UUID

from massage_booking.config.database import get_db
from massage_booking.api.dependencies import Identity, require_admin
from massage_booking.schemas.appointment import AppointmentCreate, AppointmentUpdate
from massage_booking.services.appointment.appointment_service import AppointmentService
from massage_booking.services.appointment.appointment_query_service import AppointmentQueryService

router = APIRouter(prefix="/appointments", tags=["admin-appointments"])


@router.get("")
def list_appointments(
        customer_id: Optional[str] = Query(None, description="Filter by customer id"),
        on_date: Optional[date] = Query(None, alias="date", description="Filter by appointment date"),
        status: Optional[str] = Query(None,
                                      description="Filter by status (scheduled, confirmed, completed, cancelled, no-show)"),
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """
    List appointments, most recent first.
    Requires admin role.
    """
    appointments = AppointmentQueryService.list_appointments(
        db=db,
        customer_id=customer_id,
        on_date=on_date,
        status=status
    )
    return {
        "total_appointments": len(appointments),
        "filters": {
            "customer_id": customer_id,
            "date": on_date.isoformat() if on_date else None,
            "status": status
        },
        "appointments": [AppointmentQueryService.serialize_appointment(a) for a in appointments]
    }


@router.get("/stats/summary")
def get_appointment_stats(
        start_date: Optional[date] = Query(None, description="Stats from this date"),
        end_date: Optional[date] = Query(None, description="Stats until this date"),
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """
    Summary statistics: counts per status and completion / no-show / cancellation rates.
    Requires admin role.
    """
    return AppointmentQueryService.get_appointment_stats(
        db=db,
        start_date=start_date,
        end_date=end_date
    )


@router.get("/{appointment_id}")
def get_appointment(
        appointment_id: UUID = Path(..., description="The appointment ID"),
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    appointment = AppointmentService.get_appointment(db, appointment_id)
    return AppointmentQueryService.serialize_appointment(appointment)


@router.post("", status_code=201)
def create_appointment(
        data: AppointmentCreate,
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """
    Create an appointment from the admin calendar.
    Returns 409 slot_conflict if the interval overlaps an active appointment.
    """
    appointment = AppointmentService.create_appointment(db, data, created_by="admin")
    return AppointmentQueryService.serialize_appointment(appointment)


@router.patch("/{appointment_id}")
def update_appointment(
        updates: AppointmentUpdate,
        appointment_id: UUID = Path(..., description="The appointment ID"),
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    appointment = AppointmentService.update_appointment(
        db, appointment_id, updates, updated_by=admin.user_id
    )
    return AppointmentQueryService.serialize_appointment(appointment)


@router.delete("/{appointment_id}")
def delete_appointment(
        appointment_id: UUID = Path(..., description="The appointment ID"),
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """Permanently delete an appointment."""
    return {"success": AppointmentService.delete_appointment(db, appointment_id)}
