"""Health checks and monitoring endpoints"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from massage_booking.config.database import get_db
from massage_booking.models import BookingSettings, BusinessHours

logger = logging.getLogger(__name__)

health_router = APIRouter()


@health_router.get("/")
async def health_check():
    return {"status": "healthy", "service": "massage-booking-api"}


@health_router.get("/detailed")
def detailed_health_check(db: Session = Depends(get_db)):
    """
    Database reachability plus whether availability can be computed at all.
    Missing hours or booking settings make every availability request fail
    closed, so they are reported as ``misconfigured``.
    """
    checks = {"api": "healthy", "database": "unknown", "booking_configuration": "unknown"}

    try:
        db.execute(text("SELECT 1"))
        checks["database"] = "healthy"
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        checks["database"] = f"unhealthy: {e.__class__.__name__}"

    if checks["database"] == "healthy":
        configured_days = db.query(BusinessHours).count()
        has_rules = db.get(BookingSettings, 1) is not None
        checks["booking_configuration"] = (
            "healthy" if configured_days == 7 and has_rules else "misconfigured"
        )

    checks["overall"] = "healthy" if all(v == "healthy" for v in checks.values()) else "degraded"
    return checks
