"""Revenue records generated from completed appointments"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from datetime import date
from decimal import Decimal
from typing import Optional

from massage_booking.config.database import get_db
from massage_booking.api.dependencies import Identity, require_admin
from massage_booking.services.revenue.revenue_service import RevenueService

router = APIRouter(prefix="/revenue", tags=["admin-revenue"])


@router.get("")
def list_revenue(
        start_date: Optional[date] = Query(None),
        end_date: Optional[date] = Query(None),
        admin: Identity = Depends(require_admin),
        db: Session = Depends(get_db)
):
    records = RevenueService.list_revenue(db, start_date, end_date)
    total = sum((Decimal(str(r.total_amount)) for r in records), Decimal("0"))
    return {
        "total_records": len(records),
        "total_amount": float(total),
        "records": [r.to_dict() for r in records]
    }
