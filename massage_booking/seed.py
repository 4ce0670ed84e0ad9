# ===== seed.py =====
"""
Seed a fresh database with a default week, booking settings, the business
profile and the starter catalog. Rows that already exist are left alone.
"""
import logging
from datetime import time
from decimal import Decimal

from sqlalchemy.orm import Session

from massage_booking.config.database import SessionLocal, create_tables
from massage_booking.models import AddOn, BookingSettings, BusinessHours, BusinessSettings, Package
from massage_booking.services.availability.availability_config_service import DAY_NAMES
from massage_booking.services.business.settings_service import FALLBACK_BUSINESS_SETTINGS
from massage_booking.utils.my_logging import setup_logging

logger = logging.getLogger(__name__)

# day_of_week -> (open, close); None means closed
DEFAULT_WEEK = {
    0: None,
    1: (time(9, 0), time(18, 0)),
    2: (time(9, 0), time(18, 0)),
    3: (time(9, 0), time(18, 0)),
    4: (time(9, 0), time(18, 0)),
    5: (time(9, 0), time(18, 0)),
    6: (time(10, 0), time(16, 0)),
}

DEFAULT_PACKAGES = [
    ("pkg_001", "30 Minute Massage", 45, "45.00", "standard", False),
    ("pkg_002", "30 Minute Massage with add-on service of choice", 45, "55.00", "standard", True),
    ("pkg_003", "60 Minute Massage", 75, "70.00", "standard", False),
    ("pkg_004", "60 Minute Massage with add-on service of choice", 75, "80.00", "standard", True),
    ("pkg_005", "75 Minute Massage", 75, "85.00", "standard", False),
    ("pkg_006", "75 Minute Massage with add-on service", 75, "95.00", "standard", True),
    ("pkg_007", "90 Minute Massage", 105, "100.00", "standard", False),
    ("pkg_008", "90 Minute Massage with add-on service of choice", 105, "110.00", "standard", True),
    ("pkg_009", "Prenatal Massage", 75, "75.00", "specialty", False),
    ("pkg_010", "15-minute Chair Massage", 15, "20.00", "specialty", False),
]

DEFAULT_ADDONS = [
    ("addon_001", "Essential Oils", "Aromatherapy enhancement with your choice of essential oils"),
    ("addon_002", "CBD Oil", "CBD-infused massage oil for enhanced relaxation"),
    ("addon_003", "Exfoliation", "Full body exfoliation treatment"),
    ("addon_004", "Hot Stones", "Heated stone therapy for deep muscle relaxation"),
]


def seed_defaults(db: Session, include_catalog: bool = True) -> dict:
    """Insert any missing default rows and return how many were added per table"""
    added = {"business_hours": 0, "booking_settings": 0, "business_settings": 0, "packages": 0, "addons": 0}

    for weekday, hours in DEFAULT_WEEK.items():
        if db.get(BusinessHours, weekday):
            continue
        open_time, close_time = hours if hours else (None, None)
        db.add(BusinessHours(
            day_of_week=weekday,
            day_name=DAY_NAMES[weekday],
            is_open=hours is not None,
            open_time=open_time,
            close_time=close_time,
        ))
        added["business_hours"] += 1

    if not db.get(BookingSettings, 1):
        db.add(BookingSettings(id=1))
        added["booking_settings"] += 1

    if not db.get(BusinessSettings, 1):
        db.add(BusinessSettings(id=1, **FALLBACK_BUSINESS_SETTINGS))
        added["business_settings"] += 1

    if include_catalog:
        for sort_order, (package_id, name, duration, price, category, has_addons) in enumerate(DEFAULT_PACKAGES, 1):
            if db.get(Package, package_id):
                continue
            package = Package(
                id=package_id,
                name=name,
                description="",
                duration_minutes=duration,
                base_price=Decimal(price),
                discount_percentage=Decimal("0"),
                category=category,
                has_addons=has_addons,
                is_active=True,
                sort_order=sort_order,
            )
            package.reprice()
            db.add(package)
            added["packages"] += 1

        for sort_order, (addon_id, name, description) in enumerate(DEFAULT_ADDONS, 1):
            if db.get(AddOn, addon_id):
                continue
            db.add(AddOn(id=addon_id, name=name, description=description,
                         price=Decimal("10.00"), is_active=True, sort_order=sort_order))
            added["addons"] += 1

    db.commit()
    return added


def main():
    setup_logging()
    create_tables()

    db = SessionLocal()
    try:
        added = seed_defaults(db)
        logger.info(f"Seed complete: {added}")
    except Exception:
        db.rollback()
        logger.exception("Seeding failed")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
