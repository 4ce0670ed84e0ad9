"""Shared fixtures for tests that need a real database"""
import os
import tempfile
import unittest
from datetime import date, time
from decimal import Decimal

from sqlalchemy.orm import sessionmaker

from massage_booking.config.database import build_engine, create_tables
from massage_booking.schemas.appointment import AppointmentCreate
from massage_booking.seed import seed_defaults

# 2030-01-07 is a Monday (open 09:00-18:00 in the default week)
MONDAY = date(2030, 1, 7)
SUNDAY = date(2030, 1, 6)


def appointment_data(**overrides) -> AppointmentCreate:
    data = {
        "customer_name": "Jane Doe",
        "customer_email": "jane@example.com",
        "customer_phone": "555-0100",
        "service_id": "pkg_003",
        "service_name": "60 Minute Massage",
        "service_price": Decimal("70.00"),
        "date": MONDAY,
        "time": time(10, 0),
        "duration": 60,
    }
    data.update(overrides)
    return AppointmentCreate(**data)


class DatabaseTestCase(unittest.TestCase):
    """Fresh SQLite file per test, seeded with the default week and settings"""

    seed_catalog = False

    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.engine = build_engine(f"sqlite:///{os.path.join(self._tmpdir.name, 'booking.db')}")
        create_tables(self.engine)
        self.Session = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

        self.db = self.Session()
        seed_defaults(self.db, include_catalog=self.seed_catalog)

    def tearDown(self):
        self.db.close()
        self.engine.dispose()
        self._tmpdir.cleanup()
