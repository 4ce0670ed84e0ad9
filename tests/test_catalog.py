"""
Tests for catalog pricing and the booked-price snapshot.
"""
import unittest
from datetime import datetime, time
from decimal import Decimal

from massage_booking.core.exceptions import NotFound, ValidationError
from massage_booking.models.catalog import discounted_price
from massage_booking.schemas.appointment import BookingRequest
from massage_booking.schemas.catalog import AddOnCreate, AddOnUpdate, PackageCreate, PackageUpdate
from massage_booking.services.appointment.appointment_service import AppointmentService
from massage_booking.services.booking.booking_service import BookingService
from massage_booking.services.catalog.catalog_service import CatalogService

from support import MONDAY, DatabaseTestCase


class TestDiscountedPrice(unittest.TestCase):

    def test_percentage_discount(self):
        self.assertEqual(discounted_price(Decimal("100"), Decimal("20")), Decimal("80.00"))

    def test_no_discount(self):
        self.assertEqual(discounted_price(Decimal("45.00"), Decimal("0")), Decimal("45.00"))

    def test_rounds_half_up_to_cents(self):
        self.assertEqual(discounted_price(Decimal("10.05"), Decimal("50")), Decimal("5.03"))


class TestCatalogService(DatabaseTestCase):

    def _package(self, **overrides):
        data = {"name": "Deep Tissue", "duration_minutes": 60, "base_price": Decimal("100"),
                "discount_percentage": Decimal("20")}
        data.update(overrides)
        return CatalogService.create_package(self.db, PackageCreate(**data))

    def test_current_price_is_derived(self):
        package = self._package()

        self.assertTrue(package.id.startswith("pkg_"))
        self.assertEqual(package.current_price, Decimal("80.00"))

    def test_client_supplied_current_price_is_ignored(self):
        package = CatalogService.create_package(self.db, PackageCreate(**{
            "name": "Deep Tissue",
            "duration_minutes": 60,
            "base_price": "100",
            "discount_percentage": "20",
            "current_price": "1.00",
        }))
        self.assertEqual(package.current_price, Decimal("80.00"))

    def test_update_reprices(self):
        package = self._package()

        updated = CatalogService.update_package(self.db, package.id, PackageUpdate(discount_percentage=Decimal("50")))
        self.assertEqual(updated.current_price, Decimal("50.00"))

        updated = CatalogService.update_package(self.db, package.id, PackageUpdate(base_price=Decimal("120")))
        self.assertEqual(updated.current_price, Decimal("60.00"))

    def test_required_fields_cannot_be_cleared(self):
        package = self._package()
        with self.assertRaises(ValidationError):
            CatalogService.update_package(self.db, package.id, PackageUpdate(base_price=None))

    def test_duplicate_id(self):
        self._package(id="pkg_custom")
        with self.assertRaises(ValidationError):
            self._package(id="pkg_custom")

    def test_delete_package(self):
        package = self._package()
        CatalogService.delete_package(self.db, package.id)
        with self.assertRaises(NotFound):
            CatalogService.get_package(self.db, package.id)

    def test_public_catalog_hides_inactive(self):
        self._package(name="Visible", sort_order=2)
        self._package(name="Hidden", is_active=False)
        self._package(name="First", sort_order=1)
        CatalogService.create_addon(self.db, AddOnCreate(name="Hot Stones", price=Decimal("10")))
        retired = CatalogService.create_addon(self.db, AddOnCreate(name="Retired", price=Decimal("5")))
        CatalogService.update_addon(self.db, retired.id, AddOnUpdate(is_active=False))

        catalog = CatalogService.get_public_catalog(self.db)
        self.assertEqual([p["name"] for p in catalog["packages"]], ["First", "Visible"])
        self.assertEqual([a["name"] for a in catalog["addons"]], ["Hot Stones"])

    def test_resolve_addons_rejects_inactive(self):
        addon = CatalogService.create_addon(self.db, AddOnCreate(name="Retired", price=Decimal("5"), is_active=False))
        with self.assertRaises(ValidationError):
            CatalogService.resolve_addons(self.db, [addon.id])


class TestPriceSnapshot(DatabaseTestCase):

    seed_catalog = True

    def test_booked_price_survives_catalog_changes(self):
        appointment = BookingService.book_appointment(
            self.db,
            BookingRequest(package_id="pkg_003", date=MONDAY, time=time(10, 0),
                           customer_name="Jane Doe", customer_email="jane@example.com"),
            now=datetime(2030, 1, 3, 9, 0),
        )

        CatalogService.update_package(self.db, "pkg_003", PackageUpdate(name="Renamed", base_price=Decimal("200")))
        stored = AppointmentService.get_appointment(self.db, appointment.id)
        self.assertEqual(stored.service_name, "60 Minute Massage")
        self.assertEqual(stored.service_price, Decimal("70.00"))

        CatalogService.delete_package(self.db, "pkg_003")
        stored = AppointmentService.get_appointment(self.db, appointment.id)
        self.assertEqual(stored.service_id, "pkg_003")
        self.assertEqual(stored.service_price, Decimal("70.00"))


if __name__ == "__main__":
    unittest.main()
