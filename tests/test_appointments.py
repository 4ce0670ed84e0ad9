"""
Tests for the appointment store: overlap rejection, lifecycle, ordering
and revenue on completion.
"""
import unittest
import uuid
from datetime import time, timedelta, timezone
from decimal import Decimal

import pydantic

from massage_booking.core.exceptions import NotFound, SlotConflict, ValidationError
from massage_booking.models import BusinessSettings, RevenueRecord
from massage_booking.schemas.appointment import AppointmentUpdate
from massage_booking.services.appointment.appointment_query_service import AppointmentQueryService
from massage_booking.services.appointment.appointment_service import AppointmentService

from support import MONDAY, DatabaseTestCase, appointment_data


class TestCreateAppointment(DatabaseTestCase):

    def test_create_stores_snapshot(self):
        appointment = AppointmentService.create_appointment(
            self.db, appointment_data(addons=["addon_001"], addons_total=Decimal("10"))
        )

        self.assertEqual(appointment.status, "scheduled")
        self.assertEqual(appointment.created_by, "admin")
        self.assertEqual(appointment.service_price, Decimal("70.00"))
        self.assertEqual(appointment.addons, ["addon_001"])
        self.assertIsNone(appointment.customer_id)

    def test_overlapping_create_is_rejected(self):
        first = AppointmentService.create_appointment(self.db, appointment_data())

        with self.assertRaises(SlotConflict) as ctx:
            AppointmentService.create_appointment(self.db, appointment_data(time=time(10, 30)))

        self.assertEqual(ctx.exception.conflicting_ids, [str(first.id)])
        self.assertEqual(len(AppointmentQueryService.list_appointments(self.db)), 1)

    def test_back_to_back_appointments_are_allowed(self):
        AppointmentService.create_appointment(self.db, appointment_data())
        AppointmentService.create_appointment(self.db, appointment_data(time=time(11, 0)))
        AppointmentService.create_appointment(self.db, appointment_data(time=time(9, 0)))

        self.assertEqual(len(AppointmentQueryService.list_appointments(self.db, on_date=MONDAY)), 3)

    def test_same_time_on_another_day_is_allowed(self):
        AppointmentService.create_appointment(self.db, appointment_data())
        AppointmentService.create_appointment(self.db, appointment_data(date=MONDAY + timedelta(days=1)))

    def test_missing_name_and_bad_duration(self):
        with self.assertRaises(ValidationError) as ctx:
            AppointmentService.create_appointment(self.db, appointment_data(customer_name="  ", duration=0))

        self.assertIn("customer_name", ctx.exception.fields)
        self.assertIn("duration", ctx.exception.fields)

    def test_appointment_must_end_the_same_day(self):
        with self.assertRaises(ValidationError):
            AppointmentService.create_appointment(self.db, appointment_data(time=time(23, 30), duration=60))

    def test_time_with_utc_offset_is_rejected(self):
        for value in ("10:00:00+02:00", "10:00:00Z", time(10, 0, tzinfo=timezone.utc)):
            with self.assertRaises(pydantic.ValidationError) as ctx:
                appointment_data(time=value)
            self.assertIn("UTC offset", str(ctx.exception))

        with self.assertRaises(pydantic.ValidationError):
            AppointmentUpdate(time="11:00:00-05:00")

    def test_time_must_be_a_whole_minute(self):
        with self.assertRaises(pydantic.ValidationError):
            appointment_data(time="14:30:15")

        appointment = AppointmentService.create_appointment(self.db, appointment_data(time="14:30:00"))
        self.assertEqual(appointment.time, time(14, 30))
        self.assertEqual(AppointmentQueryService.serialize_appointment(appointment)["time"], "14:30")

    def test_customer_bookings_need_contact_details(self):
        with self.assertRaises(ValidationError) as ctx:
            AppointmentService.create_appointment(
                self.db, appointment_data(customer_email="", customer_phone=""), created_by="customer"
            )
        self.assertIn("customer_email", ctx.exception.fields)


class TestUpdateAppointment(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        self.morning = AppointmentService.create_appointment(self.db, appointment_data())
        self.noon = AppointmentService.create_appointment(self.db, appointment_data(time=time(12, 0)))

    def test_reschedule_onto_a_busy_slot_is_rejected(self):
        with self.assertRaises(SlotConflict):
            AppointmentService.update_appointment(self.db, self.noon.id, AppointmentUpdate(time="10:30"))

        self.assertEqual(AppointmentService.get_appointment(self.db, self.noon.id).time, time(12, 0))

    def test_extending_an_appointment_ignores_itself(self):
        updated = AppointmentService.update_appointment(self.db, self.morning.id, AppointmentUpdate(duration=90))
        self.assertEqual(updated.duration, 90)

    def test_extending_into_the_next_appointment_is_rejected(self):
        with self.assertRaises(SlotConflict):
            AppointmentService.update_appointment(self.db, self.morning.id, AppointmentUpdate(duration=150))

    def test_cancelled_interval_is_free_again(self):
        AppointmentService.update_appointment(self.db, self.morning.id, AppointmentUpdate(status="cancelled"))
        AppointmentService.create_appointment(self.db, appointment_data(customer_name="John Roe"))

    def test_required_fields_cannot_be_cleared(self):
        with self.assertRaises(ValidationError) as ctx:
            AppointmentService.update_appointment(
                self.db, self.morning.id, AppointmentUpdate(customer_name=None, time=None)
            )
        self.assertEqual(set(ctx.exception.fields), {"customer_name", "time"})

    def test_status_lifecycle(self):
        confirmed = AppointmentService.update_appointment(
            self.db, self.morning.id, AppointmentUpdate(status="confirmed")
        )
        self.assertEqual(confirmed.status, "confirmed")

        with self.assertRaises(ValidationError):
            AppointmentService.update_appointment(self.db, self.morning.id, AppointmentUpdate(status="scheduled"))

        AppointmentService.update_appointment(self.db, self.morning.id, AppointmentUpdate(status="no-show"))
        with self.assertRaises(ValidationError):
            AppointmentService.update_appointment(self.db, self.morning.id, AppointmentUpdate(status="completed"))

    def test_terminal_appointment_cannot_be_rescheduled(self):
        AppointmentService.update_appointment(self.db, self.morning.id, AppointmentUpdate(status="cancelled"))

        with self.assertRaises(ValidationError):
            AppointmentService.update_appointment(self.db, self.morning.id, AppointmentUpdate(time="15:00"))

    def test_notes_can_change_on_a_completed_appointment(self):
        AppointmentService.update_appointment(self.db, self.morning.id, AppointmentUpdate(status="completed"))
        updated = AppointmentService.update_appointment(
            self.db, self.morning.id, AppointmentUpdate(notes="Paid in cash")
        )
        self.assertEqual(updated.notes, "Paid in cash")

    def test_unknown_appointment(self):
        with self.assertRaises(NotFound):
            AppointmentService.update_appointment(
                self.db, uuid.uuid4(), AppointmentUpdate(notes="x")
            )


class TestDeleteAndList(DatabaseTestCase):

    def test_delete_is_permanent(self):
        appointment = AppointmentService.create_appointment(self.db, appointment_data())
        appointment_id = appointment.id

        self.assertTrue(AppointmentService.delete_appointment(self.db, appointment_id))
        with self.assertRaises(NotFound):
            AppointmentService.get_appointment(self.db, appointment_id)
        with self.assertRaises(NotFound):
            AppointmentService.delete_appointment(self.db, appointment_id)

    def test_listing_is_most_recent_first(self):
        tuesday = MONDAY + timedelta(days=1)
        AppointmentService.create_appointment(self.db, appointment_data(time=time(9, 0)))
        AppointmentService.create_appointment(self.db, appointment_data(date=tuesday, time=time(9, 0)))
        AppointmentService.create_appointment(self.db, appointment_data(time=time(14, 0)))

        listed = [(a.date, a.time) for a in AppointmentQueryService.list_appointments(self.db)]
        self.assertEqual(listed, [(tuesday, time(9, 0)), (MONDAY, time(14, 0)), (MONDAY, time(9, 0))])

    def test_filters(self):
        AppointmentService.create_appointment(self.db, appointment_data(customer_id="cust-1"))
        AppointmentService.create_appointment(self.db, appointment_data(time=time(14, 0), status="confirmed"))

        self.assertEqual(len(AppointmentQueryService.list_appointments(self.db, customer_id="cust-1")), 1)
        self.assertEqual(len(AppointmentQueryService.list_appointments(self.db, status="confirmed")), 1)
        self.assertEqual(len(AppointmentQueryService.list_appointments(self.db, on_date=MONDAY)), 2)

    def test_stats(self):
        first = AppointmentService.create_appointment(self.db, appointment_data(customer_id="cust-1"))
        AppointmentService.create_appointment(self.db, appointment_data(time=time(14, 0), customer_id="cust-2"))
        AppointmentService.update_appointment(self.db, first.id, AppointmentUpdate(status="completed"))

        stats = AppointmentQueryService.get_appointment_stats(self.db)
        self.assertEqual(stats["total_appointments"], 2)
        self.assertEqual(stats["by_status"]["completed"], 1)
        self.assertEqual(stats["completion_rate"], 50.0)
        self.assertEqual(stats["completed_revenue"], 70.0)
        self.assertEqual(stats["unique_customers"], 2)


class TestRevenueOnCompletion(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        settings = self.db.get(BusinessSettings, 1)
        settings.tax_rate = Decimal("10")
        self.db.commit()

    def test_completion_records_revenue_once(self):
        appointment = AppointmentService.create_appointment(
            self.db, appointment_data(addons_total=Decimal("10"), customer_id="cust-9")
        )
        AppointmentService.update_appointment(self.db, appointment.id, AppointmentUpdate(status="completed"))
        AppointmentService.update_appointment(self.db, appointment.id, AppointmentUpdate(notes="Great session"))

        records = self.db.query(RevenueRecord).all()
        self.assertEqual(len(records), 1)
        record = records[0]
        self.assertEqual(record.appointment_id, appointment.id)
        self.assertEqual(record.customer_id, "cust-9")
        self.assertEqual(record.subtotal, Decimal("80.00"))
        self.assertEqual(record.tax_amount, Decimal("8.00"))
        self.assertEqual(record.total_amount, Decimal("88.00"))

    def test_created_as_completed(self):
        AppointmentService.create_appointment(self.db, appointment_data(status="completed"))
        self.assertEqual(self.db.query(RevenueRecord).count(), 1)

    def test_other_statuses_record_nothing(self):
        appointment = AppointmentService.create_appointment(self.db, appointment_data())
        AppointmentService.update_appointment(self.db, appointment.id, AppointmentUpdate(status="no-show"))
        self.assertEqual(self.db.query(RevenueRecord).count(), 0)

    def test_revenue_survives_appointment_delete(self):
        appointment = AppointmentService.create_appointment(self.db, appointment_data(status="completed"))
        AppointmentService.delete_appointment(self.db, appointment.id)
        self.assertEqual(self.db.query(RevenueRecord).count(), 1)


if __name__ == "__main__":
    unittest.main()
