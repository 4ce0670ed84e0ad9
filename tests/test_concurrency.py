"""
Two writers racing for the same interval: exactly one wins, the other
gets SlotConflict and nothing overlapping is stored.
"""
import threading
import unittest
from datetime import time

from massage_booking.core.exceptions import SlotConflict
from massage_booking.services.appointment.appointment_query_service import AppointmentQueryService
from massage_booking.services.appointment.appointment_service import AppointmentService

from support import MONDAY, DatabaseTestCase, appointment_data


class TestConcurrentBooking(DatabaseTestCase):

    def _race(self, requests):
        barrier = threading.Barrier(len(requests))
        outcomes = [None] * len(requests)

        def book(index, data):
            db = self.Session()
            try:
                barrier.wait()
                AppointmentService.create_appointment(db, data)
                outcomes[index] = "created"
            except SlotConflict:
                outcomes[index] = "conflict"
            except Exception as e:
                outcomes[index] = repr(e)
            finally:
                db.close()

        threads = [threading.Thread(target=book, args=(i, data)) for i, data in enumerate(requests)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=60)
        return outcomes

    def test_same_slot_has_one_winner(self):
        outcomes = self._race([
            appointment_data(customer_name="First"),
            appointment_data(customer_name="Second"),
        ])

        self.assertEqual(sorted(outcomes), ["conflict", "created"])
        self.assertEqual(len(AppointmentQueryService.list_appointments(self.db, on_date=MONDAY)), 1)

    def test_overlapping_slots_have_one_winner(self):
        outcomes = self._race([
            appointment_data(time=time(10, 0)),
            appointment_data(time=time(10, 45)),
        ])

        self.assertEqual(sorted(outcomes), ["conflict", "created"])

    def test_disjoint_slots_both_succeed(self):
        outcomes = self._race([
            appointment_data(time=time(10, 0)),
            appointment_data(time=time(13, 0)),
            appointment_data(time=time(15, 0)),
        ])

        self.assertEqual(outcomes, ["created"] * 3)
        self.assertEqual(len(AppointmentQueryService.list_appointments(self.db, on_date=MONDAY)), 3)


if __name__ == "__main__":
    unittest.main()
