"""
Tests for the pure slot computation.

Everything compute_slots needs is passed in, so these tests build the
configuration by hand and pin ``now``.
"""
import unittest
from datetime import date, datetime, time, timedelta

from massage_booking.services.availability.availability_service import (
    AvailabilityConfig,
    BookingRules,
    DayHours,
    compute_slots,
    overlaps,
)

TARGET = date(2030, 1, 9)
NOW = datetime(2030, 1, 7, 8, 0)


def make_config(is_blocked=False, hours=None, **rules) -> AvailabilityConfig:
    day = dict(day_of_week=3, is_open=True, open_time=time(9, 0), close_time=time(17, 0))
    day.update(hours or {})
    base_rules = dict(
        slot_interval_minutes=30,
        buffer_minutes=0,
        minimum_notice_hours=0,
        advance_booking_days=60,
        allow_same_day_booking=True,
        max_appointments_per_day=None,
    )
    base_rules.update(rules)
    return AvailabilityConfig(hours=DayHours(**day), rules=BookingRules(**base_rules), is_blocked=is_blocked)


def booked(start: time, minutes: int, on: date = TARGET):
    begin = datetime.combine(on, start)
    return begin, begin + timedelta(minutes=minutes)


class TestOverlaps(unittest.TestCase):

    def test_half_open_intervals_touching_do_not_overlap(self):
        self.assertFalse(overlaps(booked(time(10, 0), 60), booked(time(11, 0), 60)))

    def test_partial_overlap(self):
        self.assertTrue(overlaps(booked(time(10, 0), 60), booked(time(10, 30), 60)))

    def test_containment(self):
        self.assertTrue(overlaps(booked(time(9, 0), 180), booked(time(10, 0), 15)))


class TestComputeSlots(unittest.TestCase):

    def test_open_day_offers_every_start_that_ends_by_close(self):
        slots = compute_slots(make_config(), TARGET, 60, [], NOW)

        self.assertEqual(slots[0], time(9, 0))
        self.assertEqual(slots[-1], time(16, 0))
        self.assertEqual(len(slots), 15)

    def test_slots_are_ascending_and_on_the_interval_grid(self):
        slots = compute_slots(make_config(slot_interval_minutes=15), TARGET, 45, [], NOW)

        self.assertEqual(slots, sorted(slots))
        for slot in slots:
            self.assertEqual(slot.minute % 15, 0)

    def test_blocked_date_has_no_slots(self):
        self.assertEqual(compute_slots(make_config(is_blocked=True), TARGET, 60, [], NOW), [])

    def test_closed_day_has_no_slots(self):
        config = make_config(hours={"is_open": False, "open_time": None, "close_time": None})
        self.assertEqual(compute_slots(config, TARGET, 60, [], NOW), [])

    def test_break_removes_overlapping_starts(self):
        config = make_config(hours={"break_start_time": time(12, 0), "break_end_time": time(13, 0)})
        slots = compute_slots(config, TARGET, 60, [], NOW)

        self.assertIn(time(11, 0), slots)
        self.assertNotIn(time(11, 30), slots)
        self.assertNotIn(time(12, 0), slots)
        self.assertNotIn(time(12, 30), slots)
        self.assertIn(time(13, 0), slots)

    def test_booked_interval_and_buffer_are_excluded(self):
        slots = compute_slots(make_config(buffer_minutes=15), TARGET, 60, [booked(time(10, 0), 60)], NOW)

        # 09:00 would end at 10:00 but the buffer pads it to 10:15
        self.assertNotIn(time(9, 0), slots)
        self.assertNotIn(time(11, 0), slots)
        self.assertEqual(slots[0], time(11, 30))

    def test_without_buffer_adjacent_starts_are_offered(self):
        slots = compute_slots(make_config(), TARGET, 60, [booked(time(10, 0), 60)], NOW)

        self.assertIn(time(9, 0), slots)
        self.assertIn(time(11, 0), slots)
        self.assertNotIn(time(10, 30), slots)

    def test_minimum_notice_drops_early_starts_today(self):
        now = datetime.combine(TARGET, time(10, 10))
        slots = compute_slots(make_config(minimum_notice_hours=2), TARGET, 60, [], now)

        self.assertEqual(slots[0], time(12, 30))

    def test_minimum_notice_reaches_into_the_next_day(self):
        now = datetime.combine(TARGET - timedelta(days=1), time(15, 0))
        slots = compute_slots(make_config(minimum_notice_hours=20), TARGET, 60, [], now)

        self.assertEqual(slots[0], time(11, 0))

    def test_same_day_booking_disabled(self):
        now = datetime.combine(TARGET, time(7, 0))
        config = make_config(allow_same_day_booking=False)
        self.assertEqual(compute_slots(config, TARGET, 60, [], now), [])

    def test_past_date_has_no_slots(self):
        now = datetime.combine(TARGET + timedelta(days=1), time(7, 0))
        self.assertEqual(compute_slots(make_config(), TARGET, 60, [], now), [])

    def test_beyond_advance_booking_window(self):
        self.assertEqual(compute_slots(make_config(advance_booking_days=1), TARGET, 60, [], NOW), [])

    def test_daily_limit_reached(self):
        busy = [booked(time(9, 0), 30), booked(time(15, 0), 30)]
        self.assertEqual(compute_slots(make_config(max_appointments_per_day=2), TARGET, 60, busy, NOW), [])

    def test_duration_longer_than_the_day(self):
        self.assertEqual(compute_slots(make_config(), TARGET, 9 * 60, [], NOW), [])


if __name__ == "__main__":
    unittest.main()
