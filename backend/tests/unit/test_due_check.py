"""
Unit tests for notifications/due_check.py

Covers hour and weekday conversion into the subscriber's zone, including
rollover across midnight in both directions.
"""

import unittest
from datetime import datetime, timedelta, timezone

from config.timezones import TIMEZONE_OFFSETS
from models.subscriber import DeliverySchedule
from notifications.due_check import (
    is_due,
    is_due_at,
    local_day,
    local_hour,
    parse_delivery_hour,
    utc_hour_and_day,
)

NEW_YORK = "America/New_York"  # -5
TOKYO = "Asia/Tokyo"  # +9


class TestHourlySchedules(unittest.TestCase):
    """Hourly subscribers are due on every run."""

    def test_due_for_every_hour_and_zone(self):
        for zone in list(TIMEZONE_OFFSETS) + ["Mars/Olympus_Mons", ""]:
            for hour in range(24):
                for day in range(7):
                    self.assertTrue(
                        is_due_at(hour, day, "hourly", "08:00", None, zone),
                        f"hourly not due at hour={hour} day={day} zone={zone}",
                    )

    def test_malformed_time_ignored_for_hourly(self):
        """Hourly schedules never parse delivery_time."""
        self.assertTrue(is_due_at(3, 2, "hourly", "not-a-time", None, NEW_YORK))


class TestDailySchedules(unittest.TestCase):
    """Daily subscribers are due when the local hour matches."""

    def test_due_only_at_matching_utc_hour(self):
        """08:00 in a -5 zone is due iff the UTC hour is 13."""
        for hour in range(24):
            with self.subTest(hour=hour):
                self.assertEqual(
                    is_due_at(hour, 3, "daily", "08:00", None, NEW_YORK),
                    hour == 13,
                )

    def test_minutes_are_ignored(self):
        self.assertTrue(is_due_at(13, 3, "daily", "08:45", None, NEW_YORK))

    def test_unknown_timezone_treated_as_utc(self):
        self.assertTrue(is_due_at(8, 3, "daily", "08:00", None, "Nowhere/Special"))
        self.assertFalse(is_due_at(13, 3, "daily", "08:00", None, "Nowhere/Special"))

    def test_missing_timezone_treated_as_utc(self):
        self.assertTrue(is_due_at(8, 3, "daily", "08:00", None, None))
        self.assertFalse(is_due_at(13, 3, "daily", "08:00", None, None))

    def test_positive_offset_wraps_past_midnight(self):
        """UTC 22:00 is 07:00 the next day in Tokyo."""
        self.assertTrue(is_due_at(22, 3, "daily", "07:00", None, TOKYO))

    def test_malformed_time_raises(self):
        with self.assertRaises(ValueError):
            is_due_at(13, 3, "daily", "eight", None, NEW_YORK)


class TestWeeklySchedules(unittest.TestCase):
    """Weekly subscribers are due when local hour and weekday both match."""

    def test_due_on_matching_local_day_and_hour(self):
        """Monday 08:00 in a -5 zone is Monday 13:00 UTC."""
        self.assertTrue(is_due_at(13, 1, "weekly", "08:00", 1, NEW_YORK))

    def test_negative_offset_rolls_back_a_day(self):
        """Tuesday 02:00 UTC is Monday 21:00 in New York: not due at 08:00."""
        self.assertEqual(local_hour(2, -5), 21)
        self.assertEqual(local_day(2, 2, -5), 1)
        self.assertFalse(is_due_at(2, 2, "weekly", "08:00", 1, NEW_YORK))

    def test_positive_offset_rolls_forward_a_day(self):
        """Saturday 16:00 UTC is Sunday 01:00 in Tokyo."""
        self.assertEqual(local_day(6, 16, 9), 0)
        self.assertTrue(is_due_at(16, 6, "weekly", "01:00", 0, TOKYO))

    def test_wrong_day_not_due(self):
        self.assertFalse(is_due_at(13, 2, "weekly", "08:00", 1, NEW_YORK))

    def test_missing_day_defaults_to_sunday(self):
        self.assertTrue(is_due_at(13, 0, "weekly", "08:00", None, NEW_YORK))
        self.assertFalse(is_due_at(13, 1, "weekly", "08:00", None, NEW_YORK))


class TestUnknownFrequency(unittest.TestCase):
    def test_never_due(self):
        for hour in range(24):
            self.assertFalse(is_due_at(hour, 0, "monthly", "08:00", None, NEW_YORK))


class TestHelpers(unittest.TestCase):
    def test_parse_delivery_hour(self):
        self.assertEqual(parse_delivery_hour("08:00"), 8)
        self.assertEqual(parse_delivery_hour("23:59"), 23)
        self.assertEqual(parse_delivery_hour("7:30"), 7)

    def test_local_hour_is_never_negative(self):
        for hour in range(24):
            for offset in range(-12, 15):
                self.assertIn(local_hour(hour, offset), range(24))

    def test_utc_hour_and_day_sunday_is_zero(self):
        # 2026-01-04 is a Sunday
        self.assertEqual(utc_hour_and_day(datetime(2026, 1, 4, 9, 30)), (9, 0))
        self.assertEqual(utc_hour_and_day(datetime(2026, 1, 10, 23, 0)), (23, 6))

    def test_utc_hour_and_day_converts_aware_datetimes(self):
        eastern = timezone(timedelta(hours=-5))
        # Sunday 21:00 in -5 is Monday 02:00 UTC
        now = datetime(2026, 1, 4, 21, 0, tzinfo=eastern)
        self.assertEqual(utc_hour_and_day(now), (2, 1))


class TestIsDue(unittest.TestCase):
    """is_due() wraps is_due_at() for a DeliverySchedule and an instant."""

    def test_daily_schedule(self):
        schedule = DeliverySchedule(
            frequency="daily", delivery_time="08:00", timezone=NEW_YORK
        )
        self.assertTrue(is_due(schedule, datetime(2026, 3, 2, 13, 0, tzinfo=timezone.utc)))
        self.assertFalse(is_due(schedule, datetime(2026, 3, 2, 14, 0, tzinfo=timezone.utc)))

    def test_weekly_schedule(self):
        schedule = DeliverySchedule(
            frequency="weekly", delivery_time="01:00", delivery_day=0, timezone=TOKYO
        )
        # 2026-01-10 is a Saturday
        self.assertTrue(is_due(schedule, datetime(2026, 1, 10, 16, 0, tzinfo=timezone.utc)))


if __name__ == "__main__":
    unittest.main()
