"""
Unit tests for calendar primitives and duration formatting.
"""

import unittest
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.time_utils import (
    add_days,
    add_months,
    add_years,
    at_hour,
    duration_ms,
    format_date_key,
    format_duration,
    format_hours_decimal,
    hours_to_ms,
    is_same_day,
    is_same_month,
    local_hour,
    minutes_to_ms,
    ms_to_hours,
    parse_date_key,
    start_of_month,
    start_of_week,
    to_utc,
)


class TestDateKeys(unittest.TestCase):

    def test_format_date_key_pads(self):
        self.assertEqual(format_date_key(date(2024, 3, 5)), "2024-03-05")
        self.assertEqual(format_date_key(datetime(2024, 12, 31, 23, 59)), "2024-12-31")

    def test_parse_date_key(self):
        self.assertEqual(parse_date_key("2024-02-29"), date(2024, 2, 29))


class TestCalendarArithmetic(unittest.TestCase):

    def test_add_days_crosses_month(self):
        self.assertEqual(add_days(date(2024, 2, 28), 2), date(2024, 3, 1))
        self.assertEqual(add_days(date(2024, 3, 1), -1), date(2024, 2, 29))

    def test_add_months_clamps_to_month_end(self):
        self.assertEqual(add_months(date(2024, 1, 31), 1), date(2024, 2, 29))
        self.assertEqual(add_months(date(2024, 3, 31), -1), date(2024, 2, 29))

    def test_add_months_across_years(self):
        self.assertEqual(add_months(date(2024, 11, 15), 3), date(2025, 2, 15))
        self.assertEqual(add_months(date(2024, 1, 15), -1), date(2023, 12, 15))

    def test_add_years_from_leap_day(self):
        self.assertEqual(add_years(date(2024, 2, 29), 1), date(2025, 2, 28))

    def test_same_day_and_month(self):
        self.assertTrue(is_same_day(datetime(2024, 3, 13, 8), date(2024, 3, 13)))
        self.assertFalse(is_same_day(date(2024, 3, 13), date(2024, 3, 14)))
        self.assertTrue(is_same_month(date(2024, 3, 1), date(2024, 3, 31)))
        self.assertFalse(is_same_month(date(2024, 3, 1), date(2023, 3, 1)))

    def test_start_of_month(self):
        self.assertEqual(start_of_month(date(2024, 3, 13)), date(2024, 3, 1))

    def test_start_of_week_is_monday(self):
        self.assertEqual(start_of_week(date(2024, 3, 13)), date(2024, 3, 11))
        # Sunday belongs to the week that started the previous Monday
        self.assertEqual(start_of_week(date(2024, 3, 10)), date(2024, 3, 4))
        self.assertEqual(start_of_week(date(2024, 3, 11)), date(2024, 3, 11))

    def test_at_hour(self):
        self.assertEqual(at_hour(date(2024, 3, 13), 22), datetime(2024, 3, 13, 22))


class TestDurations(unittest.TestCase):

    def test_conversions(self):
        self.assertEqual(hours_to_ms(1.5), 5_400_000)
        self.assertEqual(minutes_to_ms(30), 1_800_000)
        self.assertEqual(ms_to_hours(9_000_000), 2.5)
        self.assertEqual(duration_ms(datetime(2024, 3, 13, 9), datetime(2024, 3, 13, 9, 0, 1)), 1000)

    def test_duration_across_dst_changes(self):
        """Aware durations count elapsed time, not wall-clock difference."""
        rome = ZoneInfo("Europe/Rome")
        # 01:00 CET -> 05:00 CEST is three real hours
        self.assertEqual(
            duration_ms(datetime(2026, 3, 29, 1, tzinfo=rome), datetime(2026, 3, 29, 5, tzinfo=rome)),
            3 * 3_600_000,
        )
        # 02:30 CEST -> 02:30 CET (repeated hour) is one real hour
        self.assertEqual(
            duration_ms(
                datetime(2026, 10, 25, 2, 30, tzinfo=rome),
                datetime(2026, 10, 25, 2, 30, fold=1, tzinfo=rome),
            ),
            3_600_000,
        )

    def test_to_utc_and_local_hour(self):
        rome = ZoneInfo("Europe/Rome")
        moment = datetime(2026, 10, 25, 2, 30, fold=1, tzinfo=rome)

        self.assertEqual(to_utc(moment), datetime(2026, 10, 25, 1, 30, tzinfo=timezone.utc))
        self.assertEqual(to_utc(datetime(2024, 3, 13, 9)), datetime(2024, 3, 13, 9))
        self.assertEqual(local_hour(datetime(2026, 3, 29, 1, 30, tzinfo=timezone.utc), rome), 3)
        self.assertEqual(local_hour(datetime(2024, 3, 13, 9)), 9)

    def test_format_duration(self):
        self.assertEqual(format_duration(0), "00:00:00")
        self.assertEqual(format_duration(3_723_000), "01:02:03")
        self.assertEqual(format_duration(36 * 3_600_000), "36:00:00")
        self.assertEqual(format_duration(-5000), "00:00:00")

    def test_format_hours_decimal(self):
        self.assertEqual(format_hours_decimal(18.5), "18:30")
        self.assertEqual(format_hours_decimal(-2.25), "-02:15")
        self.assertEqual(format_hours_decimal(0), "00:00")
        self.assertEqual(format_hours_decimal(float("nan")), "00:00")

    def test_format_hours_decimal_rounds_up_to_next_hour(self):
        self.assertEqual(format_hours_decimal(1.9999), "02:00")


if __name__ == '__main__':
    unittest.main()
