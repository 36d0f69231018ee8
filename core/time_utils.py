"""
Time utilities for the timecard engine.
Contains date-key conversion, calendar arithmetic, and duration formatting.
"""
from __future__ import annotations

import calendar
import logging
import math
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional

from core.constants import MS_PER_HOUR, MS_PER_MINUTE, MS_PER_SECOND

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

DATE_KEY_FORMAT = "%Y-%m-%d"

# Python's weekday() index
MONDAY = 0


# =============================================================================
# Millisecond Conversion
# =============================================================================

def hours_to_ms(hours: float) -> int:
    return round(hours * MS_PER_HOUR)


def minutes_to_ms(minutes: float) -> int:
    return round(minutes * MS_PER_MINUTE)


def ms_to_hours(ms: int) -> float:
    return ms / MS_PER_HOUR


def to_utc(moment: datetime) -> datetime:
    """
    Move an aware datetime to UTC; naive datetimes pass through unchanged.

    Aware datetimes sharing one tzinfo subtract and compare by wall clock,
    which is off by the DST shift on changeover days. In UTC they follow
    elapsed time.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc)


def local_hour(moment: datetime, tz: Optional[tzinfo] = None) -> int:
    """Wall-clock hour of a moment as seen in tz (or in its own tzinfo)."""
    if tz is not None and moment.tzinfo is not None:
        moment = moment.astimezone(tz)
    return moment.hour


def duration_ms(start: datetime, end: datetime) -> int:
    """Return elapsed end - start in whole milliseconds (negative if end precedes start)."""
    return (to_utc(end) - to_utc(start)) // timedelta(milliseconds=1)


# =============================================================================
# Date Keys
# =============================================================================

def format_date_key(day: date) -> str:
    """Format a date (or datetime, using its own wall-clock date) as 'YYYY-MM-DD'."""
    return day.strftime(DATE_KEY_FORMAT)


def parse_date_key(date_key: str) -> date:
    """Parse a 'YYYY-MM-DD' key into a date."""
    year, month, day = (int(part) for part in date_key.split("-"))
    return date(year, month, day)


# =============================================================================
# Calendar Arithmetic
# =============================================================================

def add_days(day: date, days: int) -> date:
    return day + timedelta(days=days)


def add_months(day: date, months: int) -> date:
    """Add months to a date; the day is clamped to the end of the target month."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))


def add_years(day: date, years: int) -> date:
    return add_months(day, 12 * years)


def is_same_day(first: date, second: date) -> bool:
    return (first.year, first.month, first.day) == (second.year, second.month, second.day)


def is_same_month(first: date, second: date) -> bool:
    return (first.year, first.month) == (second.year, second.month)


def start_of_month(day: date) -> date:
    return date(day.year, day.month, 1)


def start_of_week(day: date) -> date:
    """Return the Monday of the week containing the given date."""
    return day - timedelta(days=day.weekday() - MONDAY)


def at_hour(day: date, hour: int, tz: Optional[tzinfo] = None) -> datetime:
    """Anchor a whole clock hour on a calendar day."""
    return datetime.combine(day, time(hour), tzinfo=tz)


# =============================================================================
# Duration Formatting
# =============================================================================

def format_duration(ms: int) -> str:
    """Format milliseconds as 'HH:MM:SS'. Negative durations render as zero."""
    if ms < 0:
        ms = 0
    total_seconds = int(ms // MS_PER_SECOND)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_hours_decimal(decimal_hours: float) -> str:
    """
    Format decimal hours as 'HH:MM', keeping the sign.

    18.5 -> "18:30", -2.25 -> "-02:15". NaN is treated as zero.
    """
    if decimal_hours is None or math.isnan(decimal_hours):
        decimal_hours = 0.0
    sign = "-" if decimal_hours < 0 else ""
    abs_hours = abs(decimal_hours)
    hours = math.floor(abs_hours)
    minutes = round((abs_hours % 1) * 60)

    # Rounding can push the minutes up to a full hour
    if minutes == 60:
        return f"{sign}{hours + 1:02d}:00"
    return f"{sign}{hours:02d}:{minutes:02d}"
