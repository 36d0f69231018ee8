"""
Utility functions for the timecard application.
Contains formatting helpers shared by the API routes.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Dict

from core.models import WorkDaySummary
from core.time_utils import format_duration, format_hours_decimal, ms_to_hours

logger = logging.getLogger(__name__)


def human_date(value: date | datetime | None) -> str:
    """Format a date or datetime as dd/mm/yyyy."""
    if value is None:
        return "-"
    return value.strftime("%d/%m/%Y")


def format_summary_durations(summary: WorkDaySummary) -> Dict[str, str]:
    """Render every bucket of a summary as 'HH:MM:SS', keyed like to_dict()."""
    data = summary.to_dict()
    return {
        key: format_duration(value)
        for key, value in data.items()
        if key.endswith("Ms")
    }


def format_summary_hours(summary: WorkDaySummary) -> Dict[str, str]:
    """Render every bucket of a summary as signed decimal-hours 'HH:MM'."""
    data = summary.to_dict()
    return {
        key[:-2] + "Hours": format_hours_decimal(ms_to_hours(value))
        for key, value in data.items()
        if key.endswith("Ms")
    }
