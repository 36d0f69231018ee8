"""
Day summary routes for the timecard application.
Converts the JSON payload into domain objects and runs the day calculation.
"""
from __future__ import annotations

import logging
import time
from collections import Counter
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from config import config
from core.logic import calculate_work_summary
from core.models import (
    DayInfo,
    Leave,
    ManualOvertimeEntry,
    Shift,
    TimeEntry,
    WorkSettings,
)
from core.status_catalog import get_status_label
from utils.error_handler import ValidationError
from utils.utils import format_summary_durations, format_summary_hours, human_date

logger = logging.getLogger(__name__)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TimeEntryIn(CamelModel):
    id: str
    timestamp: datetime
    type: Literal["in", "out"]


class ShiftIn(CamelModel):
    id: str
    name: str = ""
    start_hour: Optional[int] = Field(default=None, ge=0, le=23)
    end_hour: Optional[int] = Field(default=None, ge=0, le=23)
    text_color: str = ""
    bg_color: str = ""


class WorkSettingsIn(CamelModel):
    standard_day_hours: float
    night_time_start_hour: int = Field(default=22, ge=0, le=23)
    night_time_end_hour: int = Field(default=6, ge=0, le=23)
    shifts: List[ShiftIn] = []
    treat_holiday_as_overtime: bool = True
    deduct_auto_break: bool = False
    auto_break_threshold_hours: float = 6
    auto_break_minutes: int = 30


class LeaveIn(CamelModel):
    type: str
    hours: Optional[float] = None


class DayInfoIn(CamelModel):
    leave: Optional[LeaveIn] = None
    shift: Optional[str] = None


class ManualOvertimeEntryIn(CamelModel):
    id: str
    duration_ms: int
    type: str
    note: str = ""
    used_entry_ids: List[str] = []


class DaySummaryRequest(CamelModel):
    day: date
    entries: List[TimeEntryIn] = []
    work_settings: Optional[WorkSettingsIn] = None
    day_info: Optional[DayInfoIn] = None
    next_day_info: Optional[DayInfoIn] = None
    manual_overtime_entries: List[ManualOvertimeEntryIn] = []


# =============================================================================
# Payload conversion
# =============================================================================

def _to_local(ts: datetime) -> datetime:
    """Interpret naive timestamps as local time; convert aware ones to local time."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=config.LOCAL_TZ)
    return ts.astimezone(config.LOCAL_TZ)


def _to_work_settings(settings: Optional[WorkSettingsIn]) -> WorkSettings:
    if settings is None:
        return config.default_work_settings()
    return WorkSettings(
        standard_day_hours=settings.standard_day_hours,
        night_time_start_hour=settings.night_time_start_hour,
        night_time_end_hour=settings.night_time_end_hour,
        shifts=tuple(
            Shift(s.id, s.name, s.start_hour, s.end_hour, s.text_color, s.bg_color)
            for s in settings.shifts
        ),
        treat_holiday_as_overtime=settings.treat_holiday_as_overtime,
        deduct_auto_break=settings.deduct_auto_break,
        auto_break_threshold_hours=settings.auto_break_threshold_hours,
        auto_break_minutes=settings.auto_break_minutes,
    )


def _to_day_info(info: Optional[DayInfoIn]) -> Optional[DayInfo]:
    if info is None:
        return None
    leave = Leave(info.leave.type, info.leave.hours) if info.leave else None
    return DayInfo(leave=leave, shift=info.shift)


def _leave_label(info: Optional[DayInfoIn]) -> Optional[str]:
    """Catalog description of the day's leave, if any."""
    if info is None or info.leave is None:
        return None
    return get_status_label(info.leave.type, config.status_catalog())


def _check_unique_ids(entries: List[TimeEntryIn]) -> None:
    counts = Counter(e.id for e in entries)
    duplicates = sorted(entry_id for entry_id, count in counts.items() if count > 1)
    if duplicates:
        raise ValidationError(
            "Duplicate time entry ids",
            details={'duplicate_ids': duplicates},
            user_message="Each time entry must have a unique id"
        )


# =============================================================================
# Route handler
# =============================================================================

def day_summary(payload: DaySummaryRequest) -> dict:
    """Compute the work summary for the requested day."""
    start_time = time.time()
    _check_unique_ids(payload.entries)

    entries = [TimeEntry(e.id, _to_local(e.timestamp), e.type) for e in payload.entries]
    manual_entries = [
        ManualOvertimeEntry(m.id, m.duration_ms, m.type, m.note, frozenset(m.used_entry_ids))
        for m in payload.manual_overtime_entries
    ]

    summary, intervals = calculate_work_summary(
        payload.day,
        entries,
        _to_work_settings(payload.work_settings),
        _to_day_info(payload.day_info),
        _to_day_info(payload.next_day_info),
        manual_entries,
    )

    logger.info(
        f"Day summary for {payload.day} ({len(entries)} entries, "
        f"{len(manual_entries)} manual) took {time.time() - start_time:.4f}s"
    )

    return {
        "day": payload.day.isoformat(),
        "summary": summary.to_dict(),
        "intervals": [interval.to_dict() for interval in intervals],
        "formatted": {
            "day": human_date(payload.day),
            "durations": format_summary_durations(summary),
            "hours": format_summary_hours(summary),
            "leave": _leave_label(payload.day_info),
        },
    }
