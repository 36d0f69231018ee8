"""
Domain types for the timecard engine.

Inputs (entries, settings, day metadata, manual adjustments) are frozen
dataclasses; the two summary types are plain dataclasses filled in by
core.work_calculator and handed to callers as read-only values.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple, Union

from core.constants import (
    BUCKET_FIELDS,
    CATALOG_CODE_PREFIX,
    ENTRY_IN,
    ENTRY_OUT,
)


# =============================================================================
# Inputs
# =============================================================================

@dataclass(frozen=True)
class TimeEntry:
    """A single clock punch."""
    id: str
    timestamp: datetime
    type: str  # "in" | "out"

    @property
    def is_in(self) -> bool:
        return self.type == ENTRY_IN

    @property
    def is_out(self) -> bool:
        return self.type == ENTRY_OUT


@dataclass(frozen=True)
class Shift:
    """
    A scheduled shift. end_hour < start_hour means the shift ends the next day.
    Either bound may be None (e.g. a rest day).
    """
    id: str
    name: str
    start_hour: Optional[int] = None
    end_hour: Optional[int] = None
    text_color: str = ""
    bg_color: str = ""


@dataclass(frozen=True)
class WorkSettings:
    standard_day_hours: float
    night_time_start_hour: int = 22
    night_time_end_hour: int = 6
    shifts: Tuple[Shift, ...] = ()
    treat_holiday_as_overtime: bool = True
    deduct_auto_break: bool = False
    auto_break_threshold_hours: float = 6
    auto_break_minutes: int = 30

    @property
    def night_wraps_midnight(self) -> bool:
        return self.night_time_end_hour < self.night_time_start_hour


@dataclass(frozen=True)
class Leave:
    """Leave booked on a day. hours=None means a full-day leave."""
    type: str
    hours: Optional[float] = None

    @property
    def is_partial(self) -> bool:
        return bool(self.hours) and self.hours > 0


@dataclass(frozen=True)
class DayInfo:
    leave: Optional[Leave] = None
    shift: Optional[str] = None


class LegacyOvertimeTag(str, Enum):
    """Overtime kinds recorded before catalog codes were introduced."""
    DIURNAL = "diurnal"
    NOCTURNAL = "nocturnal"
    HOLIDAY = "holiday"
    NOCTURNAL_HOLIDAY = "nocturnal-holiday"

    @property
    def bucket(self) -> str:
        """Name of the summary field this tag is booked to."""
        return f"overtime_{self.value.replace('-', '_')}_ms"


@dataclass(frozen=True)
class CatalogCode:
    """A status-catalog code, written as 'code-<N>' in stored data."""
    code: int

    def __str__(self) -> str:
        return f"{CATALOG_CODE_PREFIX}{self.code}"


# A raw str is an unrecognized type and is booked as excess hours
OvertimeType = Union[LegacyOvertimeTag, CatalogCode, str]


def parse_overtime_type(raw: Any) -> OvertimeType:
    """Parse a stored overtime type ('diurnal', 'code-2041', ...) into its tagged form."""
    if isinstance(raw, (LegacyOvertimeTag, CatalogCode)):
        return raw
    value = (raw or "").strip()
    if value.startswith(CATALOG_CODE_PREFIX):
        try:
            return CatalogCode(int(value[len(CATALOG_CODE_PREFIX):]))
        except ValueError:
            return value
    try:
        return LegacyOvertimeTag(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class ManualOvertimeEntry:
    """
    Manually entered overtime or leave time for a day.

    used_entry_ids lists the clock punches this entry already justifies;
    those punches are left out of the automatic calculation.
    """
    id: str
    duration_ms: int
    type: OvertimeType
    note: str = ""
    used_entry_ids: FrozenSet[str] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "type", parse_overtime_type(self.type))
        object.__setattr__(self, "used_entry_ids", frozenset(self.used_entry_ids or ()))


# =============================================================================
# Derived summaries
# =============================================================================

def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass
class WorkDaySummary:
    """Worked time for a day, split into buckets. All values in milliseconds."""
    total_work_ms: int = 0
    null_hours_ms: int = 0
    standard_work_ms: int = 0
    excess_hours_ms: int = 0
    overtime_diurnal_ms: int = 0
    overtime_nocturnal_ms: int = 0
    overtime_holiday_ms: int = 0
    overtime_nocturnal_holiday_ms: int = 0

    @staticmethod
    def bucket_names() -> Tuple[str, ...]:
        return BUCKET_FIELDS

    def bucket_total(self) -> int:
        """Sum of every bucket; equals total_work_ms for an interval."""
        return sum(getattr(self, name) for name in BUCKET_FIELDS)

    def add_buckets(self, other: WorkDaySummary) -> None:
        self.total_work_ms += other.total_work_ms
        for name in BUCKET_FIELDS:
            setattr(self, name, getattr(self, name) + getattr(other, name))

    @classmethod
    def sum_of(cls, summaries: Iterable[WorkDaySummary]) -> WorkDaySummary:
        total = cls()
        for summary in summaries:
            total.add_buckets(summary)
        return total

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            result[_camel(f.name)] = value
        return result


@dataclass
class WorkIntervalSummary(WorkDaySummary):
    """Classification of one clock-in/clock-out pair."""
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    closing_entry_id: Optional[str] = field(default=None)
