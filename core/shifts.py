"""
Shift catalog lookup for the timecard engine.
Resolves a shift id against the configured shifts and anchors its bounds on a day.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Optional, Tuple

from core.models import Shift
from core.time_utils import at_hour

logger = logging.getLogger(__name__)

_BG_COLOR_PATTERN = re.compile(r"bg-([a-z]+)-(\d+)")
DEFAULT_BORDER_COLOR = "border-gray-400"


@dataclass(frozen=True)
class ShiftDetails:
    """A shift enriched with the display values calendar views need."""
    shift: Shift
    label: str
    border_color: str

    def to_dict(self) -> dict:
        return {
            "id": self.shift.id,
            "name": self.shift.name,
            "startHour": self.shift.start_hour,
            "endHour": self.shift.end_hour,
            "textColor": self.shift.text_color,
            "bgColor": self.shift.bg_color,
            "label": self.label,
            "borderColor": self.border_color,
        }


def find_shift(shift_id: Optional[str], shifts: Iterable[Shift]) -> Optional[Shift]:
    if not shift_id:
        return None
    return next((s for s in shifts if s.id == shift_id), None)


def border_color_for(bg_color: str) -> str:
    """Derive 'border-<color>-400' from a 'bg-<color>-<shade>' class."""
    match = _BG_COLOR_PATTERN.search(bg_color or "")
    if not match:
        return DEFAULT_BORDER_COLOR
    return f"border-{match.group(1)}-400"


def get_shift_details(shift_id: Optional[str], shifts: Iterable[Shift]) -> Optional[ShiftDetails]:
    shift = find_shift(shift_id, shifts)
    if shift is None:
        return None
    return ShiftDetails(shift=shift, label=shift.name, border_color=border_color_for(shift.bg_color))


def resolve_shift_bounds(
    day: date,
    shift: Shift,
    tz: Optional[tzinfo] = None
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """
    Anchor a shift's start and end hours on the given day.

    An end hour before the start hour belongs to the next calendar day.
    A missing bound yields None for that bound only.
    """
    shift_start = at_hour(day, shift.start_hour, tz) if shift.start_hour is not None else None

    shift_end = None
    if shift.end_hour is not None:
        end_day = day
        if shift.start_hour is not None and shift.end_hour < shift.start_hour:
            end_day = day + timedelta(days=1)
        shift_end = at_hour(end_day, shift.end_hour, tz)

    return shift_start, shift_end
