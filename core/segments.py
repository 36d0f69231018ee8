"""
Work interval building for the timecard engine.
Pairs sorted clock punches into raw work intervals, leaving out the punches
already justified by manual overtime entries.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, List, NamedTuple, Optional, Set

from core.models import ManualOvertimeEntry, TimeEntry
from core.time_utils import to_utc

logger = logging.getLogger(__name__)


class WorkInterval(NamedTuple):
    """A raw clock-in/clock-out pair."""
    start: datetime
    end: datetime
    closing_entry_id: Optional[str]


def collect_used_entry_ids(manual_entries: Iterable[ManualOvertimeEntry]) -> Set[str]:
    """Union of every punch id already justified by a manual entry."""
    used: Set[str] = set()
    for entry in manual_entries:
        used.update(entry.used_entry_ids)
    return used


def build_work_intervals(
    entries: Iterable[TimeEntry],
    used_entry_ids: Optional[Set[str]] = None
) -> List[WorkInterval]:
    """
    Build chronological work intervals from clock punches.

    Punches are sorted by instant and read in pairs (0,1), (2,3), ...
    A pair counts only when it is an 'in' followed by an 'out'; any other pair
    is skipped, as is an unpaired trailing punch. A pair touching a used id is
    dropped entirely.

    Args:
        entries: Punches for the day, in any order
        used_entry_ids: Punch ids already covered by manual entries

    Returns:
        List of WorkInterval in chronological order
    """
    used = used_entry_ids or set()
    sorted_entries = sorted(entries, key=lambda e: to_utc(e.timestamp))
    intervals: List[WorkInterval] = []

    for i in range(0, len(sorted_entries) - 1, 2):
        opening, closing = sorted_entries[i], sorted_entries[i + 1]

        if not (opening.is_in and closing.is_out):
            logger.debug(f"Skipping unmatched pair {opening.id}/{closing.id} ({opening.type}, {closing.type})")
            continue

        if opening.id in used or closing.id in used:
            logger.debug(f"Pair {opening.id}/{closing.id} already justified manually")
            continue

        intervals.append(WorkInterval(opening.timestamp, closing.timestamp, closing.id))

    return intervals
