"""
Core business logic for the timecard application.
Contains the public API for computing a day's work summary.

This module re-exports the building blocks for callers that only need one step.
New code may also import directly from the submodules:
- core.time_utils: Calendar arithmetic and duration formatting
- core.segments: Work interval building
- core.work_calculator: Interval classification and day aggregation
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional, Tuple

from core.models import (
    DayInfo,
    ManualOvertimeEntry,
    TimeEntry,
    WorkDaySummary,
    WorkIntervalSummary,
    WorkSettings,
)

# =============================================================================
# Re-exports from submodules
# =============================================================================

from core.segments import (
    WorkInterval,
    build_work_intervals,
    collect_used_entry_ids,
)
from core.work_calculator import (
    DayContext,
    aggregate_intervals,
    apply_auto_break,
    build_day_context,
    classify_intervals,
    fold_manual_entries,
    is_holiday_day,
    is_night_hour,
    segment_interval,
    standard_budget_ms,
)

logger = logging.getLogger(__name__)


def calculate_work_summary(
    day: date,
    entries: Iterable[TimeEntry],
    work_settings: WorkSettings,
    day_info: Optional[DayInfo] = None,
    next_day_info: Optional[DayInfo] = None,
    manual_overtime_entries: Iterable[ManualOvertimeEntry] = (),
) -> Tuple[WorkDaySummary, List[WorkIntervalSummary]]:
    """
    Compute the categorized work-time breakdown for one calendar day.

    Timestamps must be either all naive or all timezone-aware; mixing the two
    raises TypeError when the punches are sorted. Aware timestamps are measured
    in elapsed time, and night and shift hours are read on the wall clock of
    the first interval's timezone.

    Args:
        day: The calendar day being summarized
        entries: Clock punches for the day, in any order (all naive or all aware)
        work_settings: Standard day, night window, shifts and break rules
        day_info: Leave and scheduled shift for the day
        next_day_info: Reserved; accepted and currently unused
        manual_overtime_entries: Manual overtime/leave entries for the day

    Returns:
        (day summary, per-interval summaries in chronological order)
    """
    entries = list(entries or ())
    manual_entries = list(manual_overtime_entries or ())

    if not entries and not manual_entries:
        return WorkDaySummary(), []

    used_ids = collect_used_entry_ids(manual_entries)
    work_intervals = build_work_intervals(entries, used_ids)

    tz = work_intervals[0].start.tzinfo if work_intervals else None
    ctx = build_day_context(day, work_intervals, work_settings, day_info, tz)

    intervals = classify_intervals(work_intervals, ctx, standard_budget_ms(work_settings, day_info))

    summary = aggregate_intervals(intervals)
    summary = fold_manual_entries(summary, manual_entries)
    summary = apply_auto_break(summary, work_settings)

    logger.debug(
        f"{day}: {len(intervals)} intervals from {len(entries)} entries, "
        f"{len(manual_entries)} manual entries, total {summary.total_work_ms} ms"
    )
    return summary, intervals
