"""
Work-time classification engine for the timecard application.

Cuts each raw work interval at the night-window and shift-end boundaries,
classifies every chunk into standard, excess, null or overtime time, then
folds manual entries and the automatic break into the day summary.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, List, Optional, Sequence, Tuple

from core.constants import (
    HOLIDAY_LEAVE_TYPES,
    OVERTIME_BUCKETS,
    POST_SHIFT_TOLERANCE_MS,
    SUNDAY,
)
from core.models import (
    DayInfo,
    LegacyOvertimeTag,
    ManualOvertimeEntry,
    Shift,
    WorkDaySummary,
    WorkIntervalSummary,
    WorkSettings,
)
from core.segments import WorkInterval
from core.shifts import find_shift, resolve_shift_bounds
from core.time_utils import at_hour, duration_ms, hours_to_ms, local_hour, minutes_to_ms, to_utc

logger = logging.getLogger(__name__)


# =============================================================================
# Day-level classification inputs
# =============================================================================

@dataclass(frozen=True)
class DayContext:
    """
    Everything about a day that does not change from one interval to the next.

    Instants are stored in UTC when the day is timezone-aware; tz is the zone
    whose wall clock decides night hours.
    """
    day: date
    is_holiday: bool
    night_start_hour: int
    night_end_hour: int
    night_wraps: bool
    night_start: datetime
    night_end: datetime
    shift: Optional[Shift] = None
    shift_end: Optional[datetime] = None
    standard_floor: Optional[datetime] = None
    post_shift_overtime: bool = False
    tz: Optional[tzinfo] = None


def is_night_hour(hour: int, night_start_hour: int, night_end_hour: int) -> bool:
    """Check whether a clock hour falls in the night window (which may wrap midnight)."""
    if night_end_hour < night_start_hour:
        return hour >= night_start_hour or hour < night_end_hour
    return night_start_hour <= hour < night_end_hour


def is_holiday_day(day: date, day_info: Optional[DayInfo], settings: WorkSettings) -> bool:
    """
    A day is a holiday when it is a Sunday, or when it carries holiday leave
    and holidays are configured to count as overtime.
    """
    leave = day_info.leave if day_info else None
    holiday_leave = leave is not None and leave.type in HOLIDAY_LEAVE_TYPES
    return (holiday_leave and settings.treat_holiday_as_overtime) or day.weekday() == SUNDAY


def standard_budget_ms(settings: WorkSettings, day_info: Optional[DayInfo]) -> int:
    """Standard time available for the day, reduced by partial-day leave and floored at zero."""
    budget = hours_to_ms(settings.standard_day_hours)
    leave = day_info.leave if day_info else None
    if leave is not None and leave.is_partial:
        budget -= hours_to_ms(leave.hours)
    return max(0, budget)


def post_shift_ms(intervals: Iterable[WorkInterval], shift_end: datetime) -> int:
    """Total time worked after the shift end, across all intervals."""
    total = 0
    shift_end = to_utc(shift_end)
    for interval in intervals:
        end = to_utc(interval.end)
        post_start = max(to_utc(interval.start), shift_end)
        if end > post_start:
            total += duration_ms(post_start, end)
    return total


def build_day_context(
    day: date,
    intervals: Sequence[WorkInterval],
    settings: WorkSettings,
    day_info: Optional[DayInfo] = None,
    tz: Optional[tzinfo] = None
) -> DayContext:
    """Resolve night window, shift bounds and the standard window floor for a day."""
    night_start = at_hour(day, settings.night_time_start_hour, tz)
    night_end = at_hour(day, settings.night_time_end_hour, tz)
    if settings.night_wraps_midnight:
        night_end += timedelta(days=1)
    night_start, night_end = to_utc(night_start), to_utc(night_end)

    shift = find_shift(day_info.shift if day_info else None, settings.shifts)
    shift_start = shift_end = standard_floor = None
    post_shift_overtime = False

    if shift is not None:
        shift_start, shift_end = (
            to_utc(bound) if bound is not None else None
            for bound in resolve_shift_bounds(day, shift, tz)
        )
        standard_floor = shift_start

        # A shift longer than the standard day keeps its standard block at the
        # end of the shift; earlier work inside the shift is null time.
        standard_day = timedelta(milliseconds=hours_to_ms(settings.standard_day_hours))
        if shift_start is not None and shift_end is not None and shift_end - shift_start > standard_day:
            standard_floor = shift_end - standard_day

        if shift_end is not None:
            overflow = post_shift_ms(intervals, shift_end)
            post_shift_overtime = overflow > POST_SHIFT_TOLERANCE_MS
            logger.debug(f"{day}: {overflow} ms after shift end, overtime={post_shift_overtime}")
    elif day_info and day_info.shift:
        logger.debug(f"{day}: shift {day_info.shift!r} not in settings, ignoring")

    return DayContext(
        day=day,
        is_holiday=is_holiday_day(day, day_info, settings),
        night_start_hour=settings.night_time_start_hour,
        night_end_hour=settings.night_time_end_hour,
        night_wraps=settings.night_wraps_midnight,
        night_start=night_start,
        night_end=night_end,
        shift=shift,
        shift_end=shift_end,
        standard_floor=standard_floor,
        post_shift_overtime=post_shift_overtime,
        tz=tz,
    )


# =============================================================================
# Interval segmentation
# =============================================================================

def _breakpoints(effective_start: datetime, end: datetime, ctx: DayContext) -> List[datetime]:
    points = {effective_start, end}
    candidates = [ctx.night_start, ctx.night_end]
    if ctx.shift_end is not None:
        candidates.append(ctx.shift_end)
    for point in candidates:
        if effective_start < point < end:
            points.add(point)
    return sorted(points)


def segment_interval(
    interval: WorkInterval,
    ctx: DayContext,
    remaining_standard_ms: int
) -> Tuple[WorkIntervalSummary, int]:
    """
    Classify one raw interval.

    Args:
        interval: The raw clock-in/clock-out pair
        ctx: Day-level context from build_day_context
        remaining_standard_ms: Standard budget left before this interval

    Returns:
        (interval summary, standard budget left after this interval)
    """
    summary = WorkIntervalSummary(
        start=interval.start,
        end=interval.end,
        closing_entry_id=interval.closing_entry_id,
        total_work_ms=duration_ms(interval.start, interval.end),
    )

    start, end = to_utc(interval.start), to_utc(interval.end)
    effective_start = start
    if ctx.standard_floor is not None:
        effective_start = max(start, ctx.standard_floor)
    # Null time never exceeds the interval itself
    summary.null_hours_ms = max(0, duration_ms(start, min(effective_start, end)))

    if end <= effective_start:
        return summary, remaining_standard_ms

    points = _breakpoints(effective_start, end, ctx)
    for chunk_start, chunk_end in zip(points, points[1:]):
        chunk_ms = duration_ms(chunk_start, chunk_end)
        if chunk_ms <= 0:
            continue

        midpoint = chunk_start + (chunk_end - chunk_start) / 2
        hour = local_hour(midpoint, ctx.tz)
        is_night = is_night_hour(hour, ctx.night_start_hour, ctx.night_end_hour)
        overtime_bucket = OVERTIME_BUCKETS[(ctx.is_holiday, is_night)]
        is_post_shift = ctx.shift_end is not None and midpoint >= ctx.shift_end

        if is_post_shift:
            bucket = overtime_bucket if ctx.post_shift_overtime else "excess_hours_ms"
            setattr(summary, bucket, getattr(summary, bucket) + chunk_ms)
            continue

        standard_part = min(chunk_ms, remaining_standard_ms)
        extra_part = chunk_ms - standard_part
        summary.standard_work_ms += standard_part
        remaining_standard_ms -= standard_part

        if extra_part > 0:
            bucket = "excess_hours_ms" if ctx.shift is not None else overtime_bucket
            setattr(summary, bucket, getattr(summary, bucket) + extra_part)

    return summary, remaining_standard_ms


def classify_intervals(
    intervals: Iterable[WorkInterval],
    ctx: DayContext,
    standard_budget: int
) -> List[WorkIntervalSummary]:
    """Fold segment_interval over chronological intervals, threading the standard budget."""
    summaries = []
    remaining = standard_budget
    for interval in intervals:
        summary, remaining = segment_interval(interval, ctx, remaining)
        summaries.append(summary)
    return summaries


# =============================================================================
# Day aggregation
# =============================================================================

def manual_entry_bucket(entry: ManualOvertimeEntry) -> str:
    """Catalog codes and unrecognized types are excess hours; legacy tags map to overtime."""
    if isinstance(entry.type, LegacyOvertimeTag):
        return entry.type.bucket
    return "excess_hours_ms"


def aggregate_intervals(intervals: Iterable[WorkIntervalSummary]) -> WorkDaySummary:
    return WorkDaySummary.sum_of(intervals)


def fold_manual_entries(
    summary: WorkDaySummary,
    manual_entries: Iterable[ManualOvertimeEntry]
) -> WorkDaySummary:
    """Return a copy of summary with every manual entry added to total and its bucket."""
    result = replace(summary)
    for entry in manual_entries:
        bucket = manual_entry_bucket(entry)
        result.total_work_ms += entry.duration_ms
        setattr(result, bucket, getattr(result, bucket) + entry.duration_ms)
    return result


def apply_auto_break(summary: WorkDaySummary, settings: WorkSettings) -> WorkDaySummary:
    """
    Deduct the unpaid break once the day passes the configured threshold.

    The break comes out of standard time only, and never more than there is.
    """
    if not settings.deduct_auto_break:
        return summary
    if summary.total_work_ms <= hours_to_ms(settings.auto_break_threshold_hours):
        return summary

    deducted = min(summary.standard_work_ms, minutes_to_ms(settings.auto_break_minutes))
    logger.debug(f"Deducting {deducted} ms automatic break")
    return replace(
        summary,
        standard_work_ms=summary.standard_work_ms - deducted,
        total_work_ms=summary.total_work_ms - deducted,
    )
