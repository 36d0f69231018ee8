"""
Central constants for the timecard engine.
Leave codes, overtime tags, and tolerance values shared by:
- core/models.py
- core/work_calculator.py
- core/status_catalog.py
"""
from typing import Dict, FrozenSet

# =============================================================================
# Time Constants (in milliseconds)
# =============================================================================

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE

# Post-shift work up to this amount is excess, not overtime
POST_SHIFT_TOLERANCE_MS = 15 * MS_PER_MINUTE

# =============================================================================
# Entry Types
# =============================================================================

ENTRY_IN = "in"
ENTRY_OUT = "out"

# =============================================================================
# Leave / Status Codes
# =============================================================================

# Prefix of catalog-backed leave and overtime types, e.g. "code-15"
CATALOG_CODE_PREFIX = "code-"

HOLIDAY_LEAVE_TAG = "holiday"
HOLIDAY_LEAVE_CODE = 10
# Days tagged with either form count as holidays
HOLIDAY_LEAVE_TYPES: FrozenSet[str] = frozenset({
    HOLIDAY_LEAVE_TAG,
    f"{CATALOG_CODE_PREFIX}{HOLIDAY_LEAVE_CODE}",
})

# Leave names used before the status catalog existed
LEGACY_LEAVE_CODES: Dict[str, int] = {
    "vacation": 15,
    "comp-time": 8,
    HOLIDAY_LEAVE_TAG: HOLIDAY_LEAVE_CODE,
    "medical": 32,
}

# =============================================================================
# Summary Buckets
# =============================================================================

BUCKET_FIELDS = (
    "null_hours_ms",
    "standard_work_ms",
    "excess_hours_ms",
    "overtime_diurnal_ms",
    "overtime_nocturnal_ms",
    "overtime_holiday_ms",
    "overtime_nocturnal_holiday_ms",
)

# (is_holiday, is_night) -> overtime bucket
OVERTIME_BUCKETS: Dict[tuple, str] = {
    (False, False): "overtime_diurnal_ms",
    (False, True): "overtime_nocturnal_ms",
    (True, False): "overtime_holiday_ms",
    (True, True): "overtime_nocturnal_holiday_ms",
}

# Python's weekday() index
SUNDAY = 6
