"""
Shift catalog routes for the timecard application.
"""
from __future__ import annotations

import logging

from config import config
from core.shifts import get_shift_details
from utils.error_handler import NotFoundError

logger = logging.getLogger(__name__)


def list_shifts() -> list:
    """Configured shifts with their display details."""
    return [
        get_shift_details(shift.id, config.DEFAULT_SHIFTS).to_dict()
        for shift in config.DEFAULT_SHIFTS
    ]


def shift_detail(shift_id: str) -> dict:
    details = get_shift_details(shift_id, config.DEFAULT_SHIFTS)
    if details is None:
        raise NotFoundError(
            f"Unknown shift: {shift_id}",
            details={'shift_id': shift_id},
            user_message=f"Shift '{shift_id}' does not exist"
        )
    return details.to_dict()
