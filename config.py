"""
Configuration management for the timecard application.
Centralizes all configuration settings and environment variables.
"""
from __future__ import annotations

import os
from typing import Mapping, Tuple
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

from core.models import Shift, WorkSettings
from core.status_catalog import StatusItem, build_catalog

# Load environment variables from .env file
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class Config:
    """Central configuration class for the application."""

    # Application version
    VERSION: str = "1.4"

    # Application configuration
    DEBUG: bool = _env_bool("DEBUG", "False")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Server configuration
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    LOCAL_TZ = ZoneInfo(os.getenv("TIMECARD_TZ", "Europe/Rome"))

    # Default work settings (used when a request does not carry its own)
    STANDARD_DAY_HOURS: float = float(os.getenv("STANDARD_DAY_HOURS", "6"))
    NIGHT_TIME_START_HOUR: int = int(os.getenv("NIGHT_TIME_START_HOUR", "22"))
    NIGHT_TIME_END_HOUR: int = int(os.getenv("NIGHT_TIME_END_HOUR", "6"))
    TREAT_HOLIDAY_AS_OVERTIME: bool = _env_bool("TREAT_HOLIDAY_AS_OVERTIME", "True")
    DEDUCT_AUTO_BREAK: bool = _env_bool("DEDUCT_AUTO_BREAK", "False")
    AUTO_BREAK_THRESHOLD_HOURS: float = float(os.getenv("AUTO_BREAK_THRESHOLD_HOURS", "6"))
    AUTO_BREAK_MINUTES: int = int(os.getenv("AUTO_BREAK_MINUTES", "30"))

    DEFAULT_SHIFTS: Tuple[Shift, ...] = (
        Shift("morning", "Mattina", 8, 14, "text-rose-800", "bg-rose-100"),
        Shift("afternoon", "Pomeriggio", 14, 20, "text-sky-800", "bg-sky-100"),
        Shift("evening", "Serale", 16, 22, "text-indigo-800", "bg-indigo-100"),
        Shift("night", "Notturno", 21, 3, "text-purple-800", "bg-purple-100"),
        Shift("rest", "Riposo", None, None, "text-pink-800", "bg-pink-100"),
    )

    # Status catalog used to label leave days
    STATUS_YEAR: int = int(os.getenv("STATUS_YEAR", "2026"))
    STATUS_ITEMS: Tuple[Tuple[int, str, str, float], ...] = (
        (8, "Recupero ore", "leave-hours", 0),
        (10, "Festività", "leave-day", 0),
        (15, "Ferie", "leave-day", 26),
        (32, "Malattia", "leave-day", 0),
    )

    def __init__(self):
        """Validate configuration on initialization."""
        if not 0 <= self.NIGHT_TIME_START_HOUR <= 23 or not 0 <= self.NIGHT_TIME_END_HOUR <= 23:
            raise RuntimeError(
                "NIGHT_TIME_START_HOUR and NIGHT_TIME_END_HOUR must be between 0 and 23."
            )

    @classmethod
    def from_env(cls) -> Config:
        """Create Config instance from environment variables."""
        return cls()

    def default_work_settings(self) -> WorkSettings:
        """Build the WorkSettings used when a caller supplies none."""
        return WorkSettings(
            standard_day_hours=self.STANDARD_DAY_HOURS,
            night_time_start_hour=self.NIGHT_TIME_START_HOUR,
            night_time_end_hour=self.NIGHT_TIME_END_HOUR,
            shifts=self.DEFAULT_SHIFTS,
            treat_holiday_as_overtime=self.TREAT_HOLIDAY_AS_OVERTIME,
            deduct_auto_break=self.DEDUCT_AUTO_BREAK,
            auto_break_threshold_hours=self.AUTO_BREAK_THRESHOLD_HOURS,
            auto_break_minutes=self.AUTO_BREAK_MINUTES,
        )

    def status_catalog(self) -> Mapping[int, StatusItem]:
        """Build the read-only status catalog for the configured year."""
        return build_catalog(
            StatusItem(code, description, self.STATUS_YEAR, category=category, entitlement=entitlement)
            for code, description, category, entitlement in self.STATUS_ITEMS
        )

    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.DEBUG


# Global config instance
config = Config.from_env()
