"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads the analytics environment variables (with checks that the configured
log level and timezone are ones the standard library knows about).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import logging
import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

@dataclass(frozen=True)
class Settings:
    """Container for analytics configuration read from the environment.

    Attributes:
        default_range: Range token used when none is given on the command line.
        export_dir: Directory where snapshot exports are written.
        log_path: File that receives a copy of the log output.
        log_level: Numeric logging level.
        timezone: IANA zone used for calendar-day and calendar-month buckets.
    """
    default_range: str
    export_dir: Path
    log_path: Path
    log_level: int
    timezone: str



def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if `ANALYTICS_LOG_LEVEL` is not a known logging level
            or `ANALYTICS_TIMEZONE` is not a known timezone.
    """
    default_range = os.getenv("ANALYTICS_DEFAULT_RANGE", "7d").strip() or "7d"
    export_dir = Path(os.getenv("ANALYTICS_EXPORT_DIR", "exports"))
    log_path = Path(os.getenv("ANALYTICS_LOG_PATH", "logs/analytics.log"))
    level_name = os.getenv("ANALYTICS_LOG_LEVEL", "INFO").strip().upper()
    timezone = os.getenv("ANALYTICS_TIMEZONE", "UTC").strip() or "UTC"

    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        raise RuntimeError(
            f"ANALYTICS_LOG_LEVEL={level_name!r} is not a valid logging level "
            "(expected one of DEBUG, INFO, WARNING, ERROR, CRITICAL)."
        )

    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise RuntimeError(
            f"ANALYTICS_TIMEZONE={timezone!r} is not a known IANA timezone."
        ) from exc

    return Settings(
        default_range=default_range,
        export_dir=export_dir,
        log_path=log_path,
        log_level=log_level,
        timezone=timezone,
    )
