#!/usr/bin/env python3
"""
Timezone utilities for consistent time handling across the system.
Provides centralized timezone conversion and formatting functions.
"""

import datetime
import pytz
from typing import Optional

from ..config import config

def get_system_timezone() -> pytz.BaseTzInfo:
    """Get the configured system timezone."""
    return pytz.timezone(config.DEFAULT_TIMEZONE)

def get_display_timezone() -> pytz.BaseTzInfo:
    """Get the configured display timezone."""
    return pytz.timezone(config.DISPLAY_TIMEZONE)

def now_in_timezone(timezone: Optional[str] = None) -> datetime.datetime:
    """Get current time in specified timezone."""
    tz = pytz.timezone(timezone) if timezone else get_system_timezone()
    return datetime.datetime.now(tz)

def today_in_timezone(timezone: Optional[str] = None) -> datetime.date:
    """Get the current calendar day in specified timezone."""
    return now_in_timezone(timezone).date()

def format_for_display(dt: datetime.datetime, timezone: Optional[str] = None) -> str:
    """Format datetime for display in configured timezone."""
    if dt.tzinfo is None:
        dt = pytz.utc.localize(dt)

    display_tz = pytz.timezone(timezone) if timezone else get_display_timezone()
    local_dt = dt.astimezone(display_tz)
    return local_dt.strftime('%Y-%m-%d %H:%M:%S %Z')

def parse_date_string(date_str: str) -> datetime.date:
    """
    Parse a calendar day from a date or datetime string.

    Accepts 'YYYY-MM-DD' as well as full ISO timestamps (with or without a
    'Z' suffix); only the calendar day is kept.
    """
    date_str = date_str.strip()
    if date_str.endswith('Z'):
        date_str = date_str[:-1] + '+00:00'

    if len(date_str) == 10:
        return datetime.date.fromisoformat(date_str)
    return datetime.datetime.fromisoformat(date_str).date()
