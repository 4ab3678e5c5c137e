#!/usr/bin/env python3
"""
Shared utilities package.
"""

from .timezone_utils import (
    get_system_timezone,
    get_display_timezone,
    now_in_timezone,
    today_in_timezone,
    format_for_display,
    parse_date_string
)
from .cache import TTLCache
from .database_utils import (
    DatabaseManager,
    DatabasePathError,
    get_database_manager
)

__all__ = [
    # Timezone utilities
    'get_system_timezone',
    'get_display_timezone',
    'now_in_timezone',
    'today_in_timezone',
    'format_for_display',
    'parse_date_string',
    # Cache
    'TTLCache',
    # Database utilities
    'DatabaseManager',
    'DatabasePathError',
    'get_database_manager'
]
