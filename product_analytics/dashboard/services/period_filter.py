"""
Period Filter & Bucketing

Selects records inside a date range and groups them by month, weekday or
half-period. Also resolves the dashboard's period presets (today, last 7 days,
current month, ...) into date ranges.
"""

import calendar
import logging
from collections import OrderedDict
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence, Tuple

from ..models import DailyRecord, DateRange
from ...utils.timezone_utils import today_in_timezone

logger = logging.getLogger(__name__)

MONTH_NAMES = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December'
]


def sort_by_date(records: Sequence[DailyRecord]) -> List[DailyRecord]:
    return sorted(records, key=lambda record: record.date)


def filter_by_range(records: Sequence[DailyRecord], date_range: Optional[DateRange]) -> List[DailyRecord]:
    """Keep records whose date falls inside the inclusive range, in input order; None keeps everything"""
    if date_range is None:
        return list(records)
    return [record for record in records if date_range.contains(record.date)]


def month_key(day: date) -> str:
    return f"{day.year}-{day.month:02d}"


def bucket_by_month(records: Sequence[DailyRecord]) -> Dict[str, List[DailyRecord]]:
    """Group records by 'YYYY-MM', months in ascending order"""
    buckets: Dict[str, List[DailyRecord]] = {}
    for record in sort_by_date(records):
        buckets.setdefault(month_key(record.date), []).append(record)
    return OrderedDict(sorted(buckets.items()))


def weekday_index(day: date) -> int:
    """0=Sunday .. 6=Saturday"""
    return (day.weekday() + 1) % 7


def bucket_by_weekday(records: Sequence[DailyRecord]) -> List[Tuple[int, List[DailyRecord]]]:
    """
    Partition records by weekday.

    Always returns seven (weekday_index, records) entries, Sunday first,
    including weekdays that have no records.
    """
    buckets: List[Tuple[int, List[DailyRecord]]] = [(index, []) for index in range(7)]
    for record in records:
        buckets[weekday_index(record.date)][1].append(record)
    return buckets


def split_in_half(records: Sequence[DailyRecord]) -> Tuple[List[DailyRecord], List[DailyRecord]]:
    """
    Sort by date and split at floor(n / 2).

    For odd counts the extra record belongs to the second half.
    """
    ordered = sort_by_date(records)
    mid = len(ordered) // 2
    return ordered[:mid], ordered[mid:]


# === PERIOD PRESETS ===

def get_date_range_for_period(period: str, custom_start: Optional[date] = None,
                              custom_end: Optional[date] = None,
                              today: Optional[date] = None) -> Optional[DateRange]:
    """
    Resolve a period preset into a DateRange.

    Args:
        period: 'today', 'yesterday', 'week' (last 7 days including today),
            'month' (current calendar month), 'all' or 'custom'
        custom_start, custom_end: Bounds for 'custom'
        today: Reference day; defaults to today in the configured timezone

    Returns:
        DateRange, or None for 'all', an incomplete custom range or an unknown period
    """
    today = today or today_in_timezone()

    if period == 'today':
        return DateRange(today, today)
    if period == 'yesterday':
        yesterday = today - timedelta(days=1)
        return DateRange(yesterday, yesterday)
    if period == 'week':
        return DateRange(today - timedelta(days=6), today)
    if period == 'month':
        return DateRange(today.replace(day=1), today.replace(day=days_in_month(today.year, today.month)))
    if period == 'custom':
        if custom_start and custom_end:
            return DateRange(custom_start, custom_end)
        return None
    if period != 'all':
        logger.debug(f"Unknown period '{period}', using all records")
    return None


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def get_months_in_range(start: date, end: date, today: Optional[date] = None) -> List[Dict[str, str]]:
    """
    List the months between two dates, newest first.

    The current month is always included. Values use the 'YYYY-M' form of the
    month selector, labels read 'January 2025'.
    """
    today = today or today_in_timezone()
    months: List[Tuple[int, int]] = []

    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        months.append((year, month))
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)

    if (today.year, today.month) not in months:
        months.append((today.year, today.month))

    return [
        {'value': f"{year}-{month}", 'label': f"{MONTH_NAMES[month - 1]} {year}"}
        for year, month in sorted(months, reverse=True)
    ]
