"""
Metric Derivation

Builds fully populated DailyRecord objects from raw counters. Every derived
field is recomputed here; nothing derived is read from the input.
"""

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Union
import logging

from .base_calculators import CalculationInput
from .revenue_calculators import RevenueCalculators
from .roi_calculators import ROICalculators
from .rate_calculators import RateCalculators
from .cost_calculators import CostCalculators
from ..models import DailyRecord
from ...utils.timezone_utils import parse_date_string

logger = logging.getLogger(__name__)


def _resolve_date(value: Union[str, date, None]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        return parse_date_string(value)
    raise ValueError(f"Record date is required, got {value!r}")


def derive_metrics(raw: Dict[str, Any], record_date: Union[str, date, None] = None) -> DailyRecord:
    """
    Derive a complete DailyRecord from raw counters.

    Missing numeric fields default to 0; negative or non-numeric values are
    coerced to 0. Ratios with a zero denominator are 0.

    Args:
        raw: Raw record, e.g. {'date': '2025-01-31', 'investment': 100, ...}
        record_date: Overrides raw['date'] when given

    Returns:
        DailyRecord

    Raises:
        ValueError: If no valid date is available
    """
    day = _resolve_date(record_date if record_date is not None else (raw.get('date') or raw.get('data')))
    calc_input = CalculationInput(raw_record=raw)

    return DailyRecord(
        date=day,
        investment=calc_input.investment,
        revenue=calc_input.revenue,
        visits=calc_input.visits,
        clicks=calc_input.clicks,
        impressions=calc_input.impressions,
        sales=calc_input.sales,
        checkouts_initiated=calc_input.checkouts_initiated,
        profit=RevenueCalculators.calculate_profit(calc_input),
        roi=ROICalculators.calculate_roi(calc_input),
        ctr=RateCalculators.calculate_ctr(calc_input),
        cpc=CostCalculators.calculate_cpc(calc_input),
        cpm=CostCalculators.calculate_cpm(calc_input),
        conversion_rate=RateCalculators.calculate_conversion_rate(calc_input),
    )


def derive_records(raw_records: Iterable[Dict[str, Any]]) -> List[DailyRecord]:
    """
    Derive records for a whole list, keeping one record per date.

    Rows without a usable date are skipped with a warning; when a date
    repeats, the later row wins.
    """
    by_date: Dict[date, DailyRecord] = {}
    for raw in raw_records:
        try:
            record = derive_metrics(raw)
        except ValueError as e:
            logger.warning(f"Skipping raw record without a valid date: {e}")
            continue
        if record.date in by_date:
            logger.debug(f"Duplicate record for {record.date}, keeping the latest")
        by_date[record.date] = record
    return [by_date[day] for day in sorted(by_date)]
