"""
Trend Analyzer

Compares the first and second half of a period (split at the midpoint of the
date-sorted records) and derives growth and break-even figures.
"""

import logging
from typing import List, Sequence

from ..calculators import CalculationInput, CostCalculators
from ..models import DailyRecord, DailyTrend, TrendDirection, TrendResult, TrendSummary
from .aggregator import mean_of_roi, sum_raw_fields
from .period_filter import sort_by_date, split_in_half

logger = logging.getLogger(__name__)

# Changes within +/- 1 point are reported as stable
DIRECTION_THRESHOLD = 1.0
# Day-over-day profit must move by more than 10% to count as a trend
DAILY_TREND_BAND = 0.1


def percent_change(previous: float, current: float) -> float:
    """
    Relative change from previous to current, in percent.

    Without a positive baseline the change is 100 when current is positive
    and 0 otherwise.
    """
    if previous > 0:
        return (current - previous) / previous * 100
    return 100.0 if current > 0 else 0.0


def trend_direction(value: float, threshold: float = DIRECTION_THRESHOLD) -> TrendDirection:
    if value > threshold:
        return TrendDirection.UP
    if value < -threshold:
        return TrendDirection.DOWN
    return TrendDirection.STABLE


def _monetary_trend(metric: str, first_half: Sequence[DailyRecord],
                    second_half: Sequence[DailyRecord]) -> TrendResult:
    previous = sum(getattr(record, metric) for record in first_half)
    current = sum(getattr(record, metric) for record in second_half)
    change = percent_change(previous, current)
    return TrendResult(metric=metric, percent_change=change, direction=trend_direction(change))


def compute_trend(records: Sequence[DailyRecord]) -> TrendSummary:
    """
    Half-over-half trend for investment, revenue, profit and ROI.

    Monetary metrics compare half sums as a percent change; ROI compares the
    mean daily ROI of each half as an absolute point difference. Fewer than
    two records give a stable, zero trend.
    """
    if len(records) < 2:
        return TrendSummary.stable()

    first_half, second_half = split_in_half(records)
    roi_change = mean_of_roi(second_half) - mean_of_roi(first_half)

    summary = TrendSummary(
        investment=_monetary_trend('investment', first_half, second_half),
        revenue=_monetary_trend('revenue', first_half, second_half),
        profit=_monetary_trend('profit', first_half, second_half),
        roi=TrendResult(metric='roi', percent_change=roi_change, direction=trend_direction(roi_change)),
    )
    logger.debug(f"Trend over {len(records)} records: profit {summary.profit.percent_change:.2f}%")
    return summary


def projected_growth(records: Sequence[DailyRecord]) -> float:
    """
    Percent change of summed profit between the first and second half.

    Reported as 0 when the first half did not make a profit.
    """
    first_half, second_half = split_in_half(records)
    first_profit = sum(record.profit for record in first_half)
    second_profit = sum(record.profit for record in second_half)
    if first_profit <= 0:
        return 0.0
    return (second_profit - first_profit) / first_profit * 100


def break_even_point(records: Sequence[DailyRecord]) -> float:
    """Sales needed to cover total investment at the current revenue per sale"""
    calc_input = CalculationInput(raw_record=sum_raw_fields(records))
    return CostCalculators.calculate_break_even_point(calc_input)


def daily_trends(records: Sequence[DailyRecord]) -> List[DailyTrend]:
    """Day-over-day profit direction, the first day is always stable"""
    result = []
    previous = None
    for record in sort_by_date(records):
        direction = TrendDirection.STABLE
        if previous is not None:
            if record.profit > previous.profit * (1 + DAILY_TREND_BAND):
                direction = TrendDirection.UP
            elif record.profit < previous.profit * (1 - DAILY_TREND_BAND):
                direction = TrendDirection.DOWN
        result.append(DailyTrend(date=record.date, profit=record.profit, direction=direction))
        previous = record
    return result
