"""
Aggregator

Sums records into summary statistics. Ratio metrics of an aggregate are always
recomputed from summed totals; per-record means are provided separately for
the views that display averages (average metrics panel, weekday table,
monthly table, product comparison table).
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Union

from ..calculators import (
    CalculationInput,
    CostCalculators,
    RateCalculators,
    RevenueCalculators,
    ROICalculators,
    apply_physical_costs,
)
from ..models import (
    RAW_FIELDS,
    WEEKDAY_NAMES,
    AggregateStats,
    ConversionFunnel,
    DailyRecord,
    DateRange,
    MonthlySummary,
    PhysicalCostConfig,
    PortfolioStats,
    Product,
    ProductSummary,
    WeekdayPerformance,
)
from .period_filter import bucket_by_month, bucket_by_weekday, filter_by_range, sort_by_date

logger = logging.getLogger(__name__)

METRIC_KEYS = (
    'investment', 'revenue', 'profit', 'roi', 'visits', 'clicks', 'impressions',
    'sales', 'ctr', 'cpc', 'cpm', 'checkouts_initiated', 'conversion_rate'
)
HIGHER_IS_BETTER = ('revenue', 'profit', 'roi', 'visits', 'sales', 'ctr',
                    'conversion_rate', 'checkouts_initiated')
LOWER_IS_BETTER = ('investment', 'cpc', 'cpm')


def sum_raw_fields(records: Iterable[DailyRecord]) -> Dict[str, Union[int, float]]:
    totals: Dict[str, Union[int, float]] = {name: 0 for name in RAW_FIELDS}
    totals['investment'] = 0.0
    totals['revenue'] = 0.0
    for record in records:
        for name in RAW_FIELDS:
            totals[name] += getattr(record, name)
    return totals


def aggregate(records: Sequence[DailyRecord],
              physical_cost_config: Optional[PhysicalCostConfig] = None,
              is_physical: bool = False) -> AggregateStats:
    """
    Sum raw counters and recompute every ratio from the totals.

    Physical costs, when applicable, are layered on at aggregate level.
    An empty record set gives all-zero stats.
    """
    if not records:
        return AggregateStats.empty()

    calc_input = CalculationInput(raw_record=sum_raw_fields(records))
    stats = AggregateStats(
        investment=calc_input.investment,
        revenue=calc_input.revenue,
        profit=RevenueCalculators.calculate_profit(calc_input),
        roi=ROICalculators.calculate_roi(calc_input),
        visits=calc_input.visits,
        sales=calc_input.sales,
        clicks=calc_input.clicks,
        impressions=calc_input.impressions,
        ctr=RateCalculators.calculate_ctr(calc_input),
        cpc=CostCalculators.calculate_cpc(calc_input),
        cpm=CostCalculators.calculate_cpm(calc_input),
        conversion_rate=RateCalculators.calculate_conversion_rate(calc_input),
        checkouts_initiated=calc_input.checkouts_initiated,
    )
    return apply_physical_costs(stats, physical_cost_config, is_physical)


def totals_based_roi(records: Sequence[DailyRecord]) -> float:
    """ROI of summed investment and profit across records"""
    investment = sum(record.investment for record in records)
    profit = sum(record.profit for record in records)
    return ROICalculators.calculate_totals_based_roi(investment, profit)


def mean_of_roi(items: Iterable[Union[DailyRecord, ProductSummary, float, int]]) -> float:
    """Simple average of ROI values; accepts records, product summaries or numbers"""
    values = []
    for item in items:
        if isinstance(item, DailyRecord):
            values.append(item.roi)
        elif isinstance(item, ProductSummary):
            values.append(item.average_roi)
        else:
            values.append(float(item))
    return ROICalculators.calculate_mean_of_roi(values)


def average_metrics(records: Sequence[DailyRecord]) -> Dict[str, float]:
    """Per-record mean of every metric (ROI here is the mean of daily ROI)"""
    return {
        key: ROICalculators.safe_mean(getattr(record, key) for record in records)
        for key in METRIC_KEYS
    }


def best_and_worst_metrics(records: Sequence[DailyRecord]) -> Dict[str, Dict[str, float]]:
    """
    Best and worst value of each metric across records.

    For spend-like metrics lower is better, and the best value ignores days
    without spend.
    """
    best: Dict[str, float] = {}
    worst: Dict[str, float] = {}
    if not records:
        return {'best': {key: 0.0 for key in METRIC_KEYS}, 'worst': {key: 0.0 for key in METRIC_KEYS}}

    for key in METRIC_KEYS:
        values = [getattr(record, key) for record in records]
        if key in LOWER_IS_BETTER:
            positive = [value for value in values if value > 0]
            best[key] = min(positive) if positive else 0.0
            worst[key] = max(values)
        else:
            best[key] = max(values)
            worst[key] = min(values)
    return {'best': best, 'worst': worst}


def find_best_day(records: Sequence[DailyRecord]) -> Optional[DailyRecord]:
    """Most profitable day; the earliest one wins a tie"""
    if not records:
        return None
    return max(sort_by_date(records), key=lambda record: record.profit)


def find_worst_day(records: Sequence[DailyRecord]) -> Optional[DailyRecord]:
    """Least profitable day; the earliest one wins a tie"""
    if not records:
        return None
    return min(sort_by_date(records), key=lambda record: record.profit)


def conversion_funnel(records: Sequence[DailyRecord]) -> ConversionFunnel:
    """Visits -> checkouts initiated -> sales with stage rates from totals"""
    totals = sum_raw_fields(records)
    calc_input = CalculationInput(raw_record=totals)
    return ConversionFunnel(
        visits=calc_input.visits,
        checkouts_initiated=calc_input.checkouts_initiated,
        sales=calc_input.sales,
        visit_to_checkout_rate=RateCalculators.calculate_visit_to_checkout_rate(calc_input),
        checkout_to_sale_rate=RateCalculators.calculate_checkout_to_sale_rate(calc_input),
        visit_to_sale_rate=RateCalculators.calculate_conversion_rate(calc_input),
    )


def profit_margin(records: Sequence[DailyRecord]) -> float:
    calc_input = CalculationInput(raw_record=sum_raw_fields(records))
    return RateCalculators.calculate_profit_margin(calc_input)


def weekday_performance(records: Sequence[DailyRecord]) -> List[WeekdayPerformance]:
    """
    Mean profit, revenue, investment, ROI and sales per weekday.

    Always seven entries (Sunday first); weekdays without records are zeroed
    with count 0.
    """
    result = []
    for weekday, bucket in bucket_by_weekday(records):
        if not bucket:
            result.append(WeekdayPerformance(weekday=weekday, name=WEEKDAY_NAMES[weekday]))
            continue
        result.append(WeekdayPerformance(
            weekday=weekday,
            name=WEEKDAY_NAMES[weekday],
            profit=ROICalculators.safe_mean(record.profit for record in bucket),
            revenue=ROICalculators.safe_mean(record.revenue for record in bucket),
            investment=ROICalculators.safe_mean(record.investment for record in bucket),
            roi=mean_of_roi(bucket),
            sales=ROICalculators.safe_mean(record.sales for record in bucket),
            count=len(bucket),
        ))
    return result


def best_weekday(performance: Sequence[WeekdayPerformance]) -> Optional[WeekdayPerformance]:
    """Weekday with the highest mean profit, only among weekdays that have records"""
    candidates = [day for day in performance if day.count > 0]
    if not candidates:
        return None
    return max(candidates, key=lambda day: day.profit)


def monthly_summaries(records: Sequence[DailyRecord]) -> List[MonthlySummary]:
    """Per-month sums; ROI is the mean of the month's daily ROI values"""
    summaries = []
    for month, bucket in bucket_by_month(records).items():
        summaries.append(MonthlySummary(
            month=month,
            investment=sum(record.investment for record in bucket),
            revenue=sum(record.revenue for record in bucket),
            profit=sum(record.profit for record in bucket),
            roi=mean_of_roi(bucket),
            record_count=len(bucket),
        ))
    return summaries


def summarize_product(product: Product, date_range: Optional[DateRange] = None) -> ProductSummary:
    """Comparison-table row for a product: totals plus both ROI conventions"""
    records = filter_by_range(product.records, date_range)
    return ProductSummary(
        product_id=product.product_id,
        name=product.name,
        total_investment=sum(record.investment for record in records),
        total_revenue=sum(record.revenue for record in records),
        total_profit=sum(record.profit for record in records),
        average_roi=mean_of_roi(records),
        totals_roi=totals_based_roi(records),
        record_count=len(records),
    )


def portfolio_stats(products: Sequence[Product], date_range: Optional[DateRange] = None,
                    top_n: int = 5) -> PortfolioStats:
    """
    Totals across every product and the top products by profit.

    Overall ROI is totals based.
    """
    summaries = [summarize_product(product, date_range) for product in products]
    total_investment = sum(summary.total_investment for summary in summaries)
    total_revenue = sum(summary.total_revenue for summary in summaries)
    total_profit = total_revenue - total_investment

    top_products = sorted(summaries, key=lambda summary: summary.total_profit, reverse=True)[:top_n]
    return PortfolioStats(
        total_investment=total_investment,
        total_revenue=total_revenue,
        total_profit=total_profit,
        overall_roi=ROICalculators.calculate_totals_based_roi(total_investment, total_profit),
        top_products=top_products,
    )
