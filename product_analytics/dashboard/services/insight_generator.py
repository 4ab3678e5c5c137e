"""
Insight Generator

Rule-based insights and recommendations for a product's analysis. Every rule
is evaluated independently and appends its message when its predicate holds,
in the order the rules are declared below.
"""

import logging
from typing import Optional, Sequence

from ..models import (
    AggregateStats,
    ConversionFunnel,
    DailyRecord,
    InsightReport,
    PhysicalCostConfig,
    TrendSummary,
    WeekdayPerformance,
)
from .aggregator import best_weekday
from ...config import config

logger = logging.getLogger(__name__)

INSUFFICIENT_DATA_INSIGHT = "Not enough data for this period to generate insights."
INSUFFICIENT_DATA_RECOMMENDATION = "Record daily results for this product to receive recommendations."

# Thresholds (percent unless noted)
EXCEPTIONAL_DAY_ROI = 200
SALES_SPIKE_FACTOR = 2
LOW_CONVERSION_RATE = 2
HIGH_CONVERSION_RATE = 5
LOW_CHECKOUT_RATE_INSIGHT = 30
STRONG_GROWTH = 20
STRONG_DECLINE = -20
LOW_AVERAGE_ROI = 50
HIGH_AVERAGE_ROI = 150
HEALTHY_ROI = 100
LOW_VISIT_TO_CHECKOUT_RATE = 20
LOW_CHECKOUT_RATE_RECOMMENDATION = 40
PHYSICAL_COST_SHARE = 0.3


def format_currency(value: float) -> str:
    sign = '-' if value < 0 else ''
    return f"{sign}{config.CURRENCY_SYMBOL} {abs(value):,.2f}"


def generate_insights(aggregate: AggregateStats,
                      trend: TrendSummary,
                      weekday_performance: Sequence[WeekdayPerformance],
                      funnel: ConversionFunnel,
                      best_day: Optional[DailyRecord],
                      worst_day: Optional[DailyRecord],
                      projected_growth: float = 0.0,
                      average_roi: Optional[float] = None,
                      average_sales: float = 0.0,
                      average_revenue: float = 0.0,
                      is_physical: bool = False,
                      physical_cost_config: Optional[PhysicalCostConfig] = None) -> InsightReport:
    """
    Build insights and recommendations from the analysis results.

    Args:
        aggregate: Totals for the period
        trend: Half-over-half trend summary
        weekday_performance: Seven weekday entries
        funnel: Conversion funnel for the period
        best_day, worst_day: Most and least profitable days (None without records)
        projected_growth: Profit growth between halves, in percent
        average_roi: Mean daily ROI; falls back to the aggregate ROI
        average_sales, average_revenue: Mean daily sales and revenue
        is_physical, physical_cost_config: Physical product settings

    Returns:
        InsightReport; a single placeholder in each list when there is no data
    """
    if best_day is None and worst_day is None:
        return InsightReport(
            insights=[INSUFFICIENT_DATA_INSIGHT],
            recommendations=[INSUFFICIENT_DATA_RECOMMENDATION],
        )

    roi = aggregate.roi if average_roi is None else average_roi
    top_weekday = best_weekday(weekday_performance)
    insights = []
    recommendations = []

    # Best day
    if best_day is not None and (best_day.profit > 0 or best_day.roi > 0):
        insights.append(
            f"Your best day was {best_day.date.strftime('%d/%m/%Y')} "
            f"with a profit of {format_currency(best_day.profit)}."
        )
        if best_day.roi > EXCEPTIONAL_DAY_ROI:
            insights.append(f"ROI on that day was exceptionally high: {best_day.roi:.2f}%.")
        if average_sales > 0 and best_day.sales > average_sales * SALES_SPIKE_FACTOR:
            insights.append(f"Sales were {best_day.sales / average_sales:.1f}x higher than average.")

    # Weekdays
    if top_weekday is not None:
        insights.append(
            f"{top_weekday.name} is the best performing day on average "
            f"({format_currency(top_weekday.profit)} of profit)."
        )

    # Conversion funnel
    if funnel.visit_to_sale_rate < LOW_CONVERSION_RATE:
        insights.append(
            f"Your visit to sale conversion rate is only {funnel.visit_to_sale_rate:.2f}%. "
            f"There is room for improvement."
        )
    elif funnel.visit_to_sale_rate > HIGH_CONVERSION_RATE:
        insights.append(f"Your conversion rate of {funnel.visit_to_sale_rate:.2f}% is excellent!")

    if funnel.checkout_to_sale_rate < LOW_CHECKOUT_RATE_INSIGHT:
        insights.append(
            f"{100 - funnel.checkout_to_sale_rate:.0f}% of checkouts do not turn into sales. "
            f"Review your checkout process."
        )

    # Growth
    if projected_growth > STRONG_GROWTH:
        insights.append(f"Your product is growing strongly: +{projected_growth:.0f}% recently.")
    elif projected_growth < STRONG_DECLINE:
        insights.append(f"Warning: your product has declined {abs(projected_growth):.0f}% recently.")

    # ROI
    if roi < LOW_AVERAGE_ROI:
        insights.append(f"Your average ROI of {roi:.2f}% is below ideal. Consider optimizing your costs.")
    elif roi > HIGH_AVERAGE_ROI:
        insights.append(f"Excellent average ROI of {roi:.2f}%. Consider scaling up your investment.")

    # Recommendations
    if roi < HEALTHY_ROI:
        recommendations.append(
            "Reduce acquisition costs or raise the average order value to improve ROI."
        )
    else:
        recommendations.append(
            "Your ROI is healthy. Consider increasing investment to scale results."
        )

    if top_weekday is not None:
        recommendations.append(
            f"Concentrate more investment on {top_weekday.name}, which has the best performance."
        )

    if funnel.visit_to_checkout_rate < LOW_VISIT_TO_CHECKOUT_RATE:
        recommendations.append("Improve the product page experience to raise the checkout rate.")

    if funnel.checkout_to_sale_rate < LOW_CHECKOUT_RATE_RECOMMENDATION:
        recommendations.append("Simplify the checkout process to reduce cart abandonment.")

    if projected_growth < 0:
        recommendations.append("Review your marketing strategy and consider testing new approaches.")

    if is_physical and physical_cost_config is not None:
        unit_costs = physical_cost_config.shipping.amount + physical_cost_config.production.amount
        if unit_costs > 0 and (average_revenue <= 0 or unit_costs / average_revenue > PHYSICAL_COST_SHARE):
            recommendations.append(
                "Production and shipping costs take a large share of revenue. Look for ways to reduce them."
            )

    logger.debug(f"Generated {len(insights)} insights and {len(recommendations)} recommendations "
                 f"(profit trend: {trend.profit.direction.value}, total profit: {aggregate.profit:.2f})")
    return InsightReport(insights=insights, recommendations=recommendations)
