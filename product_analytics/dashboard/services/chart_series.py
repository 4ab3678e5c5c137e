# Chart Series Builder
#
# Produces labeled numeric series for the product detail charts. Values only:
# colors, axes and rendering belong to the frontend.

import logging
from typing import Dict, Optional, Sequence

from ..calculators import PhysicalCostCalculators
from ..models import (
    AggregateStats,
    ChartData,
    ChartSeries,
    ConversionFunnel,
    DailyRecord,
    PhysicalCostConfig,
    WeekdayPerformance,
)
from .period_filter import sort_by_date

logger = logging.getLogger(__name__)


def _daily_series(records: Sequence[DailyRecord], fields: Dict[str, str]) -> ChartData:
    ordered = sort_by_date(records)
    return ChartData(
        labels=[record.date.strftime('%d/%m') for record in ordered],
        series=[
            ChartSeries(label=label, values=[getattr(record, name) for record in ordered])
            for label, name in fields.items()
        ],
    )


def build_chart_data(records: Sequence[DailyRecord],
                     weekday_performance: Sequence[WeekdayPerformance],
                     funnel: ConversionFunnel,
                     aggregate: AggregateStats,
                     physical_cost_config: Optional[PhysicalCostConfig] = None,
                     is_physical: bool = False) -> Dict[str, ChartData]:
    """
    Build every chart of the product analysis page.

    The distribution chart splits total investment into ad spend, production
    and shipping, next to the resulting profit. The aggregate passed in is
    expected to already include physical costs.
    """
    breakdown = {'shipping': 0.0, 'production': 0.0, 'total': 0.0}
    if is_physical:
        breakdown = PhysicalCostCalculators.calculate_cost_breakdown(
            aggregate.sales, aggregate.revenue, physical_cost_config
        )

    return {
        'performance': _daily_series(records, {
            'Profit': 'profit',
            'Revenue': 'revenue',
            'Investment': 'investment',
        }),
        'trends': _daily_series(records, {
            'ROI (%)': 'roi',
            'Sales': 'sales',
        }),
        'weekday': ChartData(
            labels=[day.name for day in weekday_performance],
            series=[
                ChartSeries(label='Average Profit', values=[day.profit for day in weekday_performance]),
                ChartSeries(label='Average Sales', values=[day.sales for day in weekday_performance]),
            ],
        ),
        'funnel': ChartData(
            labels=['Visits', 'Checkouts Initiated', 'Sales'],
            series=[ChartSeries(
                label='Conversion Funnel',
                values=[funnel.visits, funnel.checkouts_initiated, funnel.sales],
            )],
        ),
        'distribution': ChartData(
            labels=['Ad Investment', 'Production Cost', 'Shipping', 'Profit'],
            series=[ChartSeries(
                label='Distribution',
                values=[
                    aggregate.investment - breakdown['total'],
                    breakdown['production'],
                    breakdown['shipping'],
                    aggregate.revenue - aggregate.investment,
                ],
            )],
        ),
    }
