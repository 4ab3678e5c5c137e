"""
Physical Cost Calculators

This module layers shipping and production costs onto investment for
physical (non-digital) products:
- Fixed cost lines: amount per sale
- Percentage cost lines: amount% of revenue
- Each line (shipping, production) is computed independently and summed
"""

from dataclasses import replace
from typing import Dict, Optional, TypeVar
import logging

from .base_calculators import BaseCalculator, CalculationInput
from .revenue_calculators import RevenueCalculators
from .roi_calculators import ROICalculators
from .cost_calculators import CostCalculators
from ..models import AggregateStats, CostComponent, CostMode, DailyRecord, PhysicalCostConfig

logger = logging.getLogger(__name__)

Figures = TypeVar('Figures', DailyRecord, AggregateStats)


class PhysicalCostCalculators(BaseCalculator):
    """Shipping/production cost calculation functions"""

    @staticmethod
    def calculate_component_cost(component: CostComponent, sales: int, revenue: float) -> float:
        """
        Cost of a single line item.

        Args:
            component: Amount and mode of the cost line
            sales: Number of units sold
            revenue: Revenue the percentage applies to

        Returns:
            float: amount * sales (fixed), amount% of revenue (percentage),
            0 for an unsupported mode
        """
        if component.mode == CostMode.FIXED:
            return component.amount * sales
        if component.mode == CostMode.PERCENTAGE:
            return revenue * component.amount / 100
        if component.mode == CostMode.UNSUPPORTED:
            return 0.0
        logger.warning(f"Unknown cost mode {component.mode!r}, treating as zero cost")
        return 0.0

    @staticmethod
    def calculate_fixed_cost(sales: int, config: PhysicalCostConfig) -> float:
        """sales * (fixed shipping + fixed production)"""
        per_unit = sum(
            component.amount for component in config.components.values()
            if component.mode == CostMode.FIXED
        )
        return sales * per_unit

    @staticmethod
    def calculate_percentage_cost(revenue: float, config: PhysicalCostConfig) -> float:
        """revenue * (shipping% + production%) / 100"""
        share = sum(
            component.amount for component in config.components.values()
            if component.mode == CostMode.PERCENTAGE
        )
        return revenue * share / 100

    @staticmethod
    def calculate_cost_breakdown(sales: int, revenue: float,
                                 config: Optional[PhysicalCostConfig]) -> Dict[str, float]:
        """
        Per-line physical costs.

        Returns:
            dict with 'shipping', 'production' and 'total'
        """
        if config is None:
            return {'shipping': 0.0, 'production': 0.0, 'total': 0.0}

        shipping = PhysicalCostCalculators.calculate_component_cost(config.shipping, sales, revenue)
        production = PhysicalCostCalculators.calculate_component_cost(config.production, sales, revenue)
        return {'shipping': shipping, 'production': production, 'total': shipping + production}

    @staticmethod
    def calculate_total_cost(sales: int, revenue: float, config: Optional[PhysicalCostConfig]) -> float:
        if config is None:
            return 0.0
        return (PhysicalCostCalculators.calculate_fixed_cost(sales, config)
                + PhysicalCostCalculators.calculate_percentage_cost(revenue, config))


def apply_physical_costs(figures: Figures, config: Optional[PhysicalCostConfig],
                         is_physical: bool) -> Figures:
    """
    Add physical product costs to the investment of a record or aggregate.

    When the product is not physical the input object is returned unchanged.
    Otherwise investment grows by the total physical cost and profit, ROI, CPC
    and CPM are recomputed from the new investment.

    Args:
        figures: DailyRecord or AggregateStats
        config: Shipping/production cost configuration
        is_physical: Whether the product is a physical good

    Returns:
        Same type as figures
    """
    if not is_physical or config is None:
        return figures

    physical_costs = PhysicalCostCalculators.calculate_total_cost(
        figures.sales, figures.revenue, config
    )
    if physical_costs == 0:
        return figures

    investment = figures.investment + physical_costs
    calc_input = CalculationInput(raw_record={
        'investment': investment,
        'revenue': figures.revenue,
        'clicks': figures.clicks,
        'impressions': figures.impressions,
    })

    return replace(
        figures,
        investment=investment,
        profit=RevenueCalculators.calculate_profit(calc_input),
        roi=ROICalculators.calculate_roi(calc_input),
        cpc=CostCalculators.calculate_cpc(calc_input),
        cpm=CostCalculators.calculate_cpm(calc_input),
        physical_costs=figures.physical_costs + physical_costs,
    )
