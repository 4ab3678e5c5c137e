"""
Cost Calculators

This module handles cost per action calculations:
- Cost per click
- Cost per mille (1000 impressions)
- Break-even point (sales needed to cover costs at the current margin)
"""

from .base_calculators import BaseCalculator, CalculationInput
import logging

logger = logging.getLogger(__name__)


class CostCalculators(BaseCalculator):
    """Cost per action calculation functions for dashboard metrics"""

    @staticmethod
    def calculate_cpc(calc_input: CalculationInput) -> float:
        """
        Calculate cost per click.

        Formula: investment / clicks

        Returns:
            float: Cost per click, 0 when there are no clicks
        """
        if not CostCalculators.validate_input(calc_input):
            return 0.0

        return CostCalculators.safe_divide(
            numerator=calc_input.investment,
            denominator=calc_input.clicks,
            default=0.0
        )

    @staticmethod
    def calculate_cpm(calc_input: CalculationInput) -> float:
        """
        Calculate cost per thousand impressions.

        Formula: investment / impressions * 1000

        Returns:
            float: CPM, 0 when there are no impressions
        """
        if not CostCalculators.validate_input(calc_input):
            return 0.0

        per_impression = CostCalculators.safe_divide(
            numerator=calc_input.investment,
            denominator=calc_input.impressions,
            default=0.0
        )
        return per_impression * 1000

    @staticmethod
    def calculate_break_even_point(calc_input: CalculationInput) -> float:
        """
        Calculate the break-even point in sales.

        Formula: investment / revenue * sales

        Returns:
            float: Sales needed to cover investment, 0 when there is no revenue
        """
        if not CostCalculators.validate_input(calc_input):
            return 0.0

        share = CostCalculators.safe_divide(
            numerator=calc_input.investment,
            denominator=calc_input.revenue,
            default=0.0
        )
        return share * calc_input.sales
