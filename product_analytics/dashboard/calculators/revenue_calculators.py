"""
Revenue Calculators

This module handles profit calculations:
- Profit (revenue - investment), negative when spend exceeds revenue
"""

from .base_calculators import BaseCalculator, CalculationInput
import logging

logger = logging.getLogger(__name__)


class RevenueCalculators(BaseCalculator):
    """Revenue and profit calculation functions for dashboard metrics"""

    @staticmethod
    def calculate_profit(calc_input: CalculationInput) -> float:
        """
        Calculate profit for a record or a set of summed totals.

        Formula: revenue - investment

        Args:
            calc_input: Standardized calculation input containing raw record data

        Returns:
            float: Profit (may be negative)
        """
        if not RevenueCalculators.validate_input(calc_input):
            return 0.0

        return RevenueCalculators.safe_subtract(calc_input.revenue, calc_input.investment)
