"""
ROI Calculators

This module handles Return on Investment calculations. Two conventions are
in use and are kept as separate operations:

- Totals-based ROI: profit / investment over summed totals (single product
  across days, portfolio totals)
- Mean of ROI: simple average of per-record or per-product ROI values
  (product comparison table, monthly table, weekday and trend halves)
"""

from typing import Iterable
from .base_calculators import BaseCalculator, CalculationInput, Number
from .revenue_calculators import RevenueCalculators
import logging

logger = logging.getLogger(__name__)


class ROICalculators(BaseCalculator):
    """ROI calculation functions for dashboard metrics"""

    @staticmethod
    def calculate_roi(calc_input: CalculationInput) -> float:
        """
        Calculate ROI for a record or a set of summed totals.

        Formula: (revenue - investment) / investment * 100, 0 when investment is 0

        Args:
            calc_input: Standardized calculation input containing raw record data

        Returns:
            float: ROI as a percentage
        """
        if not ROICalculators.validate_input(calc_input):
            return 0.0

        profit = RevenueCalculators.calculate_profit(calc_input)
        return ROICalculators.calculate_totals_based_roi(calc_input.investment, profit)

    @staticmethod
    def calculate_totals_based_roi(total_investment: Number, total_profit: Number) -> float:
        """ROI from already-summed investment and profit"""
        if total_investment <= 0:
            return 0.0
        return ROICalculators.safe_percentage(total_profit, total_investment)

    @staticmethod
    def calculate_mean_of_roi(roi_values: Iterable[Number]) -> float:
        """Simple average of individual ROI values, 0 for no values"""
        return ROICalculators.safe_mean(roi_values)
