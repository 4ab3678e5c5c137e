"""
Rate Calculators

This module handles rate calculations:
- Click-through rate
- Conversion rate (visits to sales)
- Funnel stage rates (visits to checkout, checkout to sale)
- Profit margin
"""

from .base_calculators import BaseCalculator, CalculationInput
import logging

logger = logging.getLogger(__name__)


class RateCalculators(BaseCalculator):
    """Rate calculation functions for dashboard metrics"""

    @staticmethod
    def calculate_ctr(calc_input: CalculationInput) -> float:
        """
        Calculate click-through rate (clicks / impressions * 100).

        Returns:
            float: CTR as percentage, 0 when there are no impressions
        """
        if not RateCalculators.validate_input(calc_input):
            return 0.0

        return RateCalculators.safe_percentage(
            numerator=calc_input.clicks,
            denominator=calc_input.impressions,
            default=0.0
        )

    @staticmethod
    def calculate_conversion_rate(calc_input: CalculationInput) -> float:
        """
        Calculate visit to sale conversion rate (sales / visits * 100).

        Returns:
            float: Conversion rate as percentage, 0 when there are no visits
        """
        if not RateCalculators.validate_input(calc_input):
            return 0.0

        return RateCalculators.safe_percentage(
            numerator=calc_input.sales,
            denominator=calc_input.visits,
            default=0.0
        )

    @staticmethod
    def calculate_visit_to_checkout_rate(calc_input: CalculationInput) -> float:
        """Checkouts initiated / visits * 100"""
        if not RateCalculators.validate_input(calc_input):
            return 0.0

        return RateCalculators.safe_percentage(
            numerator=calc_input.checkouts_initiated,
            denominator=calc_input.visits,
            default=0.0
        )

    @staticmethod
    def calculate_checkout_to_sale_rate(calc_input: CalculationInput) -> float:
        """Sales / checkouts initiated * 100"""
        if not RateCalculators.validate_input(calc_input):
            return 0.0

        return RateCalculators.safe_percentage(
            numerator=calc_input.sales,
            denominator=calc_input.checkouts_initiated,
            default=0.0
        )

    @staticmethod
    def calculate_profit_margin(calc_input: CalculationInput) -> float:
        """
        Calculate profit margin ((revenue - investment) / revenue * 100).

        Returns:
            float: Margin as percentage, 0 when there is no revenue
        """
        if not RateCalculators.validate_input(calc_input):
            return 0.0

        revenue = calc_input.revenue
        return RateCalculators.safe_percentage(
            numerator=revenue - calc_input.investment,
            denominator=revenue,
            default=0.0
        )
