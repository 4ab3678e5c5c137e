"""
Base Calculator Classes and Utilities

This module provides the foundation for all dashboard calculations:
- CalculationInput: Standardized input data structure
- BaseCalculator: Common calculation utilities (safe division, input coercion)
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional, Union, Tuple
import logging
import math

logger = logging.getLogger(__name__)

Number = Union[int, float]

# Accepted source keys for each raw field. The legacy names come from the
# Portuguese column names of earlier exports.
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    'investment': ('investment', 'investimento'),
    'revenue': ('revenue', 'faturamento'),
    'visits': ('visits', 'visitas'),
    'clicks': ('clicks', 'cliques'),
    'impressions': ('impressions', 'impressoes'),
    'sales': ('sales', 'vendas'),
    'checkouts_initiated': ('checkouts_initiated', 'initiate_checkout', 'initiateCheckout'),
}


@dataclass
class CalculationInput:
    """
    Standardized input structure for all calculation functions.

    Wraps a raw record (a single day or summed totals) and exposes every raw
    counter as a coerced, non-negative number. Missing fields read as 0.
    """
    raw_record: Dict[str, Any]

    def _lookup(self, field_name: str) -> Any:
        for key in FIELD_ALIASES.get(field_name, (field_name,)):
            value = self.raw_record.get(key)
            if value is not None:
                return value
        return 0

    # === QUICK ACCESS PROPERTIES ===

    @property
    def investment(self) -> float:
        """Ad spend for the period"""
        return BaseCalculator.coerce_amount(self._lookup('investment'), 'investment')

    @property
    def revenue(self) -> float:
        """Gross revenue for the period"""
        return BaseCalculator.coerce_amount(self._lookup('revenue'), 'revenue')

    @property
    def visits(self) -> int:
        return BaseCalculator.coerce_count(self._lookup('visits'), 'visits')

    @property
    def clicks(self) -> int:
        return BaseCalculator.coerce_count(self._lookup('clicks'), 'clicks')

    @property
    def impressions(self) -> int:
        return BaseCalculator.coerce_count(self._lookup('impressions'), 'impressions')

    @property
    def sales(self) -> int:
        return BaseCalculator.coerce_count(self._lookup('sales'), 'sales')

    @property
    def checkouts_initiated(self) -> int:
        """Number of checkouts started (manual entry)"""
        return BaseCalculator.coerce_count(self._lookup('checkouts_initiated'), 'checkouts_initiated')

    def raw_values(self) -> Dict[str, Number]:
        """All raw counters, coerced"""
        return {name: getattr(self, name) for name in FIELD_ALIASES}


class BaseCalculator:
    """
    Base class providing common calculation utilities.

    All calculator classes inherit from this to access shared
    mathematical operations and input coercion.
    """

    @staticmethod
    def coerce_amount(value: Any, field_name: str = 'value') -> float:
        """
        Coerce a raw monetary input to a non-negative finite float.

        Non-numeric, negative, NaN and infinite values become 0.0.
        """
        if value is None or value == '':
            return 0.0
        try:
            number = float(value)
        except (TypeError, ValueError):
            logger.warning(f"Non-numeric {field_name} {value!r}, using 0")
            return 0.0
        if not math.isfinite(number):
            logger.warning(f"Non-finite {field_name} {value!r}, using 0")
            return 0.0
        if number < 0:
            logger.warning(f"Negative {field_name} {value!r}, using 0")
            return 0.0
        return number

    @staticmethod
    def coerce_count(value: Any, field_name: str = 'value') -> int:
        """Coerce a raw counter to a non-negative int (fractions are truncated)"""
        return int(BaseCalculator.coerce_amount(value, field_name))

    @staticmethod
    def safe_divide(numerator: Number, denominator: Number,
                    default: float = 0.0, decimal_places: Optional[int] = None) -> float:
        """
        Perform safe division with default value for zero denominator.

        Args:
            numerator: The number to divide
            denominator: The number to divide by
            default: Value to return if denominator is 0
            decimal_places: Optional rounding; None keeps full precision

        Returns:
            Division result, or default if denominator is 0
        """
        try:
            if denominator == 0:
                return default
            result = float(numerator) / float(denominator)
        except (TypeError, ValueError) as e:
            logger.warning(f"safe_divide error: {e}, returning default {default}")
            return default
        if not math.isfinite(result):
            return default
        return round(result, decimal_places) if decimal_places is not None else result

    @staticmethod
    def safe_percentage(numerator: Number, denominator: Number,
                        default: float = 0.0, decimal_places: Optional[int] = None) -> float:
        """
        Calculate percentage with safe division.

        Returns:
            Percentage (numerator / denominator * 100), or default if denominator is 0
        """
        ratio = BaseCalculator.safe_divide(numerator, denominator, default=None)
        if ratio is None:
            return default
        result = ratio * 100
        return round(result, decimal_places) if decimal_places is not None else result

    @staticmethod
    def safe_round(value: Number, decimal_places: int = 2) -> float:
        """Safely round a numeric value; non-numeric input gives 0.0"""
        try:
            return round(float(value), decimal_places)
        except (TypeError, ValueError) as e:
            logger.warning(f"safe_round error: {e}, returning 0.0")
            return 0.0

    @staticmethod
    def safe_subtract(minuend: Number, subtrahend: Number) -> float:
        """Subtract two values; non-numeric input gives 0.0"""
        try:
            return float(minuend) - float(subtrahend)
        except (TypeError, ValueError) as e:
            logger.warning(f"safe_subtract error: {e}, returning 0.0")
            return 0.0

    @staticmethod
    def safe_mean(values) -> float:
        """Arithmetic mean, 0.0 for an empty sequence"""
        values = list(values)
        if not values:
            return 0.0
        return sum(values) / len(values)

    @staticmethod
    def validate_input(calc_input: CalculationInput) -> bool:
        """
        Validate that CalculationInput has required data.

        Returns:
            True if input is valid, False otherwise
        """
        if not isinstance(calc_input, CalculationInput):
            logger.error("Input must be CalculationInput instance")
            return False

        if not isinstance(calc_input.raw_record, dict):
            logger.error("raw_record must be a dictionary")
            return False

        return True
