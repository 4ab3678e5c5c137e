"""
Dashboard Calculators Module

This module contains all calculation logic for product metrics, organized into logical categories.
Each calculator is standalone and handles specific types of calculations.

=== CALCULATOR ORGANIZATION ===

BASE_CALCULATORS.PY
- CalculationInput: Standardized input data structure with coercing accessors
- BaseCalculator: Common utilities (safe_divide, safe_percentage, coercion)

REVENUE_CALCULATORS.PY
- calculate_profit: revenue - investment

ROI_CALCULATORS.PY
- calculate_roi / calculate_totals_based_roi: profit / investment * 100
- calculate_mean_of_roi: simple average of ROI values

RATE_CALCULATORS.PY
- calculate_ctr, calculate_conversion_rate
- calculate_visit_to_checkout_rate, calculate_checkout_to_sale_rate
- calculate_profit_margin

COST_CALCULATORS.PY
- calculate_cpc, calculate_cpm, calculate_break_even_point

PHYSICAL_COST_CALCULATORS.PY
- PhysicalCostCalculators: fixed and percentage shipping/production costs
- apply_physical_costs: layer costs onto a record or aggregate

METRIC_DERIVATION.PY
- derive_metrics: raw counters -> DailyRecord
- derive_records: list of raw rows -> DailyRecords unique by date

=== USAGE ===

from product_analytics.dashboard.calculators import CalculationInput, ROICalculators

calc_input = CalculationInput(raw_record={'investment': 100, 'revenue': 150})
roi = ROICalculators.calculate_roi(calc_input)  # 50.0
"""

from .base_calculators import CalculationInput, BaseCalculator
from .revenue_calculators import RevenueCalculators
from .roi_calculators import ROICalculators
from .rate_calculators import RateCalculators
from .cost_calculators import CostCalculators
from .physical_cost_calculators import PhysicalCostCalculators, apply_physical_costs
from .metric_derivation import derive_metrics, derive_records

__all__ = [
    'CalculationInput',
    'BaseCalculator',
    'RevenueCalculators',
    'ROICalculators',
    'RateCalculators',
    'CostCalculators',
    'PhysicalCostCalculators',
    'apply_physical_costs',
    'derive_metrics',
    'derive_records'
]
