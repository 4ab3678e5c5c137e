#!/usr/bin/env python3
"""
Test Suite for physical product costs (shipping and production)
"""

import unittest
from datetime import date

from product_analytics.dashboard.calculators import PhysicalCostCalculators, apply_physical_costs, derive_metrics
from product_analytics.dashboard.models import CostComponent, CostMode, PhysicalCostConfig
from product_analytics.dashboard.services.aggregator import aggregate


class TestPhysicalCostCalculators(unittest.TestCase):

    def setUp(self):
        self.config = PhysicalCostConfig(
            shipping=CostComponent(amount=5, mode=CostMode.FIXED),
            production=CostComponent(amount=10, mode=CostMode.PERCENTAGE),
        )

    def test_cost_breakdown(self):
        breakdown = PhysicalCostCalculators.calculate_cost_breakdown(10, 1000, self.config)
        self.assertAlmostEqual(breakdown['shipping'], 50.0)
        self.assertAlmostEqual(breakdown['production'], 100.0)
        self.assertAlmostEqual(breakdown['total'], 150.0)

    def test_fixed_and_percentage_parts(self):
        self.assertAlmostEqual(PhysicalCostCalculators.calculate_fixed_cost(10, self.config), 50.0)
        self.assertAlmostEqual(PhysicalCostCalculators.calculate_percentage_cost(1000, self.config), 100.0)
        self.assertAlmostEqual(PhysicalCostCalculators.calculate_total_cost(10, 1000, self.config), 150.0)

    def test_same_mode_costs_add_up(self):
        both_fixed = PhysicalCostConfig(
            shipping=CostComponent(amount=5, mode=CostMode.FIXED),
            production=CostComponent(amount=3, mode=CostMode.FIXED),
        )
        self.assertAlmostEqual(PhysicalCostCalculators.calculate_total_cost(10, 100, both_fixed), 80.0)

        both_percentage = PhysicalCostConfig(
            shipping=CostComponent(amount=5, mode=CostMode.PERCENTAGE),
            production=CostComponent(amount=10, mode=CostMode.PERCENTAGE),
        )
        self.assertAlmostEqual(PhysicalCostCalculators.calculate_total_cost(10, 1000, both_percentage), 150.0)

    def test_unsupported_mode_costs_nothing(self):
        config = PhysicalCostConfig.from_dict({
            'shipping': {'amount': 5, 'mode': 'per_kg'},
            'production': {'amount': 2, 'mode': 'fixed'},
        })
        self.assertEqual(config.shipping.mode, CostMode.UNSUPPORTED)
        self.assertAlmostEqual(PhysicalCostCalculators.calculate_total_cost(3, 100, config), 6.0)

    def test_legacy_keys(self):
        config = PhysicalCostConfig.from_dict({
            'frete': {'valor': 4, 'tipo': 'fixo'},
            'producao': {'valor': 20, 'tipo': 'percentual'},
        })
        self.assertEqual(config.shipping, CostComponent(amount=4, mode=CostMode.FIXED))
        self.assertEqual(config.production, CostComponent(amount=20, mode=CostMode.PERCENTAGE))


class TestApplyPhysicalCosts(unittest.TestCase):

    def setUp(self):
        self.config = PhysicalCostConfig(
            shipping=CostComponent(amount=5, mode=CostMode.FIXED),
            production=CostComponent(amount=10, mode=CostMode.PERCENTAGE),
        )
        self.record = derive_metrics({
            'investment': 200, 'revenue': 1000, 'sales': 10, 'clicks': 100, 'impressions': 10000
        }, record_date=date(2025, 4, 1))

    def test_investment_grows_by_physical_cost(self):
        adjusted = apply_physical_costs(self.record, self.config, is_physical=True)

        self.assertAlmostEqual(adjusted.investment, 350.0)
        self.assertAlmostEqual(adjusted.physical_costs, 150.0)
        self.assertAlmostEqual(adjusted.profit, 650.0)
        self.assertAlmostEqual(adjusted.roi, 650 / 350 * 100)
        self.assertAlmostEqual(adjusted.cpc, 3.5)
        self.assertAlmostEqual(adjusted.cpm, 35.0)

    def test_not_physical_is_unchanged(self):
        self.assertIs(apply_physical_costs(self.record, self.config, is_physical=False), self.record)

    def test_missing_config_is_unchanged(self):
        self.assertIs(apply_physical_costs(self.record, None, is_physical=True), self.record)

    def test_aggregate_applies_costs_once(self):
        stats = aggregate([self.record], self.config, is_physical=True)
        self.assertAlmostEqual(stats.investment, 350.0)
        self.assertAlmostEqual(stats.physical_costs, 150.0)
        self.assertAlmostEqual(stats.profit, 650.0)


if __name__ == '__main__':
    unittest.main()
