#!/usr/bin/env python3
"""
Test Suite for the rule-based insights and recommendations
"""

import unittest
from datetime import date

from product_analytics.dashboard.calculators import derive_metrics
from product_analytics.dashboard.models import CostComponent, CostMode, PhysicalCostConfig
from product_analytics.dashboard.services import aggregator, trend_analyzer
from product_analytics.dashboard.services.insight_generator import (
    INSUFFICIENT_DATA_INSIGHT,
    INSUFFICIENT_DATA_RECOMMENDATION,
    format_currency,
    generate_insights,
)


def build_report(records, **overrides):
    averages = aggregator.average_metrics(records)
    kwargs = dict(
        aggregate=aggregator.aggregate(records),
        trend=trend_analyzer.compute_trend(records),
        weekday_performance=aggregator.weekday_performance(records),
        funnel=aggregator.conversion_funnel(records),
        best_day=aggregator.find_best_day(records),
        worst_day=aggregator.find_worst_day(records),
        projected_growth=trend_analyzer.projected_growth(records),
        average_roi=aggregator.mean_of_roi(records) if records else None,
        average_sales=averages['sales'],
        average_revenue=averages['revenue'],
    )
    kwargs.update(overrides)
    return generate_insights(**kwargs)


class TestInsightGenerator(unittest.TestCase):

    def setUp(self):
        # 2025-03-09 is a Sunday
        self.records = [
            derive_metrics({'investment': 100, 'revenue': 120, 'visits': 1000, 'checkouts_initiated': 120,
                            'sales': 10}, record_date=date(2025, 3, 9)),
            derive_metrics({'investment': 100, 'revenue': 110, 'visits': 1000, 'checkouts_initiated': 120,
                            'sales': 10}, record_date=date(2025, 3, 10)),
            derive_metrics({'investment': 100, 'revenue': 400, 'visits': 1000, 'checkouts_initiated': 120,
                            'sales': 70}, record_date=date(2025, 3, 11)),
        ]

    def test_no_data_placeholders(self):
        report = build_report([])
        self.assertEqual(report.insights, [INSUFFICIENT_DATA_INSIGHT])
        self.assertEqual(report.recommendations, [INSUFFICIENT_DATA_RECOMMENDATION])

    def test_best_day_insights(self):
        report = build_report(self.records)

        self.assertTrue(report.insights[0].startswith("Your best day was 11/03/2025"))
        self.assertIn("ROI on that day was exceptionally high: 300.00%.", report.insights)
        self.assertIn("Sales were 2.3x higher than average.", report.insights)

    def test_best_weekday_insight_and_recommendation(self):
        report = build_report(self.records)
        self.assertTrue(any(i.startswith("Tuesday is the best performing day") for i in report.insights))
        self.assertIn("Concentrate more investment on Tuesday, which has the best performance.",
                      report.recommendations)

    def test_funnel_rules(self):
        report = build_report(self.records)
        # 90 sales of 3000 visits, 90 of 360 checkouts
        self.assertFalse(any("is excellent" in i or "is only" in i for i in report.insights))
        self.assertTrue(any(i.startswith("75% of checkouts do not turn into sales") for i in report.insights))
        self.assertIn("Improve the product page experience to raise the checkout rate.", report.recommendations)
        self.assertIn("Simplify the checkout process to reduce cart abandonment.", report.recommendations)

    def test_low_conversion_insight(self):
        records = [derive_metrics({'investment': 10, 'revenue': 20, 'visits': 1000, 'sales': 1},
                                  record_date=date(2025, 3, 9))]
        report = build_report(records)
        self.assertTrue(any("visit to sale conversion rate is only 0.10%" in i for i in report.insights))

    def test_growth_insights(self):
        self.assertTrue(any("growing strongly" in i for i in build_report(self.records).insights))

        declining = build_report(self.records, projected_growth=-35.0)
        self.assertTrue(any(i.startswith("Warning: your product has declined 35%") for i in declining.insights))
        self.assertIn("Review your marketing strategy and consider testing new approaches.",
                      declining.recommendations)

    def test_roi_recommendations(self):
        # mean daily ROI (20 + 10 + 300) / 3 = 110
        report = build_report(self.records)
        self.assertEqual(report.recommendations[0],
                         "Your ROI is healthy. Consider increasing investment to scale results.")

        low = build_report(self.records, average_roi=30.0)
        self.assertEqual(low.recommendations[0],
                         "Reduce acquisition costs or raise the average order value to improve ROI.")
        self.assertTrue(any("below ideal" in i for i in low.insights))

        high = build_report(self.records, average_roi=180.0)
        self.assertTrue(any("Consider scaling up your investment" in i for i in high.insights))

    def test_physical_cost_recommendation(self):
        config = PhysicalCostConfig(
            shipping=CostComponent(amount=40, mode=CostMode.FIXED),
            production=CostComponent(amount=30, mode=CostMode.FIXED),
        )
        report = build_report(self.records, is_physical=True, physical_cost_config=config)
        self.assertIn("Production and shipping costs take a large share of revenue. Look for ways to reduce them.",
                      report.recommendations)

        cheap = PhysicalCostConfig(shipping=CostComponent(amount=1, mode=CostMode.FIXED))
        report = build_report(self.records, is_physical=True, physical_cost_config=cheap)
        self.assertFalse(any("Production and shipping" in r for r in report.recommendations))

    def test_losing_best_day_is_not_highlighted(self):
        records = [derive_metrics({'investment': 100, 'revenue': 50}, record_date=date(2025, 3, 9))]
        report = build_report(records)
        self.assertFalse(any(i.startswith("Your best day") for i in report.insights))


class TestFormatCurrency(unittest.TestCase):

    def test_format(self):
        self.assertTrue(format_currency(1234.5).endswith("1,234.50"))
        self.assertTrue(format_currency(-10).startswith("-"))


if __name__ == '__main__':
    unittest.main()
