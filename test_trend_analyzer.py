#!/usr/bin/env python3
"""
Test Suite for half-over-half trends, projected growth and daily trends
"""

import unittest
from datetime import date

from product_analytics.dashboard.calculators import derive_metrics
from product_analytics.dashboard.models import TrendDirection
from product_analytics.dashboard.services import trend_analyzer


def records_with_profits(profits, investment=100):
    return [
        derive_metrics({'investment': investment, 'revenue': investment + profit},
                       record_date=date(2025, 5, index + 1))
        for index, profit in enumerate(profits)
    ]


class TestPercentChange(unittest.TestCase):

    def test_relative_change(self):
        self.assertAlmostEqual(trend_analyzer.percent_change(50, 75), 50.0)
        self.assertAlmostEqual(trend_analyzer.percent_change(80, 40), -50.0)

    def test_no_baseline(self):
        self.assertEqual(trend_analyzer.percent_change(0, 10), 100.0)
        self.assertEqual(trend_analyzer.percent_change(0, 0), 0.0)

    def test_direction_threshold(self):
        self.assertEqual(trend_analyzer.trend_direction(1.5), TrendDirection.UP)
        self.assertEqual(trend_analyzer.trend_direction(-1.5), TrendDirection.DOWN)
        self.assertEqual(trend_analyzer.trend_direction(0.5), TrendDirection.STABLE)


class TestComputeTrend(unittest.TestCase):

    def test_profit_trend(self):
        trend = trend_analyzer.compute_trend(records_with_profits([10, 20, 30, 80]))
        self.assertAlmostEqual(trend.profit.percent_change, (110 - 30) / 30 * 100)
        self.assertAlmostEqual(trend.profit.percent_change, 266.67, places=2)
        self.assertEqual(trend.profit.direction, TrendDirection.UP)
        self.assertEqual(trend.investment.direction, TrendDirection.STABLE)

    def test_roi_is_point_difference(self):
        trend = trend_analyzer.compute_trend(records_with_profits([10, 20, 30, 80]))
        # mean ROI 15% -> 55%
        self.assertAlmostEqual(trend.roi.percent_change, 40.0)
        self.assertEqual(trend.roi.direction, TrendDirection.UP)

    def test_unsorted_input(self):
        records = records_with_profits([10, 20, 30, 80])
        trend = trend_analyzer.compute_trend(list(reversed(records)))
        self.assertAlmostEqual(trend.profit.percent_change, (110 - 30) / 30 * 100)

    def test_fewer_than_two_records_is_stable(self):
        for records in ([], records_with_profits([50])):
            trend = trend_analyzer.compute_trend(records)
            for result in (trend.investment, trend.revenue, trend.profit, trend.roi):
                self.assertEqual(result.percent_change, 0.0)
                self.assertEqual(result.direction, TrendDirection.STABLE)


class TestProjectedGrowth(unittest.TestCase):

    def test_growth(self):
        self.assertAlmostEqual(trend_analyzer.projected_growth(records_with_profits([10, 20, 30, 80])),
                               (110 - 30) / 30 * 100)

    def test_unprofitable_first_half(self):
        self.assertEqual(trend_analyzer.projected_growth(records_with_profits([-10, 0, 30, 80])), 0.0)
        self.assertEqual(trend_analyzer.projected_growth([]), 0.0)


class TestDailyTrends(unittest.TestCase):

    def test_ten_percent_band(self):
        trends = trend_analyzer.daily_trends(records_with_profits([100, 105, 120, 100]))
        self.assertEqual([t.direction for t in trends], [
            TrendDirection.STABLE,
            TrendDirection.STABLE,
            TrendDirection.UP,
            TrendDirection.DOWN,
        ])

    def test_break_even_point(self):
        records = [derive_metrics({'investment': 100, 'revenue': 400, 'sales': 8}, record_date=date(2025, 5, 1))]
        self.assertAlmostEqual(trend_analyzer.break_even_point(records), 2.0)


if __name__ == '__main__':
    unittest.main()
