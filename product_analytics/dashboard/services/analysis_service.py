# Product Analysis Service
#
# Composes the calculators and services into the views of the dashboard:
# the product detail analysis, the portfolio overview, the product comparison
# table and the monthly summary. Products are loaded through the repository
# and cached per product.

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Union

from ..models import (
    DailyRecord, DateRange, MonthlySummary, PhysicalCostConfig, PortfolioStats, Product, ProductSummary
)
from . import aggregator, trend_analyzer
from .chart_series import build_chart_data
from .insight_generator import generate_insights
from .period_filter import filter_by_range, get_months_in_range
from .record_repository import ProductRepository
from ...auth import SessionService
from ...utils.cache import TTLCache
from ...utils.timezone_utils import today_in_timezone

logger = logging.getLogger(__name__)

PRODUCT_KEY_PREFIX = 'product:'
PRODUCT_LIST_KEY_PREFIX = 'products:'


class ProductNotFoundError(Exception):
    """Raised when a product does not exist or belongs to another user"""
    pass


def _serialize_optional(record: Optional[DailyRecord]) -> Optional[Dict[str, Any]]:
    return record.to_dict() if record is not None else None


class ProductAnalysisService:
    """Analysis views for the products of the signed-in user"""

    def __init__(self, repository: ProductRepository, cache: TTLCache, session: SessionService):
        self.repository = repository
        self.cache = cache
        self.session = session

    # === LOADING ===

    def _product_key(self, product_id: str) -> str:
        return f"{PRODUCT_KEY_PREFIX}{product_id}"

    def _product_list_key(self, user_id: str) -> str:
        return f"{PRODUCT_LIST_KEY_PREFIX}{user_id}"

    def get_product(self, product_id: str) -> Product:
        user_id = self.session.require_user()
        key = self._product_key(product_id)

        product = self.cache.get(key)
        if product is not None and product.user_id != user_id:
            raise ProductNotFoundError(f"Product not found: {product_id}")
        if product is None:
            product = self.repository.get_product(product_id, user_id=user_id)
            if product is None:
                raise ProductNotFoundError(f"Product not found: {product_id}")
            self.cache.set(key, product)
        return product

    def list_products(self) -> List[Product]:
        user_id = self.session.require_user()
        key = self._product_list_key(user_id)

        product_ids = self.cache.get(key)
        if product_ids is None:
            products = self.repository.list_products(user_id)
            for product in products:
                self.cache.set(self._product_key(product.product_id), product)
            self.cache.set(key, [product.product_id for product in products])
            return products

        return [self.get_product(product_id) for product_id in product_ids]

    def invalidate_product(self, product_id: str) -> None:
        self.cache.invalidate(self._product_key(product_id))
        self.cache.invalidate_prefix(PRODUCT_LIST_KEY_PREFIX)

    # === VIEWS ===

    def analyze_product(self, product_id: str, date_range: Optional[DateRange] = None) -> Dict[str, Any]:
        """
        Full analysis of one product over a period.

        Args:
            product_id: Product to analyze
            date_range: Inclusive period, None for every record

        Returns:
            Dict with the product, its records, aggregate stats, trends,
            insights and chart data for the period

        Raises:
            SessionExpiredError: If no user is signed in
            ProductNotFoundError: If the product is unknown to the user
        """
        product = self.get_product(product_id)
        records = filter_by_range(product.records, date_range)
        logger.info(f"🚀 Analyzing product {product_id} over {len(records)} records")

        stats = aggregator.aggregate(records, product.physical_costs, product.is_physical)
        trend = trend_analyzer.compute_trend(records)
        weekday = aggregator.weekday_performance(records)
        funnel = aggregator.conversion_funnel(records)
        best_day = aggregator.find_best_day(records)
        worst_day = aggregator.find_worst_day(records)
        averages = aggregator.average_metrics(records)
        growth = trend_analyzer.projected_growth(records)
        best_weekday = aggregator.best_weekday(weekday)

        report = generate_insights(
            aggregate=stats,
            trend=trend,
            weekday_performance=weekday,
            funnel=funnel,
            best_day=best_day,
            worst_day=worst_day,
            projected_growth=growth,
            average_roi=aggregator.mean_of_roi(records) if records else None,
            average_sales=averages['sales'],
            average_revenue=averages['revenue'],
            is_physical=product.is_physical,
            physical_cost_config=product.physical_costs,
        )
        charts = build_chart_data(
            records, weekday, funnel, stats,
            physical_cost_config=product.physical_costs,
            is_physical=product.is_physical,
        )

        return {
            'product': product.to_dict(),
            'date_range': date_range.to_dict() if date_range else None,
            'records': [record.to_dict() for record in records],
            'stats': stats.to_dict(),
            'trends': trend.to_dict(),
            'best_day': _serialize_optional(best_day),
            'worst_day': _serialize_optional(worst_day),
            'average_metrics': averages,
            'best_worst_metrics': aggregator.best_and_worst_metrics(records),
            'daily_trends': [day.to_dict() for day in trend_analyzer.daily_trends(records)],
            'weekday_performance': [day.to_dict() for day in weekday],
            'best_weekday': best_weekday.to_dict() if best_weekday else None,
            'funnel': funnel.to_dict(),
            'profit_margin': aggregator.profit_margin(records),
            'break_even_point': trend_analyzer.break_even_point(records),
            'projected_growth': growth,
            'insights': report.insights,
            'recommendations': report.recommendations,
            'charts': {name: chart.to_dict() for name, chart in charts.items()},
        }

    def product_summaries(self, date_range: Optional[DateRange] = None) -> List[ProductSummary]:
        """Comparison-table rows for every product of the user"""
        return [aggregator.summarize_product(product, date_range) for product in self.list_products()]

    def portfolio(self, date_range: Optional[DateRange] = None, top_n: int = 5) -> PortfolioStats:
        products = self.list_products()
        logger.info(f"Building portfolio over {len(products)} products")
        return aggregator.portfolio_stats(products, date_range, top_n=top_n)

    def monthly(self, product_ids: Optional[Sequence[str]] = None, months: int = 6,
                today: Optional[date] = None) -> Dict[str, Any]:
        """
        Month-by-month totals for the last `months` calendar months.

        Records of the selected products (all of them when product_ids is
        None) are pooled before bucketing.
        """
        today = today or today_in_timezone()
        months = max(1, months)

        year, month = today.year, today.month - (months - 1)
        while month < 1:
            year, month = year - 1, month + 12
        window = DateRange(date(year, month, 1), today)

        if product_ids is None:
            products = self.list_products()
        else:
            products = [self.get_product(product_id) for product_id in product_ids]

        records: List[DailyRecord] = []
        for product in products:
            records.extend(filter_by_range(product.records, window))

        summaries: List[MonthlySummary] = aggregator.monthly_summaries(records)
        return {
            'months': get_months_in_range(window.start, window.end, today=today),
            'summaries': [summary.to_dict() for summary in summaries],
        }

    # === WRITES ===

    def upsert_daily_record(self, product_id: str, record_date: Union[str, date],
                            raw: Dict[str, Any]) -> DailyRecord:
        """Save one day of raw results and drop the cached copies of the product"""
        self.get_product(product_id)
        record = self.repository.upsert_daily_record(product_id, record_date, raw)
        self.invalidate_product(product_id)
        return record

    def update_physical_costs(self, product_id: str, is_physical: bool,
                              physical_costs: PhysicalCostConfig) -> Product:
        """Change the product type and its shipping/production costs"""
        self.get_product(product_id)
        if not self.repository.update_physical_costs(product_id, is_physical, physical_costs):
            raise ProductNotFoundError(f"Product not found: {product_id}")
        self.invalidate_product(product_id)
        logger.info(f"Updated physical costs of {product_id} (physical={is_physical})")
        return self.get_product(product_id)

    def export_records(self, product_id: str, date_range: Optional[DateRange] = None) -> List[DailyRecord]:
        return filter_by_range(self.get_product(product_id).records, date_range)
