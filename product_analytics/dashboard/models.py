"""
Dashboard Data Model

Typed containers passed between the calculation stages:
- DailyRecord: one day of marketing data for one product (raw + derived fields)
- PhysicalCostConfig: shipping/production costs for physical goods
- DateRange, Product
- Result types: AggregateStats, TrendSummary, WeekdayPerformance,
  ConversionFunnel, MonthlySummary, ProductSummary, PortfolioStats,
  InsightReport, ChartData
"""

from dataclasses import dataclass, field, fields, asdict
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = ['Sunday', 'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday']

RAW_FIELDS = (
    'investment', 'revenue', 'visits', 'clicks',
    'impressions', 'sales', 'checkouts_initiated'
)
COUNTER_FIELDS = ('visits', 'clicks', 'impressions', 'sales', 'checkouts_initiated')


def _serialize(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: _serialize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    return value


class SerializableMixin:
    """JSON-friendly dict conversion for dataclasses holding dates and enums"""

    def to_dict(self) -> Dict[str, Any]:
        return _serialize(asdict(self))


# === COST CONFIGURATION ===

class CostMode(str, Enum):
    FIXED = 'fixed'
    PERCENTAGE = 'percentage'
    UNSUPPORTED = 'unsupported'

    @classmethod
    def parse(cls, value: Any) -> 'CostMode':
        """Map a stored mode name (English or the legacy Portuguese one) to a CostMode"""
        if isinstance(value, CostMode):
            return value
        aliases = {
            'fixed': cls.FIXED,
            'fixo': cls.FIXED,
            'percentage': cls.PERCENTAGE,
            'percent': cls.PERCENTAGE,
            'percentual': cls.PERCENTAGE,
        }
        mode = aliases.get(str(value).strip().lower()) if value is not None else None
        if mode is None:
            logger.warning(f"Unsupported cost mode {value!r}, cost line will be zero")
            return cls.UNSUPPORTED
        return mode


@dataclass(frozen=True)
class CostComponent(SerializableMixin):
    """A single cost line: a per-sale amount (fixed) or a share of revenue (percentage)"""
    amount: float = 0.0
    mode: CostMode = CostMode.FIXED

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'CostComponent':
        if not data:
            return cls()
        from .calculators.base_calculators import BaseCalculator

        amount = data.get('amount', data.get('valor', 0))
        mode = data.get('mode', data.get('tipo', CostMode.FIXED.value))
        return cls(amount=BaseCalculator.coerce_amount(amount), mode=CostMode.parse(mode))


@dataclass(frozen=True)
class PhysicalCostConfig(SerializableMixin):
    shipping: CostComponent = field(default_factory=CostComponent)
    production: CostComponent = field(default_factory=CostComponent)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'PhysicalCostConfig':
        if not data:
            return cls()
        return cls(
            shipping=CostComponent.from_dict(data.get('shipping', data.get('frete'))),
            production=CostComponent.from_dict(data.get('production', data.get('producao'))),
        )

    @property
    def components(self) -> Dict[str, CostComponent]:
        return {'shipping': self.shipping, 'production': self.production}


# === RECORDS ===

@dataclass(frozen=True)
class DailyRecord(SerializableMixin):
    """
    One calendar day of performance data for one product.

    Derived fields (profit, roi, ctr, cpc, cpm, conversion_rate) are always
    computed from the raw fields by ``derive_metrics``; build records through
    that function rather than directly.
    """
    date: date
    investment: float = 0.0
    revenue: float = 0.0
    visits: int = 0
    clicks: int = 0
    impressions: int = 0
    sales: int = 0
    checkouts_initiated: int = 0
    # Derived
    profit: float = 0.0
    roi: float = 0.0
    ctr: float = 0.0
    cpc: float = 0.0
    cpm: float = 0.0
    conversion_rate: float = 0.0
    physical_costs: float = 0.0

    @classmethod
    def from_raw(cls, raw: Dict[str, Any], record_date: Optional[date] = None) -> 'DailyRecord':
        from .calculators.metric_derivation import derive_metrics

        return derive_metrics(raw, record_date=record_date)

    def raw_values(self) -> Dict[str, Any]:
        """Raw input fields only, as stored by the persistence layer"""
        return {name: getattr(self, name) for name in RAW_FIELDS}


@dataclass(frozen=True)
class DateRange(SerializableMixin):
    """Inclusive range of calendar days"""
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass
class Product(SerializableMixin):
    """A product and its daily records, unique by date"""
    product_id: str
    name: str
    image: str = ''
    is_physical: bool = False
    physical_costs: PhysicalCostConfig = field(default_factory=PhysicalCostConfig)
    created_at: Optional[str] = None
    user_id: Optional[str] = None
    _records: Dict[date, DailyRecord] = field(default_factory=dict, repr=False)

    def upsert_record(self, record: DailyRecord) -> None:
        """Insert a record, replacing any existing record for the same day"""
        self._records[record.date] = record

    def upsert_records(self, records: List[DailyRecord]) -> None:
        for record in records:
            self.upsert_record(record)

    def record_for(self, day: date) -> Optional[DailyRecord]:
        return self._records.get(day)

    @property
    def records(self) -> List[DailyRecord]:
        return [self._records[day] for day in sorted(self._records)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.product_id,
            'name': self.name,
            'image': self.image,
            'is_physical': self.is_physical,
            'physical_costs': self.physical_costs.to_dict(),
            'created_at': self.created_at,
            'record_count': len(self._records),
        }


# === AGGREGATES ===

@dataclass(frozen=True)
class AggregateStats(SerializableMixin):
    investment: float = 0.0
    revenue: float = 0.0
    profit: float = 0.0
    roi: float = 0.0
    visits: int = 0
    sales: int = 0
    clicks: int = 0
    impressions: int = 0
    ctr: float = 0.0
    cpc: float = 0.0
    cpm: float = 0.0
    conversion_rate: float = 0.0
    physical_costs: float = 0.0
    checkouts_initiated: int = 0

    @classmethod
    def empty(cls) -> 'AggregateStats':
        return cls()


class TrendDirection(str, Enum):
    UP = 'up'
    DOWN = 'down'
    STABLE = 'stable'


@dataclass(frozen=True)
class TrendResult(SerializableMixin):
    metric: str
    percent_change: float = 0.0
    direction: TrendDirection = TrendDirection.STABLE


@dataclass(frozen=True)
class TrendSummary(SerializableMixin):
    investment: TrendResult
    revenue: TrendResult
    profit: TrendResult
    roi: TrendResult

    @classmethod
    def stable(cls) -> 'TrendSummary':
        return cls(*(TrendResult(metric=f.name) for f in fields(cls)))


@dataclass(frozen=True)
class DailyTrend(SerializableMixin):
    date: date
    profit: float
    direction: TrendDirection


@dataclass(frozen=True)
class WeekdayPerformance(SerializableMixin):
    """Mean values per record for one weekday (0=Sunday..6=Saturday)"""
    weekday: int
    name: str
    profit: float = 0.0
    revenue: float = 0.0
    investment: float = 0.0
    roi: float = 0.0
    sales: float = 0.0
    count: int = 0


@dataclass(frozen=True)
class ConversionFunnel(SerializableMixin):
    visits: int = 0
    checkouts_initiated: int = 0
    sales: int = 0
    visit_to_checkout_rate: float = 0.0
    checkout_to_sale_rate: float = 0.0
    visit_to_sale_rate: float = 0.0


@dataclass(frozen=True)
class MonthlySummary(SerializableMixin):
    month: str
    investment: float = 0.0
    revenue: float = 0.0
    profit: float = 0.0
    roi: float = 0.0
    record_count: int = 0


@dataclass(frozen=True)
class ProductSummary(SerializableMixin):
    product_id: str
    name: str
    total_investment: float = 0.0
    total_revenue: float = 0.0
    total_profit: float = 0.0
    average_roi: float = 0.0
    totals_roi: float = 0.0
    record_count: int = 0


@dataclass(frozen=True)
class PortfolioStats(SerializableMixin):
    total_investment: float = 0.0
    total_revenue: float = 0.0
    total_profit: float = 0.0
    overall_roi: float = 0.0
    top_products: List[ProductSummary] = field(default_factory=list)


@dataclass
class InsightReport(SerializableMixin):
    insights: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ChartSeries(SerializableMixin):
    label: str
    values: List[float] = field(default_factory=list)


@dataclass(frozen=True)
class ChartData(SerializableMixin):
    labels: List[str] = field(default_factory=list)
    series: List[ChartSeries] = field(default_factory=list)
