# Export Service
#
# CSV export of a product's daily records, one row per record, with a
# configurable (locale) decimal separator.

import logging
from typing import Optional, Sequence

import pandas as pd

from ..models import DailyRecord
from .period_filter import sort_by_date
from ...config import config

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    ('date', 'Date'),
    ('investment', 'Investment'),
    ('revenue', 'Revenue'),
    ('profit', 'Profit'),
    ('roi', 'ROI (%)'),
    ('visits', 'Visits'),
    ('clicks', 'Clicks'),
    ('impressions', 'Impressions'),
    ('ctr', 'CTR (%)'),
    ('cpc', 'CPC'),
    ('cpm', 'CPM'),
    ('checkouts_initiated', 'Checkouts Initiated'),
    ('sales', 'Sales'),
    ('conversion_rate', 'Conversion Rate (%)'),
]


def records_to_dataframe(records: Sequence[DailyRecord]) -> pd.DataFrame:
    """Date-sorted DataFrame with raw and derived columns"""
    rows = [
        {name: getattr(record, name) for name, _ in EXPORT_COLUMNS}
        for record in sort_by_date(records)
    ]
    df = pd.DataFrame(rows, columns=[name for name, _ in EXPORT_COLUMNS])
    if not df.empty:
        df['date'] = pd.to_datetime(df['date']).dt.strftime('%d/%m/%Y')
    return df.rename(columns=dict(EXPORT_COLUMNS))


def export_records_csv(records: Sequence[DailyRecord], decimal: Optional[str] = None,
                       sep: Optional[str] = None) -> str:
    """
    Render records as CSV text.

    Args:
        records: Records to export
        decimal: Decimal separator, defaults to CSV_DECIMAL_SEPARATOR
        sep: Field separator, defaults to CSV_FIELD_SEPARATOR

    Returns:
        CSV content including a header row
    """
    decimal = decimal or config.CSV_DECIMAL_SEPARATOR
    sep = sep or config.CSV_FIELD_SEPARATOR
    if sep == decimal:
        raise ValueError("CSV field separator and decimal separator must differ")

    df = records_to_dataframe(records)
    logger.info(f"📄 Exporting {len(df)} records to CSV")
    return df.to_csv(index=False, sep=sep, decimal=decimal, float_format='%.2f')
