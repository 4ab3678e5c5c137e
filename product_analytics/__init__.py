"""
Product Analytics

Per-product daily performance records turned into dashboard metrics,
trends, insights and chart series.
"""

__version__ = '0.1.0'
