# Dashboard Services Module
# 
# Contains business logic services for product analytics

from .analysis_service import ProductAnalysisService, ProductNotFoundError
from .record_repository import ProductRepository, RepositoryError
from .export_service import export_records_csv

__all__ = [
    'ProductAnalysisService',
    'ProductNotFoundError',
    'ProductRepository',
    'RepositoryError',
    'export_records_csv'
]
