# Dashboard API Module
# 
# Contains Flask Blueprint for product analytics API routes

from .dashboard_routes import products_bp

__all__ = ['products_bp']
