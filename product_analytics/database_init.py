#!/usr/bin/env python3
"""
Database initialization
Creates the products / product_data tables when they don't exist
"""

import logging
import sqlite3
from typing import Optional

from .utils.database_utils import DatabaseManager, DatabasePathError, get_database_manager

logger = logging.getLogger(__name__)

# Derived metrics (profit, roi, ctr, ...) are not stored; they are always
# recomputed from the raw columns when records are loaded.
SCHEMA = """
CREATE TABLE IF NOT EXISTS products (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    name TEXT NOT NULL,
    image TEXT,
    is_physical BOOLEAN NOT NULL DEFAULT FALSE,
    shipping_cost REAL NOT NULL DEFAULT 0,
    shipping_mode TEXT NOT NULL DEFAULT 'fixed',
    production_cost REAL NOT NULL DEFAULT 0,
    production_mode TEXT NOT NULL DEFAULT 'fixed',
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS product_data (
    product_id TEXT NOT NULL,
    date DATE NOT NULL,
    investment REAL NOT NULL DEFAULT 0,
    revenue REAL NOT NULL DEFAULT 0,
    visits INTEGER NOT NULL DEFAULT 0,
    clicks INTEGER NOT NULL DEFAULT 0,
    impressions INTEGER NOT NULL DEFAULT 0,
    sales INTEGER NOT NULL DEFAULT 0,
    initiate_checkout INTEGER NOT NULL DEFAULT 0,
    updated_at TEXT NOT NULL,
    PRIMARY KEY (product_id, date),
    FOREIGN KEY (product_id) REFERENCES products(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_products_user ON products(user_id);
"""


def initialize_database(db_manager: Optional[DatabaseManager] = None) -> bool:
    """Create the analytics tables; returns False when the database is unreachable"""
    db_manager = db_manager or get_database_manager()
    try:
        with db_manager.get_connection('product_analytics') as conn:
            conn.executescript(SCHEMA)
        logger.info("✅ Analytics database schema is ready")
        return True
    except Exception as e:
        logger.error(f"❌ Database initialization failed: {e}")
        return False


def check_database_health(db_manager: Optional[DatabaseManager] = None) -> bool:
    """Verify that the expected tables exist"""
    db_manager = db_manager or get_database_manager()
    try:
        with db_manager.get_connection('product_analytics') as conn:
            tables = {
                row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
            }
        missing = {'products', 'product_data'} - tables
        if missing:
            logger.warning(f"⚠️ Missing tables: {sorted(missing)}")
            return False
        return True
    except (DatabasePathError, sqlite3.Error) as e:
        logger.error(f"❌ Database health check failed: {e}")
        return False
