"""
Database Utilities Module

Database path discovery and connection utilities.
Provides centralized database path management for the analytics store.
"""

import sqlite3
import logging
from pathlib import Path
from typing import Dict, Optional, Union
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class DatabasePathError(Exception):
    """Custom exception for database path related errors."""
    pass


class DatabaseManager:
    """
    Centralized database path discovery and management.

    Paths come from an explicit directory, the ANALYTICS_DB_PATH setting, or
    the project's ``database`` directory, in that order.
    """

    # Supported database configurations
    DATABASE_CONFIGS = {
        'product_analytics': {
            'filename': 'product_analytics.db',
            'description': 'Products and their daily marketing records'
        }
    }

    def __init__(self, database_dir: Optional[Union[str, Path]] = None,
                 database_path: Optional[Union[str, Path]] = None):
        """
        Initialize the database manager.

        Args:
            database_dir: Optional directory holding the database files.
            database_path: Optional explicit path for the analytics database file.
        """
        self._database_paths: Dict[str, Path] = {}

        if database_path:
            db_path = Path(database_path)
            self._database_dir = db_path.parent
            self._database_paths['product_analytics'] = db_path
        else:
            if database_dir:
                self._database_dir = Path(database_dir)
            else:
                self._database_dir = self._default_database_dir()
            self._discover_databases(use_configured_path=not database_dir)

        logger.info(f"✅ Database manager initialized with directory: {self._database_dir}")

    @staticmethod
    def _default_database_dir() -> Path:
        from ..config import config

        configured = config.ANALYTICS_DB_PATH
        if configured:
            return Path(configured).parent
        return Path(__file__).resolve().parent.parent.parent / "database"

    def _discover_databases(self, use_configured_path: bool = True) -> None:
        """Register database paths under the database directory."""
        from ..config import config

        for db_key, db_config in self.DATABASE_CONFIGS.items():
            if db_key == 'product_analytics' and use_configured_path and config.ANALYTICS_DB_PATH:
                db_path = Path(config.ANALYTICS_DB_PATH)
            else:
                db_path = self._database_dir / db_config['filename']
            self._database_paths[db_key] = db_path
            if db_path.exists():
                logger.debug(f"Found existing database: {db_key} at {db_path}")
            else:
                logger.info(f"Database path registered for on-demand creation: {db_key} at {db_path}")

    def get_database_path(self, database_key: str) -> Path:
        """
        Get the path to a specific database.

        Raises:
            DatabasePathError: If database key is invalid
        """
        if database_key not in self.DATABASE_CONFIGS:
            valid_keys = ", ".join(self.DATABASE_CONFIGS.keys())
            raise DatabasePathError(
                f"Invalid database key '{database_key}'. "
                f"Valid keys: {valid_keys}"
            )

        if database_key not in self._database_paths:
            db_config = self.DATABASE_CONFIGS[database_key]
            self._database_paths[database_key] = self._database_dir / db_config['filename']
        return self._database_paths[database_key]

    @contextmanager
    def get_connection(self, database_key: str = 'product_analytics', **kwargs):
        """
        Get a database connection with automatic cleanup.
        Creates database file if it doesn't exist.

        Example:
            with db_manager.get_connection('product_analytics') as conn:
                conn.execute("SELECT COUNT(*) FROM products")
        """
        db_path = self.get_database_path(database_key)
        db_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            conn = sqlite3.connect(
                str(db_path),
                timeout=30,
                isolation_level=None,          # Enable autocommit mode
                check_same_thread=False,
                **kwargs
            )
        except sqlite3.Error as e:
            raise DatabasePathError(f"Database connection error for {database_key}: {e}")

        try:
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
            conn.execute("PRAGMA journal_mode = WAL")
            yield conn
        finally:
            conn.close()


# Global database manager instance
_db_manager: Optional[DatabaseManager] = None


def get_database_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


__all__ = [
    'DatabaseManager',
    'DatabasePathError',
    'get_database_manager'
]
