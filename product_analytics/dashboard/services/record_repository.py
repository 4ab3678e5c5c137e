# Product Record Repository
#
# SQLite persistence for products and their daily records. Only raw fields
# are stored; records are rebuilt through derive_metrics on every load.

import logging
import sqlite3
import uuid
from datetime import date
from typing import Any, Dict, List, Optional, Union

from ..calculators import derive_metrics
from ..models import CostComponent, DailyRecord, PhysicalCostConfig, Product
from ...utils.database_utils import DatabaseManager, get_database_manager
from ...utils.timezone_utils import now_in_timezone

logger = logging.getLogger(__name__)

DATABASE_KEY = 'product_analytics'


class RepositoryError(Exception):
    """Raised when a persistence operation fails"""
    pass


def _timestamp() -> str:
    return now_in_timezone('UTC').isoformat()


class ProductRepository:
    """Products and daily records backed by the analytics database"""

    def __init__(self, db_manager: Optional[DatabaseManager] = None):
        self.db_manager = db_manager or get_database_manager()

    def _execute(self, query: str, params: tuple = ()) -> List[sqlite3.Row]:
        try:
            with self.db_manager.get_connection(DATABASE_KEY) as conn:
                cursor = conn.execute(query, params)
                return cursor.fetchall()
        except sqlite3.Error as e:
            logger.error(f"❌ Query failed: {e}")
            raise RepositoryError(str(e)) from e

    # === PRODUCTS ===

    def create_product(self, user_id: str, name: str, image: str = '',
                       is_physical: bool = False,
                       physical_costs: Optional[PhysicalCostConfig] = None) -> Product:
        if not user_id:
            raise RepositoryError("A user is required to create a product")
        if not name or not name.strip():
            raise RepositoryError("Product name is required")

        physical_costs = physical_costs or PhysicalCostConfig()
        product_id = str(uuid.uuid4())
        created_at = _timestamp()
        self._execute(
            """
            INSERT INTO products (id, user_id, name, image, is_physical,
                                  shipping_cost, shipping_mode, production_cost, production_mode,
                                  created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (product_id, user_id, name.strip(), image, int(is_physical),
             physical_costs.shipping.amount, physical_costs.shipping.mode.value,
             physical_costs.production.amount, physical_costs.production.mode.value,
             created_at, created_at)
        )
        logger.info(f"✅ Created product {product_id} for user {user_id}")
        return Product(
            product_id=product_id,
            name=name.strip(),
            image=image,
            is_physical=is_physical,
            physical_costs=physical_costs,
            created_at=created_at,
            user_id=user_id,
        )

    def _row_to_product(self, row: sqlite3.Row) -> Product:
        return Product(
            product_id=row['id'],
            name=row['name'],
            image=row['image'] or '',
            is_physical=bool(row['is_physical']),
            physical_costs=PhysicalCostConfig(
                shipping=CostComponent.from_dict({'amount': row['shipping_cost'], 'mode': row['shipping_mode']}),
                production=CostComponent.from_dict({'amount': row['production_cost'], 'mode': row['production_mode']}),
            ),
            created_at=row['created_at'],
            user_id=row['user_id'],
        )

    def get_product(self, product_id: str, user_id: Optional[str] = None,
                    with_records: bool = True) -> Optional[Product]:
        """Load a product (owned by user_id when given) with its records"""
        query = "SELECT * FROM products WHERE id = ?"
        params: tuple = (product_id,)
        if user_id is not None:
            query += " AND user_id = ?"
            params += (user_id,)

        rows = self._execute(query, params)
        if not rows:
            logger.warning(f"Product not found: {product_id}")
            return None

        product = self._row_to_product(rows[0])
        if with_records:
            product.upsert_records(self.fetch_daily_records(product_id))
        return product

    def list_products(self, user_id: str, with_records: bool = True) -> List[Product]:
        """All products of a user, newest first"""
        rows = self._execute(
            "SELECT * FROM products WHERE user_id = ? ORDER BY created_at DESC",
            (user_id,)
        )
        products = [self._row_to_product(row) for row in rows]
        if with_records:
            for product in products:
                product.upsert_records(self.fetch_daily_records(product.product_id))
        logger.info(f"Found {len(products)} products for user {user_id}")
        return products

    def update_physical_costs(self, product_id: str, is_physical: bool,
                              physical_costs: PhysicalCostConfig) -> bool:
        with self.db_manager.get_connection(DATABASE_KEY) as conn:
            try:
                cursor = conn.execute(
                    """
                    UPDATE products
                    SET is_physical = ?, shipping_cost = ?, shipping_mode = ?,
                        production_cost = ?, production_mode = ?, updated_at = ?
                    WHERE id = ?
                    """,
                    (int(is_physical),
                     physical_costs.shipping.amount, physical_costs.shipping.mode.value,
                     physical_costs.production.amount, physical_costs.production.mode.value,
                     _timestamp(), product_id)
                )
            except sqlite3.Error as e:
                raise RepositoryError(str(e)) from e
            return cursor.rowcount > 0

    def delete_product(self, product_id: str, user_id: str) -> bool:
        """Delete a product owned by user_id together with its records"""
        with self.db_manager.get_connection(DATABASE_KEY) as conn:
            try:
                conn.execute("BEGIN")
                owned = conn.execute(
                    "SELECT 1 FROM products WHERE id = ? AND user_id = ?", (product_id, user_id)
                ).fetchone()
                if not owned:
                    conn.execute("ROLLBACK")
                    return False
                conn.execute("DELETE FROM product_data WHERE product_id = ?", (product_id,))
                conn.execute("DELETE FROM products WHERE id = ?", (product_id,))
                conn.execute("COMMIT")
            except sqlite3.Error as e:
                conn.execute("ROLLBACK")
                raise RepositoryError(str(e)) from e
        logger.info(f"🗑️ Deleted product {product_id}")
        return True

    # === DAILY RECORDS ===

    def fetch_daily_records(self, product_id: str) -> List[DailyRecord]:
        """All records of a product, ascending by date"""
        rows = self._execute(
            """
            SELECT date, investment, revenue, visits, clicks, impressions, sales, initiate_checkout
            FROM product_data
            WHERE product_id = ?
            ORDER BY date ASC
            """,
            (product_id,)
        )
        return [derive_metrics(dict(row)) for row in rows]

    def upsert_daily_record(self, product_id: str, record_date: Union[str, date],
                            raw: Dict[str, Any]) -> DailyRecord:
        """
        Insert or replace the record of a product for one day.

        Raw values are coerced the same way the calculators read them, so the
        stored row always matches the returned record.

        Raises:
            RepositoryError: If the product does not exist or the write fails
        """
        record = derive_metrics(raw, record_date=record_date)
        if not self._execute("SELECT 1 FROM products WHERE id = ?", (product_id,)):
            raise RepositoryError(f"Product not found: {product_id}")

        self._execute(
            """
            INSERT INTO product_data (product_id, date, investment, revenue, visits, clicks,
                                      impressions, sales, initiate_checkout, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT (product_id, date) DO UPDATE SET
                investment = excluded.investment,
                revenue = excluded.revenue,
                visits = excluded.visits,
                clicks = excluded.clicks,
                impressions = excluded.impressions,
                sales = excluded.sales,
                initiate_checkout = excluded.initiate_checkout,
                updated_at = excluded.updated_at
            """,
            (product_id, record.date.isoformat(), record.investment, record.revenue,
             record.visits, record.clicks, record.impressions, record.sales,
             record.checkouts_initiated, _timestamp())
        )
        logger.info(f"✅ Saved record for product {product_id} on {record.date}")
        return record
