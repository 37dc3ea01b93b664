"""SQL implementation of the Product repository.

Satisfies ``IProductRepository`` with hand-written parameterized SQL.
Error handling follows the Null Object pattern: methods return ``None``
or ``False`` instead of raising; the Service Layer decides how to
translate a missing entity into a domain error.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

import structlog

from modules.core.db import SqlRepository
from modules.core.models import new_id
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

_COLUMNS = "id, name, unit, price, created_at, updated_at"
_UPDATABLE = ("name", "unit", "price")


class ProductSqlRepository(SqlRepository, IProductRepository):
    """Concrete Product repository backed by raw SQL."""

    def get_by_id(self, id: str) -> Optional[Product]:
        rows = self.raw(
            Product,
            f"SELECT {_COLUMNS} FROM products WHERE id = %s",
            [id],
        )
        return rows[0] if rows else None

    def list(self) -> List[Product]:
        return self.raw(Product, f"SELECT {_COLUMNS} FROM products ORDER BY name, id")

    def exists(self, id: str) -> bool:
        count = self.select_scalar(
            "SELECT COUNT(*) FROM products WHERE id = %s", [id], default=0
        )
        return count > 0

    def create(self, name: str, unit: str, price: Decimal) -> Product:
        product_id = new_id()
        now = self.now()
        self.execute(
            "INSERT INTO products (id, name, unit, price, created_at, updated_at) "
            "VALUES (%s, %s, %s, %s, %s, %s)",
            [product_id, name, unit, price, now, now],
        )
        logger.info("product.inserted", product_id=product_id)
        return self.get_by_id(product_id)

    def update(self, id: str, changes: Dict[str, Any]) -> bool:
        """Update the whitelisted columns present in ``changes``."""
        columns = [column for column in _UPDATABLE if column in changes]
        assignments = ", ".join(f"{column} = %s" for column in columns)
        params = [changes[column] for column in columns]
        sql = "UPDATE products SET "
        if assignments:
            sql += f"{assignments}, "
        sql += "updated_at = %s WHERE id = %s"
        affected = self.execute(sql, [*params, self.now(), id])
        return affected > 0

    def delete(self, id: str) -> bool:
        affected = self.execute("DELETE FROM products WHERE id = %s", [id])
        return affected > 0

    def is_in_any_order(self, id: str) -> bool:
        count = self.select_scalar(
            "SELECT COUNT(*) FROM order_positions WHERE product_id = %s",
            [id],
            default=0,
        )
        return count > 0
