"""SQL implementations of the warehouse and stock ledger repositories."""

from __future__ import annotations

from typing import List, Optional

import structlog
from django.db import IntegrityError, transaction

from modules.core.db import SqlRepository
from modules.warehouses.models import StockAllocation, Warehouse
from modules.warehouses.repositories.interfaces import (
    IStockRepository,
    IWarehouseRepository,
)

logger = structlog.get_logger(__name__)


class WarehouseSqlRepository(SqlRepository, IWarehouseRepository):
    """Warehouse rows via raw SQL."""

    def get_by_id(self, id: int) -> Optional[Warehouse]:
        rows = self.raw(
            Warehouse,
            "SELECT id, quantity, active FROM warehouses WHERE id = %s",
            [id],
        )
        return rows[0] if rows else None

    def list(self) -> List[Warehouse]:
        return self.raw(Warehouse, "SELECT id, quantity, active FROM warehouses ORDER BY id")

    def list_active(self) -> List[Warehouse]:
        return self.raw(
            Warehouse,
            "SELECT id, quantity, active FROM warehouses WHERE active = %s ORDER BY id",
            [True],
        )

    def exists(self, id: int) -> bool:
        count = self.select_scalar(
            "SELECT COUNT(*) FROM warehouses WHERE id = %s", [id], default=0
        )
        return count > 0

    def active_ids(self) -> List[int]:
        rows = self.select_all(
            "SELECT id FROM warehouses WHERE active = %s ORDER BY id", [True]
        )
        return [row["id"] for row in rows]

    def set_total(self, id: int, quantity: int) -> None:
        self.execute("UPDATE warehouses SET quantity = %s WHERE id = %s", [quantity, id])


class StockSqlRepository(SqlRepository, IStockRepository):
    """The stock ledger (``product_warehouse_stock``) via raw SQL."""

    def add_quantity(self, product_id: str, warehouse_id: int, amount: int) -> None:
        """Add ``amount`` to the ledger row, creating it on first use.

        A concurrent first addition may insert the row between our UPDATE
        and INSERT; the INSERT then runs in a savepoint and the unique
        constraint sends us back to the UPDATE.
        """
        inserted = False
        if self._increment(product_id, warehouse_id, amount) == 0:
            try:
                with transaction.atomic(using=self.using):
                    self.execute(
                        "INSERT INTO product_warehouse_stock (product_id, warehouse_id, quantity) "
                        "VALUES (%s, %s, %s)",
                        [product_id, warehouse_id, amount],
                    )
                inserted = True
            except IntegrityError:
                logger.info(
                    "stock.insert_conflict",
                    product_id=product_id,
                    warehouse_id=warehouse_id,
                )
                self._increment(product_id, warehouse_id, amount)
        logger.debug(
            "stock.added",
            product_id=product_id,
            warehouse_id=warehouse_id,
            amount=amount,
            inserted=inserted,
        )

    def _increment(self, product_id: str, warehouse_id: int, amount: int) -> int:
        return self.execute(
            "UPDATE product_warehouse_stock SET quantity = quantity + %s "
            "WHERE product_id = %s AND warehouse_id = %s",
            [amount, product_id, warehouse_id],
        )

    def reduce_quantity(self, product_id: str, warehouse_id: int, amount: int) -> None:
        self.execute(
            "UPDATE product_warehouse_stock "
            "SET quantity = CASE WHEN quantity > %s THEN quantity - %s ELSE 0 END "
            "WHERE product_id = %s AND warehouse_id = %s",
            [amount, amount, product_id, warehouse_id],
        )
        logger.debug(
            "stock.reduced",
            product_id=product_id,
            warehouse_id=warehouse_id,
            amount=amount,
        )

    def sum_by_product(self, product_id: str) -> int:
        return int(
            self.select_scalar(
                "SELECT COALESCE(SUM(quantity), 0) FROM product_warehouse_stock "
                "WHERE product_id = %s",
                [product_id],
                default=0,
            )
        )

    def sum_by_warehouse(self, warehouse_id: int) -> int:
        return int(
            self.select_scalar(
                "SELECT COALESCE(SUM(quantity), 0) FROM product_warehouse_stock "
                "WHERE warehouse_id = %s",
                [warehouse_id],
                default=0,
            )
        )

    def allocations_for_product(
        self, product_id: str, lock: bool = False
    ) -> List[StockAllocation]:
        sql = (
            "SELECT id, product_id, warehouse_id, quantity FROM product_warehouse_stock "
            "WHERE product_id = %s ORDER BY warehouse_id"
        )
        if lock:
            sql += self.lock_clause()
        return self.raw(StockAllocation, sql, [product_id])

    def delete_for_product(self, product_id: str) -> int:
        return self.execute(
            "DELETE FROM product_warehouse_stock WHERE product_id = %s", [product_id]
        )
