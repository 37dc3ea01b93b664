"""Warehouse service layer (Use Cases).

Stock changes and the reads that report warehouse totals both go
through ``WarehouseAggregator`` so the cached totals always match the
ledger inside the same transaction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog
from django.db import transaction

from modules.core.models import MAX_QUANTITY
from modules.products.exceptions import ProductNotFound
from modules.warehouses.aggregator import WarehouseAggregator
from modules.warehouses.exceptions import InvalidQuantity, WarehouseNotFound

if TYPE_CHECKING:
    from modules.products.repositories.interfaces import IProductRepository
    from modules.warehouses.models import Warehouse
    from modules.warehouses.repositories.interfaces import (
        IStockRepository,
        IWarehouseRepository,
    )

logger = structlog.get_logger(__name__)


class WarehouseService:
    """Application service for warehouse listing and stock changes."""

    def __init__(
        self,
        warehouse_repository: IWarehouseRepository,
        stock_repository: IStockRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._warehouse_repo = warehouse_repository
        self._stock_repo = stock_repository
        self._product_repo = product_repository
        self._aggregator = WarehouseAggregator(warehouse_repository, stock_repository)

    @property
    def using(self) -> str:
        return self._warehouse_repo.using

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_active_warehouses(self) -> List[Warehouse]:
        with transaction.atomic(using=self.using):
            self._aggregator.recompute_active_warehouse_totals()
            return self._warehouse_repo.list_active()

    def get_warehouse(self, warehouse_id: int) -> Warehouse:
        """Retrieve one warehouse with a freshly recomputed total.

        Raises:
            WarehouseNotFound: no warehouse has this ID.
        """
        with transaction.atomic(using=self.using):
            self._aggregator.recompute_active_warehouse_totals()
            warehouse = self._warehouse_repo.get_by_id(warehouse_id)
        if warehouse is None:
            raise WarehouseNotFound(f"Warehouse {warehouse_id} not found.")
        return warehouse

    def total_product_quantity(self, product_id: str) -> int:
        """Ledger sum of a product across all warehouses.

        Raises:
            ProductNotFound: the product does not exist.
        """
        if not self._product_repo.exists(product_id):
            raise ProductNotFound(f"Product {product_id} not found.")
        return self._stock_repo.sum_by_product(product_id)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add_product_quantity(self, product_id: str, warehouse_id: int, amount: int) -> None:
        """Increase the stock of a product in a warehouse.

        Raises:
            InvalidQuantity: ``amount`` is not positive, or the resulting
                stock would not fit the quantity column.
            ProductNotFound: the product does not exist.
            WarehouseNotFound: the warehouse does not exist.
        """
        with transaction.atomic(using=self.using):
            self._check_change(product_id, warehouse_id, amount)
            current = sum(
                allocation.quantity
                for allocation in self._stock_repo.allocations_for_product(product_id)
                if allocation.warehouse_id == warehouse_id
            )
            if current + amount > MAX_QUANTITY:
                raise InvalidQuantity(f"Stock cannot exceed {MAX_QUANTITY}.")
            self._stock_repo.add_quantity(product_id, warehouse_id, amount)
            self._aggregator.recompute_active_warehouse_totals()
        logger.info(
            "warehouse.stock_added",
            product_id=product_id,
            warehouse_id=warehouse_id,
            amount=amount,
        )

    def reduce_product_quantity(self, product_id: str, warehouse_id: int, amount: int) -> None:
        """Decrease the stock of a product in a warehouse, floored at zero.

        Raises:
            InvalidQuantity: ``amount`` is not positive.
            ProductNotFound: the product does not exist.
            WarehouseNotFound: the warehouse does not exist.
        """
        with transaction.atomic(using=self.using):
            self._check_change(product_id, warehouse_id, amount)
            self._stock_repo.reduce_quantity(product_id, warehouse_id, amount)
            self._aggregator.recompute_active_warehouse_totals()
        logger.info(
            "warehouse.stock_reduced",
            product_id=product_id,
            warehouse_id=warehouse_id,
            amount=amount,
        )

    def _check_change(self, product_id: str, warehouse_id: int, amount: int) -> None:
        if amount <= 0:
            raise InvalidQuantity("Quantity must be greater than zero.")
        if not self._product_repo.exists(product_id):
            raise ProductNotFound(f"Product {product_id} not found.")
        if not self._warehouse_repo.exists(warehouse_id):
            raise WarehouseNotFound(f"Warehouse {warehouse_id} not found.")
