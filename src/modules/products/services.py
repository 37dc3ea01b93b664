"""Product service layer (Use Cases).

Orchestrates business logic for the product catalog, delegating
persistence to the injected repositories.

Business rules enforced here:
- Name and unit are required; price is a non-negative two-place decimal
  (validated by the DTOs).
- A product referenced by any order position cannot be deleted.
- Deleting a product removes its stock rows and refreshes the cached
  warehouse totals in the same transaction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog
from django.db import transaction

from modules.products.exceptions import ProductInOrder, ProductNotFound
from modules.warehouses.aggregator import WarehouseAggregator

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository
    from modules.warehouses.repositories.interfaces import (
        IStockRepository,
        IWarehouseRepository,
    )

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives its repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        repository: IProductRepository,
        stock_repository: IStockRepository,
        warehouse_repository: IWarehouseRepository,
    ) -> None:
        self._repo = repository
        self._stock_repo = stock_repository
        self._aggregator = WarehouseAggregator(warehouse_repository, stock_repository)

    @property
    def using(self) -> str:
        return self._repo.using

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, dto: CreateProductDTO) -> Product:
        with transaction.atomic(using=self.using):
            product = self._repo.create(name=dto.name, unit=dto.unit, price=dto.price)
        logger.info("product.created", product_id=product.id)
        return product

    def update_product(self, id: str, dto: UpdateProductDTO) -> Product:
        """Apply the supplied fields to an existing product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        log = logger.bind(product_id=id)
        with transaction.atomic(using=self.using):
            if not self._repo.update(id, dto.changes()):
                raise ProductNotFound(f"Product {id} not found.")
            product = self._repo.get_by_id(id)
        log.info("product.updated", fields=sorted(dto.changes()))
        return product

    def delete_product(self, id: str) -> None:
        """Delete a product together with its stock rows.

        Raises:
            ProductNotFound: if the product does not exist.
            ProductInOrder: if an order position references the product.
        """
        log = logger.bind(product_id=id)
        with transaction.atomic(using=self.using):
            if not self._repo.exists(id):
                raise ProductNotFound(f"Product {id} not found.")
            if self._repo.is_in_any_order(id):
                log.warning("product.delete_blocked")
                raise ProductInOrder(
                    f"Product {id} is part of an order and cannot be deleted."
                )
            removed = self._stock_repo.delete_for_product(id)
            self._repo.delete(id)
            self._aggregator.recompute_active_warehouse_totals()
        log.info("product.deleted", stock_rows_removed=removed)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self) -> List[Product]:
        return self._repo.list()

    def get_product(self, id: str) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if product is None:
            raise ProductNotFound(f"Product {id} not found.")
        return product
