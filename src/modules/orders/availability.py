"""Stock availability check for closing an order.

Positions are summed per product and compared against the ledger total
of that product across all warehouses.  Products are examined in
ascending ID order so the product named in ``InsufficientStock`` is
deterministic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict

import structlog

from modules.orders.exceptions import InsufficientStock

if TYPE_CHECKING:
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.warehouses.repositories.interfaces import IStockRepository

logger = structlog.get_logger(__name__)


class AvailabilityChecker:
    def __init__(
        self,
        order_repository: IOrderRepository,
        stock_repository: IStockRepository,
    ) -> None:
        self._order_repo = order_repository
        self._stock_repo = stock_repository

    def compute_required_deductions(self, order_id: str) -> Dict[str, int]:
        """Map each product of the order to the total quantity ordered."""
        required = self._order_repo.required_quantities(order_id)
        return dict(sorted(required.items()))

    def verify_availability(self, order_id: str) -> Dict[str, int]:
        """Return the deductions if the ledger covers all of them.

        Raises:
            InsufficientStock: for the first product (by ID) whose
                ledger total is below the required quantity.
        """
        deductions = self.compute_required_deductions(order_id)
        for product_id, required in deductions.items():
            available = self._stock_repo.sum_by_product(product_id)
            if available < required:
                logger.warning(
                    "order.insufficient_stock",
                    order_id=order_id,
                    product_id=product_id,
                    required=required,
                    available=available,
                )
                raise InsufficientStock(product_id, required, available)
        return deductions
