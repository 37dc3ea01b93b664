"""Order service layer (Use Cases).

Orchestrates order creation, position changes, deletion and closing.
Every write runs in one ``transaction.atomic`` block on the
repositories' database alias; the order row is locked first so that
concurrent requests on the same order serialize.

Business rules enforced:
- Positions can only be added to or removed from an open order.
- A closed order cannot be deleted.
- Adding a position larger than the current stock is allowed (logged);
  closing an order requires the full quantity of every product.
- Closing deducts stock and flips the status in one unit of work; any
  failure leaves the ledger and the order untouched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog
from django.db import transaction
from django.utils import timezone

from modules.orders.availability import AvailabilityChecker
from modules.orders.constants import OrderStatus
from modules.orders.dtos import OrderOutputDTO, PositionOutputDTO
from modules.orders.exceptions import (
    InsufficientStock,
    OrderAlreadyClosed,
    OrderClosed,
    OrderNotFound,
    PositionNotFound,
)
from modules.products.exceptions import ProductNotFound
from modules.warehouses.aggregator import WarehouseAggregator

if TYPE_CHECKING:
    from modules.orders.dtos import AddPositionDTO, CreateOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IProductRepository
    from modules.warehouses.repositories.interfaces import (
        IStockRepository,
        IWarehouseRepository,
    )

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
        stock_repository: IStockRepository,
        warehouse_repository: IWarehouseRepository,
    ) -> None:
        self._order_repo = order_repository
        self._product_repo = product_repository
        self._stock_repo = stock_repository
        self._availability = AvailabilityChecker(order_repository, stock_repository)
        self._aggregator = WarehouseAggregator(warehouse_repository, stock_repository)

    @property
    def using(self) -> str:
        return self._order_repo.using

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_orders(self) -> List[OrderOutputDTO]:
        positions = self._order_repo.positions_by_order()
        return [
            OrderOutputDTO.from_entity(order, positions.get(order.id, []))
            for order in self._order_repo.list()
        ]

    def get_order(self, order_id: str) -> OrderOutputDTO:
        """Retrieve an order with its positions.

        Raises:
            OrderNotFound: order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.")
        return self._to_output(order)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_order(self, dto: CreateOrderDTO) -> OrderOutputDTO:
        order_date = dto.order_date or timezone.localdate()
        with transaction.atomic(using=self.using):
            order = self._order_repo.create(order_date)
        logger.info("order.created", order_id=order.id, order_date=str(order_date))
        return OrderOutputDTO.from_entity(order, [])

    def add_position(self, order_id: str, dto: AddPositionDTO) -> PositionOutputDTO:
        """Add a product line to an open order.

        A quantity above the product's current stock is accepted and
        logged; availability is enforced when the order is closed.

        Raises:
            OrderNotFound: order does not exist.
            OrderClosed: order is closed.
            ProductNotFound: product does not exist.
        """
        log = logger.bind(order_id=order_id, product_id=dto.product_id)
        with transaction.atomic(using=self.using):
            self._lock_open_order(order_id)
            if not self._product_repo.exists(dto.product_id):
                raise ProductNotFound(f"Product {dto.product_id} not found.")

            available = self._stock_repo.sum_by_product(dto.product_id)
            if dto.quantity > available:
                log.warning(
                    "order.position_exceeds_stock",
                    quantity=dto.quantity,
                    available=available,
                )
            position = self._order_repo.add_position(order_id, dto.product_id, dto.quantity)
        log.info("order.position_added", position_id=position.id, quantity=dto.quantity)
        return PositionOutputDTO.from_entity(position)

    def delete_position(self, order_id: str, position_id: str) -> None:
        """Remove one position from an open order.

        Raises:
            OrderNotFound: order does not exist.
            OrderClosed: order is closed.
            PositionNotFound: the position is not part of this order.
        """
        with transaction.atomic(using=self.using):
            self._lock_open_order(order_id)
            if self._order_repo.get_position(order_id, position_id) is None:
                raise PositionNotFound(
                    f"Position {position_id} not found in order {order_id}."
                )
            self._order_repo.delete_position(position_id)
        logger.info("order.position_deleted", order_id=order_id, position_id=position_id)

    def delete_order(self, order_id: str) -> None:
        """Delete an open order together with its positions.

        Raises:
            OrderNotFound: order does not exist.
            OrderClosed: order is closed.
        """
        with transaction.atomic(using=self.using):
            self._lock_open_order(order_id)
            removed = self._order_repo.delete_positions_for_order(order_id)
            self._order_repo.delete(order_id)
        logger.info("order.deleted", order_id=order_id, positions_removed=removed)

    def close_order(self, order_id: str) -> OrderOutputDTO:
        """Deduct the order's stock and mark it closed, atomically.

        Steps:
        1. Lock the order row; it must exist and be open.
        2. Sum positions per product and verify the ledger covers them.
        3. For each product, walk its locked ledger rows by ascending
           warehouse ID, reducing each by what is still outstanding.
        4. Recompute the cached warehouse totals.
        5. Flip the status to closed.

        Any exception rolls the whole unit of work back.

        Raises:
            OrderNotFound: order does not exist.
            OrderAlreadyClosed: order is already closed.
            InsufficientStock: a product is under-supplied.
        """
        log = logger.bind(order_id=order_id)
        log.info("order.close_started")

        with transaction.atomic(using=self.using):
            order = self._order_repo.get_for_update(order_id)
            if order is None:
                raise OrderNotFound(f"Order {order_id} not found.")
            if not order.can_transition_to(OrderStatus.CLOSED):
                log.warning("order.already_closed")
                raise OrderAlreadyClosed(f"Order {order_id} is already closed.")

            deductions = self._availability.verify_availability(order_id)
            for product_id, required in deductions.items():
                self._deduct(product_id, required)

            self._aggregator.recompute_active_warehouse_totals()

            if not self._order_repo.mark_closed(order_id):
                raise OrderNotFound(f"Order {order_id} not found.")
            order = self._order_repo.get_by_id(order_id)
            output = self._to_output(order)

        log.info("order.closed", products=len(deductions), units=sum(deductions.values()))
        return output

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _lock_open_order(self, order_id: str) -> Order:
        order = self._order_repo.get_for_update(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.")
        if not order.is_open:
            raise OrderClosed(f"Order {order_id} is closed.")
        return order

    def _deduct(self, product_id: str, required: int) -> None:
        remaining = required
        for allocation in self._stock_repo.allocations_for_product(product_id, lock=True):
            if remaining <= 0:
                break
            take = min(remaining, allocation.quantity)
            if take <= 0:
                continue
            self._stock_repo.reduce_quantity(product_id, allocation.warehouse_id, take)
            remaining -= take
        if remaining > 0:
            # Ledger changed between the availability check and the row locks.
            raise InsufficientStock(product_id, required, required - remaining)

    def _to_output(self, order: Order) -> OrderOutputDTO:
        return OrderOutputDTO.from_entity(order, self._order_repo.positions_for(order.id))
