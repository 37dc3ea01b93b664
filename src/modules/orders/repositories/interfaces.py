"""Order repository interface.

Extends ``IRepository[Order]`` with the position writes, the row lock
used by every mutating use case and the per-product aggregation the
availability check runs on.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from datetime import date
from typing import TYPE_CHECKING, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order, Position


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The aggregate includes its Position children.
    """

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order and lock its row until the transaction ends."""

    @abstractmethod
    def create(self, order_date: date) -> Order:
        """Insert an open order dated ``order_date``."""

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Remove the order row; ``False`` if no row matched."""

    @abstractmethod
    def mark_closed(self, id: str) -> bool:
        """Flip an open order to closed; ``False`` if no open order matched."""

    @abstractmethod
    def positions_for(self, order_id: str) -> List[Position]:
        """Positions of one order in insertion order."""

    @abstractmethod
    def positions_by_order(self) -> Dict[str, List[Position]]:
        """All positions grouped by order ID."""

    @abstractmethod
    def add_position(self, order_id: str, product_id: str, quantity: int) -> Position:
        """Insert a position with a freshly generated ID."""

    @abstractmethod
    def get_position(self, order_id: str, position_id: str) -> Optional[Position]:
        """Retrieve a position only if it belongs to ``order_id``."""

    @abstractmethod
    def delete_position(self, position_id: str) -> bool:
        """Remove one position; ``False`` if no row matched."""

    @abstractmethod
    def delete_positions_for_order(self, order_id: str) -> int:
        """Remove all positions of an order; returns the row count."""

    @abstractmethod
    def required_quantities(self, order_id: str) -> Dict[str, int]:
        """Summed position quantity per product, by ascending product ID."""
