"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import Conflict, NotFound


class OrderNotFound(NotFound):
    """The requested order does not exist."""

    code = "order_not_found"


class PositionNotFound(NotFound):
    """The position does not exist or belongs to another order."""

    code = "position_not_found"


class OrderClosed(Conflict):
    """The order is closed and can no longer be changed or deleted."""

    code = "order_closed"


class OrderAlreadyClosed(Conflict):
    """A close was requested for an order that is already closed."""

    code = "order_already_closed"


class InsufficientStock(Conflict):
    """The ledger holds less of a product than the order requires."""

    code = "insufficient_stock"

    def __init__(self, product_id: str, required: int, available: int) -> None:
        self.product_id = product_id
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient stock for product {product_id}: "
            f"required {required}, available {available}."
        )
