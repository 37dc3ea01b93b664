"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import Conflict, NotFound


class ProductNotFound(NotFound):
    """The requested product does not exist."""

    code = "product_not_found"


class ProductInOrder(Conflict):
    """The product occurs in at least one order position and cannot be deleted."""

    code = "product_in_order"
