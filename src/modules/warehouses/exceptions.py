"""Warehouse and stock domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import InvalidInput, NotFound


class WarehouseNotFound(NotFound):
    """The requested warehouse does not exist."""

    code = "warehouse_not_found"


class InvalidQuantity(InvalidInput):
    """A stock change was requested with a zero or negative amount."""

    code = "invalid_quantity"
