"""Warehouse and stock ledger repository interfaces.

``IWarehouseRepository`` covers the warehouse rows themselves;
``IStockRepository`` is the stock ledger, the single place that knows
how much of a product sits in which warehouse.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.warehouses.models import StockAllocation, Warehouse


class IWarehouseRepository(IRepository["Warehouse"]):
    """Repository contract for warehouses."""

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[Warehouse]:
        """Retrieve a warehouse (active or not) by its ID."""

    @abstractmethod
    def list_active(self) -> List[Warehouse]:
        """Active warehouses ordered by ID."""

    @abstractmethod
    def active_ids(self) -> List[int]:
        """IDs of the active warehouses in ascending order."""

    @abstractmethod
    def set_total(self, id: int, quantity: int) -> None:
        """Overwrite the denormalized total of one warehouse."""


class IStockRepository(ABC):
    """Stock ledger contract.

    Quantities never go below zero: ``reduce_quantity`` clamps at zero.
    """

    using: str

    @abstractmethod
    def add_quantity(self, product_id: str, warehouse_id: int, amount: int) -> None:
        """Increase the stock row, creating it when absent."""

    @abstractmethod
    def reduce_quantity(self, product_id: str, warehouse_id: int, amount: int) -> None:
        """Decrease the stock row, clamped at zero; no-op when absent."""

    @abstractmethod
    def sum_by_product(self, product_id: str) -> int:
        """Total stock of a product across all warehouses (0 when none)."""

    @abstractmethod
    def sum_by_warehouse(self, warehouse_id: int) -> int:
        """Total stock held by one warehouse (0 when none)."""

    @abstractmethod
    def allocations_for_product(
        self, product_id: str, lock: bool = False
    ) -> List[StockAllocation]:
        """Stock rows of a product ordered by warehouse ID.

        With ``lock=True`` the rows are locked for the rest of the
        surrounding transaction.
        """

    @abstractmethod
    def delete_for_product(self, product_id: str) -> int:
        """Remove every stock row of a product; returns the row count."""
