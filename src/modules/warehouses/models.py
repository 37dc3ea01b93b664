"""Warehouse and StockAllocation models.

Business rules implemented:
- ``StockAllocation`` is the stock ledger: one row per (product, warehouse)
  with a non-negative quantity.
- ``Warehouse.quantity`` is a denormalized total.  It is never written
  directly by callers; ``WarehouseAggregator`` recomputes it from the
  ledger rows of active warehouses.
"""

from __future__ import annotations

from django.db import models


class Warehouse(models.Model):
    """A storage location with a cached total of the stock it holds."""

    quantity = models.PositiveIntegerField(default=0)
    active = models.BooleanField(default=True)

    class Meta:
        db_table = "warehouses"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["active"], name="warehouses_active_idx"),
        ]

    def __str__(self) -> str:
        state = "active" if self.active else "inactive"
        return f"Warehouse {self.pk} ({state}, {self.quantity} units)"


class StockAllocation(models.Model):
    """Quantity of one product physically assigned to one warehouse."""

    product = models.ForeignKey(
        "products.Product",
        on_delete=models.CASCADE,
        related_name="stock_allocations",
    )
    warehouse = models.ForeignKey(
        "warehouses.Warehouse",
        on_delete=models.CASCADE,
        related_name="stock_allocations",
    )
    quantity = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "product_warehouse_stock"
        ordering = ["warehouse_id", "product_id"]
        constraints = [
            models.UniqueConstraint(
                fields=["product", "warehouse"],
                name="stock_product_warehouse_uq",
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__gte=0),
                name="stock_quantity_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.product_id} @ {self.warehouse_id}: {self.quantity}"
