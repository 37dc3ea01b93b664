"""Order and Position models.

Business rules implemented:
- An order is created ``open`` and only ever moves to ``closed``.
- A position belongs to exactly one order and is removed with it.
- Position quantity is strictly positive (database check constraint).
- A product referenced by a position cannot be deleted.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import VALID_TRANSITIONS, OrderStatus


class Order(BaseModel):
    """Customer order; the positions carry the ordered products."""

    order_date = models.DateField()
    status = models.CharField(
        max_length=10,
        choices=OrderStatus.choices,
        default=OrderStatus.OPEN,
    )

    class Meta:
        db_table = "orders"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(status__in=OrderStatus.values),
                name="orders_status_valid",
            ),
        ]

    def __str__(self) -> str:
        return f"Order {self.id} ({self.status})"

    @property
    def is_open(self) -> bool:
        return self.status == OrderStatus.OPEN

    def can_transition_to(self, new_status: str) -> bool:
        return str(new_status) in VALID_TRANSITIONS.get(str(self.status), set())


class Position(BaseModel):
    """One line of an order: a product and the quantity ordered."""

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="positions",
    )
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="positions",
    )
    quantity = models.PositiveIntegerField()

    class Meta:
        db_table = "order_positions"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_positions_quantity_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["order", "product"], name="positions_order_product_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.quantity} x {self.product_id}"
