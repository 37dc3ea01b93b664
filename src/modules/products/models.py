"""Product model.

Business rules implemented:
- Price is an exact decimal with two places and cannot be negative.
- A product referenced by an order position cannot be deleted
  (enforced at service layer, not by a database cascade).
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel


class Product(BaseModel):
    """Catalog entry: name, unit of measure and unit price."""

    name = models.CharField(max_length=255)
    unit = models.CharField(max_length=50)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    class Meta:
        db_table = "products"
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.unit})"
