"""Product repository interface.

Extends ``IRepository[Product]`` with the writes used by the catalog
use cases and the look-up behind the "no delete while in an order" rule.
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def create(self, name: str, unit: str, price: Decimal) -> Product:
        """Insert a product with a freshly generated ID."""

    @abstractmethod
    def update(self, id: str, changes: Dict[str, Any]) -> bool:
        """Apply the supplied column changes; ``False`` if no row matched."""

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Remove the product row; ``False`` if no row matched."""

    @abstractmethod
    def is_in_any_order(self, id: str) -> bool:
        """Return ``True`` when an order position references the product."""
