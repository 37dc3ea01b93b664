"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer and the Service
layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderDTO``: input for order creation.
- ``AddPositionDTO``: input for adding a position to an open order.
- ``PositionOutputDTO``: output for a single position.
- ``OrderOutputDTO``: output for an order with its positions.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from modules.core.models import MAX_QUANTITY

if TYPE_CHECKING:
    from modules.orders.models import Order, Position


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    ``order_date`` defaults to the current local date when omitted.
    The status is not part of the input: new orders are always open.
    """

    model_config = ConfigDict(frozen=True)

    order_date: Optional[date] = None


class AddPositionDTO(BaseModel):
    """Immutable DTO for a new order position."""

    model_config = ConfigDict(frozen=True)

    product_id: str
    quantity: int

    @field_validator("product_id")
    @classmethod
    def product_id_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Product ID must not be empty.")
        return v.strip()

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        if v > MAX_QUANTITY:
            raise ValueError(f"Quantity must be at most {MAX_QUANTITY}.")
        return v


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class PositionOutputDTO(BaseModel):
    """Immutable DTO for position API responses."""

    model_config = ConfigDict(frozen=True)

    id: str
    order_id: str
    product_id: str
    quantity: int

    @classmethod
    def from_entity(cls, position: Position) -> PositionOutputDTO:
        return cls(
            id=position.id,
            order_id=position.order_id,
            product_id=position.product_id,
            quantity=position.quantity,
        )


class OrderOutputDTO(BaseModel):
    """Immutable DTO for order API responses."""

    model_config = ConfigDict(frozen=True)

    id: str
    order_date: date
    status: str
    created_at: datetime
    updated_at: datetime
    positions: List[PositionOutputDTO]

    @classmethod
    def from_entity(cls, order: Order, positions: Iterable[Position]) -> OrderOutputDTO:
        """Build an output DTO from an Order and the positions loaded for it."""
        return cls(
            id=order.id,
            order_date=order.order_date,
            status=str(order.status),
            created_at=order.created_at,
            updated_at=order.updated_at,
            positions=[PositionOutputDTO.from_entity(p) for p in positions],
        )
