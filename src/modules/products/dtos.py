"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (Views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_validator

PRICE_MAX_DIGITS = 10
PRICE_DECIMAL_PLACES = 2


def _validate_price(v: Decimal) -> Decimal:
    if not v.is_finite():
        raise ValueError("Price must be a finite number.")
    if v < 0:
        raise ValueError("Price cannot be negative.")
    exponent = v.as_tuple().exponent
    if isinstance(exponent, int) and exponent < -PRICE_DECIMAL_PLACES:
        raise ValueError(
            f"Price must have at most {PRICE_DECIMAL_PLACES} decimal places."
        )
    if v.quantize(Decimal("0.01")).adjusted() >= PRICE_MAX_DIGITS - PRICE_DECIMAL_PLACES:
        raise ValueError("Price is too large.")
    return v.quantize(Decimal("0.01"))


def _validate_text(v: str, field: str) -> str:
    if not v or not v.strip():
        raise ValueError(f"{field} must not be empty.")
    return v.strip()


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``name`` and ``unit`` are non-empty strings.
    - ``price`` is a non-negative Decimal with at most two decimal places.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    unit: str
    price: Decimal

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        return _validate_text(v, "Name")

    @field_validator("unit")
    @classmethod
    def unit_must_not_be_empty(cls, v: str) -> str:
        return _validate_text(v, "Unit")

    @field_validator("price")
    @classmethod
    def price_must_be_valid(cls, v: Decimal) -> Decimal:
        return _validate_price(v)


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    All fields are optional; only supplied fields are updated.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    unit: str | None = None
    price: Decimal | None = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str | None) -> str | None:
        return None if v is None else _validate_text(v, "Name")

    @field_validator("unit")
    @classmethod
    def unit_must_not_be_empty(cls, v: str | None) -> str | None:
        return None if v is None else _validate_text(v, "Unit")

    @field_validator("price")
    @classmethod
    def price_must_be_valid(cls, v: Decimal | None) -> Decimal | None:
        return None if v is None else _validate_price(v)

    def changes(self) -> dict:
        """Return only the fields the caller supplied."""
        return self.model_dump(exclude_none=True)
