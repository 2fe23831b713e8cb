"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the transport entry points (DRF views
and RPC tasks) and the Service layer.  DTOs are immutable
(``frozen=True``).

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
- ``PaginationDTO``: page/limit query for listings.
- ``ProductOutputDTO``: output with all product fields.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, field_validator

from modules.products.pagination import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT

if TYPE_CHECKING:
    from modules.products.models import Product


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``name`` is a non-empty string.
    - ``price`` is not negative.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    price: Decimal

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()

    @field_validator("price")
    @classmethod
    def price_must_not_be_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Price cannot be negative.")
        return v


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    All fields are optional; dump with ``exclude_unset=True`` so only
    supplied fields are written.  A supplied field may not be ``null``.
    Unknown keys such as ``id`` or ``available`` are ignored: the id comes
    from the URL or the RPC payload, and liveness is only changed by
    removal.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    price: Decimal | None = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("Name must not be null.")
        if not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()

    @field_validator("price")
    @classmethod
    def price_must_not_be_negative(cls, v: Decimal | None) -> Decimal:
        if v is None:
            raise ValueError("Price must not be null.")
        if v < 0:
            raise ValueError("Price cannot be negative.")
        return v


class PaginationDTO(BaseModel):
    """Immutable DTO for page-based listing requests."""

    model_config = ConfigDict(frozen=True)

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_LIMIT

    @field_validator("page", "limit")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Must be a positive integer.")
        return v


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ProductOutputDTO(BaseModel):
    """Immutable DTO for product responses."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    price: Decimal
    available: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> ProductOutputDTO:
        """Build an output DTO from a Product model instance."""
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            available=product.available,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
