"""
API response models for the POS REST endpoints.

These Pydantic v2 models define the HTTP transport contract. They are
intentionally separate from the dataclasses in auth/models.py and
catalog/models.py, which own the internal domain representation. Route
handlers map between the two.

Every response travels in an envelope:
  success -- {"success": true,  "data": ...}
  failure -- {"success": false, "error": {"message": ..., "details"?: [...], "stack"?: "..."}}
"""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from auth.models import User
from catalog.models import Product

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Envelopes
# ---------------------------------------------------------------------------


class Envelope(BaseModel, Generic[T]):
    """Success envelope. success is always True; failures use ErrorResponse."""

    model_config = ConfigDict(frozen=True)

    success: bool = True
    data: T


class ErrorDetail(BaseModel):
    """Human-readable error payload. details/stack are omitted when None."""

    model_config = ConfigDict(frozen=True)

    message: str
    details: Optional[list[str]] = None
    stack: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    success: bool = False
    error: ErrorDetail


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class UserResponse(BaseModel):
    """Public user DTO. The password digest is never part of it."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    role: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id, email=user.email, role=user.role)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class ProductResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: str
    price: float
    status: str
    created_at: str

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        return cls(**product.to_dict())


class ProductStatsResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: int
    active: int
    inactive: int


# ---------------------------------------------------------------------------
# Sales
# ---------------------------------------------------------------------------


class ReceiptLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: str
    name: str
    unit_price: float
    quantity: int
    line_total: float


class ReceiptResponse(BaseModel):
    """Priced sale returned by POST /api/sale/checkout. Not persisted."""

    model_config = ConfigDict(frozen=True)

    items: list[ReceiptLine]
    item_count: int
    subtotal: float
    tip: float
    total: float
    payment_method: str
    delivery_platform: Optional[str] = None
    created_at: str


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """Response for GET /api/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str] = Field(default_factory=dict)
