"""
catalog/schemas.py -- Pydantic v2 input models for the product catalog.

One model per mutating boundary:
  ProductCreate -- full required shape, status defaults to "active"
  ProductUpdate -- id plus any subset of the mutable fields
  ProductRef    -- bare id, for delete and read-by-id

Unknown fields are rejected (extra="forbid").
"""

from __future__ import annotations

import re
from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

PRODUCT_ID_PATTERN = r"^[a-fA-F0-9]{24}$"

_WHITESPACE_RE = re.compile(r"\s+")


class ProductStatus(str, Enum):
    active = "active"
    inactive = "inactive"


_ProductId = Annotated[str, Field(pattern=PRODUCT_ID_PATTERN)]
_Name = Annotated[str, Field(min_length=1, max_length=100)]
_Category = Annotated[str, Field(min_length=1, max_length=50)]
# strict: JSON true or "9.99" is a type error, not a price. Integers still pass.
_Price = Annotated[float, Field(gt=0, strict=True, allow_inf_nan=False)]


def _collapse_whitespace(value):
    if isinstance(value, str):
        return _WHITESPACE_RE.sub(" ", value.strip())
    return value


def _check_cents(value: float | None) -> float | None:
    """Reject prices with more than two decimal places (9.999 is invalid, 9.99 is not)."""
    if value is not None and Decimal(str(value)).as_tuple().exponent < -2:
        raise ValueError("Price cannot have more than 2 decimal places")
    return value


class ProductCreate(BaseModel):
    """Request body for POST /api/product."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True, use_enum_values=True)

    name: _Name
    category: _Category
    price: _Price
    status: ProductStatus = Field(default=ProductStatus.active, validate_default=True)

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, value):
        return _collapse_whitespace(value)

    @field_validator("price")
    @classmethod
    def price_cents(cls, value):
        return _check_cents(value)


class ProductUpdate(BaseModel):
    """Request body for PUT /api/product.

    Fields left out of the body are left unchanged. An explicit null is a
    validation error rather than a request to clear the field.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True, use_enum_values=True)

    id: _ProductId
    name: Optional[_Name] = None
    category: Optional[_Category] = None
    price: Optional[_Price] = None
    status: Optional[ProductStatus] = None

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, value):
        return _collapse_whitespace(value)

    @field_validator("price")
    @classmethod
    def price_cents(cls, value):
        return _check_cents(value)

    @model_validator(mode="after")
    def reject_nulls(self) -> "ProductUpdate":
        nulls = sorted(f for f in self.model_fields_set if getattr(self, f) is None)
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self

    def changes(self) -> dict:
        """Return only the fields the caller supplied, excluding id."""
        return self.model_dump(exclude_unset=True, exclude={"id"})


class ProductRef(BaseModel):
    """Request body for DELETE /api/product; also validates path ids."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    id: _ProductId
