"""
sales/schemas.py -- Pydantic v2 input model for checkout.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from catalog.schemas import PRODUCT_ID_PATTERN


class PaymentMethod(str, Enum):
    cash = "cash"
    card = "card"
    delivery = "delivery"


class CheckoutItem(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    product_id: Annotated[str, Field(pattern=PRODUCT_ID_PATTERN)]
    quantity: int = Field(default=1, ge=1, le=10_000, strict=True)


class CheckoutRequest(BaseModel):
    """Request body for POST /api/sale/checkout.

    delivery_platform is required when paying by delivery and discarded
    otherwise. Client-side prices are not accepted; lines are priced from
    the catalog.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True, use_enum_values=True)

    items: list[CheckoutItem] = Field(min_length=1, max_length=100)
    payment_method: PaymentMethod
    delivery_platform: Optional[str] = Field(default=None, max_length=50)
    tip: float = Field(default=0.0, ge=0, strict=True, allow_inf_nan=False)

    @field_validator("tip")
    @classmethod
    def tip_cents(cls, value: float) -> float:
        if Decimal(str(value)).as_tuple().exponent < -2:
            raise ValueError("Tip cannot have more than 2 decimal places")
        return value

    @model_validator(mode="after")
    def check_delivery(self) -> "CheckoutRequest":
        if self.payment_method == PaymentMethod.delivery.value:
            if not self.delivery_platform:
                raise ValueError("delivery_platform is required when payment_method is 'delivery'")
        else:
            self.delivery_platform = None
        return self
