"""
sales/service.py -- Checkout: price a cart against the catalog.

The point-of-sale front end keeps its cart in browser storage. Checkout
re-prices every line from the stored catalog so the receipt a cashier sees
cannot be altered by the client. Nothing is written to the database.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from pydantic import ValidationError as PydanticValidationError

from catalog.models import STATUS_ACTIVE
from catalog.store import ProductStore
from core.errors import NotFoundError, ValidationError, from_pydantic
from sales.cart import Cart
from sales.schemas import CheckoutRequest

logger = logging.getLogger("pos.sales")


def build_cart(store: ProductStore, request: CheckoutRequest) -> Cart:
    """Resolve every requested product and fill a Cart.

    Raises NotFoundError for unknown ids and ValidationError for products
    that are not active. Repeated ids are merged into one line.
    """
    wanted = [item.product_id for item in request.items]
    products = store.get_products(wanted)

    missing = [pid for pid in dict.fromkeys(wanted) if pid not in products]
    if missing:
        raise NotFoundError(f"Products not found: {', '.join(missing)}")

    inactive = sorted({pid for pid in wanted if products[pid].status != STATUS_ACTIVE})
    if inactive:
        raise ValidationError(
            "Inactive products cannot be sold.",
            details=[f"items: product {pid} is inactive" for pid in inactive],
        )

    cart = Cart(tip=request.tip)
    for item in request.items:
        cart.add(products[item.product_id], item.quantity)
    return cart


def checkout(store: ProductStore, data: CheckoutRequest | dict) -> dict:
    """Validate and price a sale. Returns the receipt dict."""
    if isinstance(data, CheckoutRequest):
        request = data
    else:
        try:
            request = CheckoutRequest.model_validate(data)
        except PydanticValidationError as exc:
            raise from_pydantic(exc) from exc

    cart = build_cart(store, request)
    receipt = {
        "items": [line.to_dict() for line in cart.lines],
        "item_count": cart.item_count,
        "subtotal": cart.subtotal,
        "tip": cart.tip,
        "total": cart.total,
        "payment_method": request.payment_method,
        "delivery_platform": request.delivery_platform,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    logger.info("Checkout priced: %d line(s), total=%.2f via %s", len(cart.lines), cart.total, request.payment_method)
    return receipt
