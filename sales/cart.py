"""
sales/cart.py -- The sales cart aggregate.

A Cart is built per checkout and thrown away afterwards; nothing here is
persisted. Prices are copied from catalog Products at add() time, so a cart
never trusts a price sent by the client.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from catalog.models import Product


def _money(value: float) -> float:
    return round(value, 2)


@dataclass
class CartLine:
    product_id: str
    name: str
    unit_price: float
    quantity: int = 1

    @property
    def line_total(self) -> float:
        return _money(self.unit_price * self.quantity)

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "unit_price": self.unit_price,
            "quantity": self.quantity,
            "line_total": self.line_total,
        }


@dataclass
class Cart:
    """Ordered line items plus an optional tip.

    Invariants: one line per product, and every quantity is at least 1.
    """

    lines: list[CartLine] = field(default_factory=list)
    tip: float = 0.0

    def _find(self, product_id: str) -> CartLine | None:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def add(self, product: Product, quantity: int = 1) -> CartLine:
        """Add a product, or raise the quantity of its existing line."""
        if quantity < 1:
            raise ValueError("Quantity must be at least 1")
        line = self._find(product.id)
        if line is None:
            line = CartLine(product_id=product.id, name=product.name, unit_price=product.price, quantity=quantity)
            self.lines.append(line)
        else:
            line.quantity += quantity
        return line

    def change_quantity(self, product_id: str, delta: int) -> CartLine:
        """Shift a line's quantity by delta, never below 1."""
        line = self._find(product_id)
        if line is None:
            raise KeyError(product_id)
        line.quantity = max(1, line.quantity + delta)
        return line

    def remove(self, product_id: str) -> None:
        line = self._find(product_id)
        if line is None:
            raise KeyError(product_id)
        self.lines.remove(line)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def subtotal(self) -> float:
        return _money(sum(line.line_total for line in self.lines))

    @property
    def total(self) -> float:
        return _money(self.subtotal + self.tip)
