"""
catalog/store.py -- SQLAlchemy-backed persistence layer for the product catalog.

Uses SQLAlchemy Core (not ORM) so the dataclass in catalog/models.py remains
the authoritative domain representation.

Pattern: Repository + Data Mapper. ProductStore is the repository;
_row_to_product is the mapper. Flow functions never touch SQL directly.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = ProductStore()
    product_id = store.create_product(Product(name="Widget", category="Tools", price=9.99))
    store.update_product(product_id, price=10.5)
    store.list_products()
"""

from __future__ import annotations

import secrets
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, Float, MetaData, String, Table, func, select
from sqlalchemy.engine import Engine

from catalog.models import STATUS_ACTIVE, STATUS_INACTIVE, Product
from core.database import get_engine

# Fields a partial update may touch. Anything else passed to update_product()
# is a programming error and raises ValueError before any SQL is built.
_MUTABLE_FIELDS = frozenset({"name", "category", "price", "status"})

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

metadata = MetaData()

_products = Table(
    "product",
    metadata,
    Column("id", String(24), primary_key=True),
    Column("name", String(100), nullable=False),
    Column("category", String(50), nullable=False),
    Column("price", Float, nullable=False),
    Column("status", String(20), nullable=False, server_default=STATUS_ACTIVE),
    Column("created_at", String(32), nullable=False, index=True),
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class ProductStore:
    """Repository for Product entities."""

    def __init__(self, engine: Engine | None = None) -> None:
        self.engine: Engine = engine if engine is not None else get_engine()
        metadata.create_all(self.engine)

    def create_product(self, product: Product) -> str:
        """Insert a product, stamping created_at, and return its generated id."""
        product_id = secrets.token_hex(12)
        with self.engine.connect() as conn:
            conn.execute(
                _products.insert().values(
                    id=product_id,
                    name=product.name,
                    category=product.category,
                    price=product.price,
                    status=product.status,
                    created_at=_now_iso(),
                )
            )
            conn.commit()
        return product_id

    def get_product(self, product_id: str) -> Optional[Product]:
        with self.engine.connect() as conn:
            row = conn.execute(_products.select().where(_products.c.id == product_id)).fetchone()
        return _row_to_product(row) if row is not None else None

    def get_products(self, product_ids: list[str]) -> dict[str, Product]:
        """Fetch several products in one query, keyed by id. Missing ids are absent."""
        if not product_ids:
            return {}
        with self.engine.connect() as conn:
            rows = conn.execute(_products.select().where(_products.c.id.in_(product_ids))).fetchall()
        return {r.id: _row_to_product(r) for r in rows}

    def list_products(self) -> list[Product]:
        """Return every product, most recently created first."""
        with self.engine.connect() as conn:
            rows = conn.execute(_products.select().order_by(_products.c.created_at.desc())).fetchall()
        return [_row_to_product(r) for r in rows]

    def update_product(self, product_id: str, **fields) -> bool:
        """Apply a partial update. Returns True if a row was updated.

        Only keys in _MUTABLE_FIELDS are accepted; unknown keys raise
        ValueError. An empty update is a no-op that reports whether the
        row exists.
        """
        unknown = set(fields) - _MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown product fields: {sorted(unknown)!r}")
        if not fields:
            return self.get_product(product_id) is not None
        with self.engine.connect() as conn:
            result = conn.execute(_products.update().where(_products.c.id == product_id).values(**fields))
            conn.commit()
        return result.rowcount > 0

    def delete_product(self, product_id: str) -> bool:
        """Permanently delete a product. Returns True if deleted, False if not found."""
        with self.engine.connect() as conn:
            result = conn.execute(_products.delete().where(_products.c.id == product_id))
            conn.commit()
        return result.rowcount > 0

    def count_by_status(self) -> dict[str, int]:
        """Return {"active": n, "inactive": m}; statuses with no rows report 0."""
        counts = {STATUS_ACTIVE: 0, STATUS_INACTIVE: 0}
        with self.engine.connect() as conn:
            rows = conn.execute(
                select(_products.c.status, func.count()).group_by(_products.c.status)
            ).fetchall()
        for status, n in rows:
            counts[status] = n
        return counts


# ---------------------------------------------------------------------------
# Row mapper (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_product(row) -> Product:
    return Product(
        id=row.id,
        name=row.name,
        category=row.category,
        price=float(row.price),
        status=row.status,
        created_at=row.created_at,
    )
