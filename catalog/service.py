"""
catalog/service.py -- Product catalog flows.

Every flow validates its input through catalog/schemas.py before touching
the store, so callers outside the HTTP layer get the same checks. Mutating
flows read the record first to confirm it exists: one extra read in exchange
for a clean NotFoundError instead of a silent zero-row write.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from catalog.models import STATUS_ACTIVE, STATUS_INACTIVE, Product
from catalog.schemas import ProductCreate, ProductRef, ProductUpdate
from catalog.store import ProductStore
from core.errors import InternalError, NotFoundError, from_pydantic

logger = logging.getLogger("pos.catalog")


def create_product(store: ProductStore, data: ProductCreate | dict) -> Product:
    """Validate, stamp, and insert a product. Returns the stored record."""
    body = _validate(ProductCreate, data)
    product_id = store.create_product(
        Product(name=body.name, category=body.category, price=body.price, status=body.status)
    )
    created = store.get_product(product_id)
    if created is None:
        raise InternalError("Product not found after write.")
    logger.info("Created product %s (%s)", created.id, created.name)
    return created


def list_products(store: ProductStore) -> list[Product]:
    """Return the whole catalog, newest first."""
    return store.list_products()


def get_product(store: ProductStore, product_id: str) -> Product:
    ref = _validate(ProductRef, {"id": product_id})
    product = store.get_product(ref.id)
    if product is None:
        raise NotFoundError(f"Product {ref.id} not found.")
    return product


def update_product(store: ProductStore, data: ProductUpdate | dict) -> Product:
    """Apply only the supplied fields and return the updated record."""
    body = _validate(ProductUpdate, data)
    get_product(store, body.id)
    changes = body.changes()
    store.update_product(body.id, **changes)
    logger.info("Updated product %s fields=%s", body.id, sorted(changes))
    return get_product(store, body.id)


def delete_product(store: ProductStore, data: ProductRef | dict) -> Product:
    """Hard-delete a product and return its last-known values."""
    ref = _validate(ProductRef, data)
    existing = get_product(store, ref.id)
    if not store.delete_product(ref.id):
        # Deleted by a concurrent request between the read and the delete.
        raise NotFoundError(f"Product {ref.id} not found.")
    logger.info("Deleted product %s", ref.id)
    return existing


def product_stats(store: ProductStore) -> dict[str, int]:
    """Return catalog counts for the dashboard: total, active, inactive."""
    counts = store.count_by_status()
    return {
        "total": sum(counts.values()),
        "active": counts.get(STATUS_ACTIVE, 0),
        "inactive": counts.get(STATUS_INACTIVE, 0),
    }


def _validate(model: type[BaseModel], data):
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise from_pydantic(exc) from exc
