"""
catalog/models.py -- Domain dataclass for catalog products.

Pure data container with zero logic. Validation lives in catalog/schemas.py;
persistence in catalog/store.py.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"


@dataclass
class Product:
    """A sellable catalog item.

    price is in the shop currency with at most two decimal places.
    created_at is an ISO 8601 UTC timestamp stamped by the store on insert
    and drives the newest-first listing order.

    id is None before the record is written to the database.
    """

    name: str
    category: str
    price: float
    status: str = STATUS_ACTIVE  # "active" | "inactive"
    id: Optional[str] = None
    created_at: str = ""

    def to_dict(self) -> dict:
        return asdict(self)
