"""
tests/test_catalog.py -- Unit tests for catalog schemas, ProductStore, and catalog.service.

Uses a fresh named in-memory SQLite database per test (product_store fixture).
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from catalog import service
from catalog.models import STATUS_ACTIVE, STATUS_INACTIVE, Product
from catalog.schemas import ProductCreate, ProductUpdate
from catalog.store import ProductStore
from core.errors import NotFoundError, ValidationError

MISSING_ID = "abcdef" * 4


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


class TestSchemas:
    def test_create_defaults(self) -> None:
        body = ProductCreate(name="  Gift   Card ", category=" Vouchers ", price=10)
        assert body.name == "Gift Card"
        assert body.category == "Vouchers"
        assert body.status == STATUS_ACTIVE

    @pytest.mark.parametrize("price", [9.99, 10, 0.01, 1234.5])
    def test_valid_prices(self, price) -> None:
        assert ProductCreate(name="n", category="c", price=price).price == price

    @pytest.mark.parametrize("price", [0, -1, 9.999, float("inf"), float("nan"), True, "9.99"])
    def test_invalid_prices(self, price) -> None:
        with pytest.raises(ValueError):
            ProductCreate(name="n", category="c", price=price)

    def test_length_limits(self) -> None:
        ProductCreate(name="n" * 100, category="c" * 50, price=1)
        with pytest.raises(ValueError):
            ProductCreate(name="n" * 101, category="c", price=1)
        with pytest.raises(ValueError):
            ProductCreate(name="n", category="c" * 51, price=1)

    def test_update_changes_only_supplied_fields(self) -> None:
        body = ProductUpdate(id=MISSING_ID, price=3.5)
        assert body.changes() == {"price": 3.5}

    def test_update_rejects_null(self) -> None:
        with pytest.raises(ValueError):
            ProductUpdate(id=MISSING_ID, category=None)

    def test_update_status_is_plain_string(self) -> None:
        assert ProductUpdate(id=MISSING_ID, status="inactive").changes() == {"status": STATUS_INACTIVE}


# ---------------------------------------------------------------------------
# ProductStore
# ---------------------------------------------------------------------------


class TestProductStore:
    def test_create_and_get(self, product_store: ProductStore) -> None:
        pid = product_store.create_product(Product(name="Soap", category="Bath", price=2.0))
        product = product_store.get_product(pid)
        assert product.name == "Soap"
        assert product.created_at
        assert product_store.get_product(MISSING_ID) is None

    def test_get_products_skips_missing(self, product_store: ProductStore) -> None:
        pid = product_store.create_product(Product(name="Soap", category="Bath", price=2.0))
        found = product_store.get_products([pid, MISSING_ID])
        assert list(found) == [pid]
        assert product_store.get_products([]) == {}

    def test_update_rejects_unknown_fields(self, product_store: ProductStore) -> None:
        pid = product_store.create_product(Product(name="Soap", category="Bath", price=2.0))
        with pytest.raises(ValueError):
            product_store.update_product(pid, created_at="1999-01-01")

    def test_update_and_delete_report_rowcount(self, product_store: ProductStore) -> None:
        pid = product_store.create_product(Product(name="Soap", category="Bath", price=2.0))
        assert product_store.update_product(pid, price=2.5) is True
        assert product_store.update_product(MISSING_ID, price=2.5) is False
        assert product_store.update_product(pid) is True
        assert product_store.delete_product(pid) is True
        assert product_store.delete_product(pid) is False

    def test_count_by_status(self, product_store: ProductStore) -> None:
        assert product_store.count_by_status() == {STATUS_ACTIVE: 0, STATUS_INACTIVE: 0}
        product_store.create_product(Product(name="A", category="c", price=1))
        product_store.create_product(Product(name="B", category="c", price=1, status=STATUS_INACTIVE))
        product_store.create_product(Product(name="C", category="c", price=1))
        assert product_store.count_by_status() == {STATUS_ACTIVE: 2, STATUS_INACTIVE: 1}


# ---------------------------------------------------------------------------
# catalog.service
# ---------------------------------------------------------------------------


class TestCatalogService:
    def test_create_then_get(self, product_store: ProductStore) -> None:
        created = service.create_product(product_store, {"name": "Widget", "category": "Tools", "price": 9.99})
        fetched = service.get_product(product_store, created.id)
        assert fetched == created
        assert fetched.status == STATUS_ACTIVE

    def test_list_newest_first(self, product_store: ProductStore) -> None:
        first = service.create_product(product_store, {"name": "First", "category": "c", "price": 1})
        second = service.create_product(product_store, {"name": "Second", "category": "c", "price": 1})
        listed = service.list_products(product_store)
        assert [p.id for p in listed] == [second.id, first.id]

    def test_update_price_only(self, product_store: ProductStore) -> None:
        created = service.create_product(product_store, {"name": "Lamp", "category": "Home", "price": 20})
        updated = service.update_product(product_store, {"id": created.id, "price": 22.5})
        assert updated.price == 22.5
        assert (updated.name, updated.category, updated.status) == (created.name, created.category, created.status)

    def test_update_missing(self, product_store: ProductStore) -> None:
        with pytest.raises(NotFoundError):
            service.update_product(product_store, {"id": MISSING_ID, "price": 1})

    def test_delete_twice(self, product_store: ProductStore) -> None:
        created = service.create_product(product_store, {"name": "Temp", "category": "c", "price": 1})
        deleted = service.delete_product(product_store, {"id": created.id})
        assert deleted == created
        with pytest.raises(NotFoundError):
            service.delete_product(product_store, {"id": created.id})

    def test_malformed_id_is_validation_error(self) -> None:
        store = MagicMock()
        with pytest.raises(ValidationError):
            service.get_product(store, "xyz")
        with pytest.raises(ValidationError):
            service.delete_product(store, {"id": "g" * 24})
        assert store.method_calls == []

    def test_stats(self, product_store: ProductStore) -> None:
        service.create_product(product_store, {"name": "A", "category": "c", "price": 1})
        service.create_product(product_store, {"name": "B", "category": "c", "price": 1, "status": "inactive"})
        assert service.product_stats(product_store) == {"total": 2, "active": 1, "inactive": 1}
