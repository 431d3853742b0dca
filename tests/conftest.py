"""
tests/conftest.py -- Shared test fixtures for the POS backend.

This module provides:
  - make_engine(): isolated named shared-memory SQLite engine
  - _patch_lifespan(): wires test stores into app.state, bypassing real startup
  - api_client: TestClient plus admin and standard-user JWTs
  - user_store / product_store: fresh stores for unit tests

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs route handlers in a thread pool. Plain :memory: DBs
are per-connection and would present a blank schema to each worker thread.

Environment variables must be set before any application import:
get_settings() is cached on first call, and api/routes/auth.py reads the
rate limits at import time.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Generator
from contextlib import asynccontextmanager

# CRITICAL: Set before any api/auth/core import.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOGIN_RATE_LIMIT", "1000/minute")
os.environ.setdefault("REGISTER_RATE_LIMIT", "1000/minute")
os.environ.setdefault("ALLOWED_HOSTS", '["testserver", "localhost"]')
os.environ.setdefault("DATABASE_URL", "sqlite:///file:test_pos_default?mode=memory&cache=shared&uri=true")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from api.main import app
from auth.models import ROLE_ADMIN, ROLE_USER, User
from auth.passwords import hash_password
from auth.store import UserStore
from auth.tokens import create_access_token
from catalog.store import ProductStore
from core.database import create_db_engine

ADMIN_EMAIL = "admin@pos-shop.com"
ADMIN_PASSWORD = "admin-pass-123"
CASHIER_EMAIL = "cashier@pos-shop.com"
CASHIER_PASSWORD = "cashier-pass-123"


# ---------------------------------------------------------------------------
# Store helpers
# ---------------------------------------------------------------------------


def make_engine(name: str) -> Engine:
    """Return an engine on a named shared-memory SQLite database.

    Args:
        name: Unique database name so test modules don't share state.
    """
    return create_db_engine(f"sqlite:///file:test_pos_{name}?mode=memory&cache=shared&uri=true")


def _patch_lifespan(user_store: UserStore, product_store: ProductStore):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.user_store = user_store
        app.state.product_store = product_store
        yield

    return test_lifespan


# ---------------------------------------------------------------------------
# Module-scoped fixtures -- one TestClient per test module for speed
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def api_client() -> Generator[tuple[TestClient, str, str], None, None]:
    """Yield (client, admin_token, user_token) for API integration tests.

    The TestClient uses the real FastAPI app with a patched lifespan so
    tests hit real route handlers but use an isolated in-memory database.
    One admin and one standard account exist before the client starts.
    """
    engine = make_engine(f"api_{uuid.uuid4().hex}")
    user_store = UserStore(engine)
    product_store = ProductStore(engine)

    admin_id = user_store.create_user(
        User(email=ADMIN_EMAIL, hashed_password=hash_password(ADMIN_PASSWORD), role=ROLE_ADMIN)
    )
    cashier_id = user_store.create_user(
        User(email=CASHIER_EMAIL, hashed_password=hash_password(CASHIER_PASSWORD), role=ROLE_USER)
    )
    admin_token = create_access_token(admin_id, ADMIN_EMAIL, ROLE_ADMIN, expire_seconds=3600)
    user_token = create_access_token(cashier_id, CASHIER_EMAIL, ROLE_USER, expire_seconds=3600)

    app.router.lifespan_context = _patch_lifespan(user_store, product_store)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client, admin_token, user_token

    engine.dispose()


# ---------------------------------------------------------------------------
# Function-scoped stores for unit tests
# ---------------------------------------------------------------------------


@pytest.fixture
def db_engine() -> Generator[Engine, None, None]:
    engine = make_engine(uuid.uuid4().hex)
    yield engine
    engine.dispose()


@pytest.fixture
def user_store(db_engine: Engine) -> UserStore:
    return UserStore(db_engine)


@pytest.fixture
def product_store(db_engine: Engine) -> ProductStore:
    return ProductStore(db_engine)
