"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

Two token sources are checked in priority order:
  1. JWT cookie ("access_token") -- set by POST /api/auth.
  2. Authorization: Bearer <token> header -- API clients.

try_get_current_user() is the soft variant (returns None on failure).
get_current_user() wraps it and raises AuthenticationError (401).
require_admin() wraps get_current_user() and raises AuthorizationError (403).

Layer rule: no imports from catalog/ or sales/.
  auth/dependencies.py may import from fastapi (for Request) because this
  module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import Request

from auth.models import ROLE_ADMIN, User
from auth.tokens import COOKIE_NAME, decode_access_token
from core.errors import AuthenticationError, AuthorizationError


def try_get_current_user(request: Request) -> User | None:
    """Authenticate the request via cookie or Bearer token. Never raises."""
    user_store = request.app.state.user_store

    token: str | None = request.cookies.get(COOKIE_NAME)
    if not token:
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            token = auth_header[7:]

    if not token:
        return None
    payload = decode_access_token(token)
    if payload is None:
        return None
    # Re-read the user so a role recorded in the token cannot outlive the account.
    return user_store.get_by_id(payload["user_id"])


def get_current_user(request: Request) -> User:
    """Require authentication.

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(user: User = Depends(get_current_user)): ...
    """
    user = try_get_current_user(request)
    if user is None:
        raise AuthenticationError("Authentication required.")
    return user


def require_admin(request: Request) -> User:
    """Require the admin role. 401 if unauthenticated, 403 if not admin."""
    user = get_current_user(request)
    if user.role != ROLE_ADMIN:
        raise AuthorizationError("Admin access required.")
    return user
