"""
auth/tokens.py -- Session tokens for logged-in users.

A session is an HS256 JWT signed with SECRET_KEY (python-jose). Claims:
sub (email), user_id, role, and exp. POST /api/auth hands the token back as
an httpOnly cookie; API clients may send the same value as a Bearer header.

decode_access_token() answers None for anything it cannot trust (bad
signature, expired, missing claims) and leaves the 401 to auth/dependencies.py.

Layer rule: no imports from api/, catalog/, or sales/.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from core.config import get_settings

_settings = get_settings()

_ALGORITHM = "HS256"
COOKIE_NAME = "access_token"


def create_access_token(user_id: str, email: str, role: str, expire_seconds: int = 0) -> str:
    """Encode a signed JWT with user identity and expiry.

    Args:
        user_id:        User id stored in the database.
        email:          Normalised email, stored as the JWT subject claim.
        role:           "user" or "admin".
        expire_seconds: Token lifetime. 0 means Settings.token_expire_seconds.
    """
    duration = expire_seconds if expire_seconds > 0 else _settings.token_expire_seconds
    expire = datetime.now(timezone.utc) + timedelta(seconds=duration)
    payload = {
        "sub": email,
        "user_id": user_id,
        "role": role,
        "exp": expire,
    }
    return jwt.encode(payload, _settings.secret_key, algorithm=_ALGORITHM)


def decode_access_token(token: str) -> dict | None:
    """Decode and verify a JWT. Returns the payload dict or None on any failure."""
    try:
        payload = jwt.decode(token, _settings.secret_key, algorithms=[_ALGORITHM])
    except JWTError:
        return None
    if "user_id" not in payload or "role" not in payload:
        return None
    return payload


def set_auth_cookie(response, token: str) -> None:
    """Attach the session cookie: httpOnly, SameSite=Lax, and Secure when
    SECURE_COOKIES=true. Its max_age equals the token lifetime."""
    response.set_cookie(
        COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=_settings.secure_cookies,
        max_age=_settings.token_expire_seconds,
    )
