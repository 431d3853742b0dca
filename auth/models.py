"""
auth/models.py -- Domain dataclass for user accounts.

Pattern: Data class (pure data container, zero logic). Mirrors
catalog/models.py -- dataclasses own domain shape; stores and flow functions
do the work.

Layer rule: no imports from api/, catalog/, or sales/.
"""

from __future__ import annotations

from dataclasses import dataclass

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)


@dataclass
class User:
    """An account that can log in to the point of sale.

    email is stored normalised (lower-cased, trimmed) and doubles as the
    unique login key. hashed_password is a bcrypt digest; the plaintext is
    never stored and the digest never leaves the server.

    id is None before the record is written to the database.
    """

    email: str
    hashed_password: str
    role: str = ROLE_USER  # "user" | "admin"
    id: str | None = None
    created_at: str | None = None
