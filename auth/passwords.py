"""
auth/passwords.py -- bcrypt password hashing.

Using bcrypt directly rather than passlib[bcrypt] because passlib's internal
wrap-bug detection creates a password longer than 72 bytes, which bcrypt 4.x
rejects with an explicit error.

The cost factor comes from Settings.bcrypt_rounds (default 10). Tests lower it
to keep the suite fast.
"""

from __future__ import annotations

import bcrypt

from core.config import get_settings

_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def hash_password(plain: str) -> str:
    """Return a bcrypt hash of the given plaintext password.

    bcrypt silently truncates input past 72 bytes. The API caps passwords at
    100 characters; multi-byte passwords near that cap lose their tail, which
    is the documented bcrypt behaviour.
    """
    salt = bcrypt.gensalt(rounds=get_settings().bcrypt_rounds)
    return bcrypt.hashpw(plain.encode("utf-8")[:72], salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8")[:72], hashed.encode("utf-8"))
    except ValueError:
        # Malformed or non-bcrypt digest stored in the database.
        return False


def is_bcrypt_hash(value: str) -> bool:
    """Return True if value already looks like a bcrypt digest."""
    return value.startswith(_BCRYPT_PREFIXES)


# Timing equalization dummy hash.
# Computed once at module load so the first login attempt is not measurably
# slower than subsequent ones. authenticate() always runs verify_password(),
# even for unknown emails, so response time does not reveal which emails
# are registered.
DUMMY_HASH: str = hash_password("pos_timing_dummy_password")
