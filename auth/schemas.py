"""
auth/schemas.py -- Pydantic v2 input models for the auth flow.

These are the validation layer for login and registration. They are used
both as FastAPI request bodies and directly by auth.service, so a CLI caller
gets the same checks as an HTTP caller.

Unknown fields are rejected (extra="forbid"). Passwords are never stripped:
leading/trailing whitespace is part of the secret.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 100


class RoleEnum(str, Enum):
    user = "user"
    admin = "admin"


def normalize_email(value: str) -> str:
    """Lower-case and trim an email address. Used as the uniqueness key."""
    return value.strip().lower()


class Credentials(BaseModel):
    """Email/password pair: request body for POST /auth, /user, and /admin."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)

    @field_validator("email", mode="before")
    @classmethod
    def normalize(cls, value):
        """Normalise before EmailStr runs so " A@B.co " validates as "a@b.co"."""
        if isinstance(value, str):
            return normalize_email(value)
        return value


class RegisterRequest(Credentials):
    """Registration input. role is set by server-side call sites, never by the request body."""

    role: RoleEnum = RoleEnum.user
