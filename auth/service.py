"""
auth/service.py -- Login and registration flows.

Both flows are straight sequences: validate -> look up by normalised email
-> compare or hash -> return the User. The HTTP layer maps the returned User
to the public DTO {id, email, role}; the digest never leaves this package.

Failure signals:
  core.errors.ValidationError     -- malformed input (400)
  core.errors.AuthenticationError -- unknown email OR wrong password (401),
                                     one generic message for both
  core.errors.ConflictError       -- email already registered (409)

Each flow performs at most one read and one write against the user table.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from auth.models import User
from auth.passwords import DUMMY_HASH, hash_password, verify_password
from auth.schemas import Credentials, RegisterRequest
from auth.store import UserStore
from core.errors import AuthenticationError, ConflictError, from_pydantic

logger = logging.getLogger("pos.auth")

INVALID_CREDENTIALS = "Invalid credentials."


def login(store: UserStore, credentials: Credentials | dict) -> User:
    """Authenticate an email/password pair with timing equalization.

    Always runs bcrypt whether or not the email exists:
    - Unknown email: bcrypt runs against DUMMY_HASH (same cost as a real check)
    - Wrong password: bcrypt runs against the stored hash (same cost)

    Returns the User on success. Raises AuthenticationError with the same
    message for both failure cases.
    """
    creds = _validate(Credentials, credentials)
    user = store.get_by_email(creds.email)
    if user is None:
        verify_password(creds.password, DUMMY_HASH)
        logger.warning("Failed login attempt for %s", creds.email)
        raise AuthenticationError(INVALID_CREDENTIALS)
    if not verify_password(creds.password, user.hashed_password):
        logger.warning("Failed login attempt for %s", creds.email)
        raise AuthenticationError(INVALID_CREDENTIALS)
    logger.info("User %s logged in", user.id)
    return user


def register(store: UserStore, data: RegisterRequest | dict) -> User:
    """Create a new account. The password is hashed before any write.

    Raises ConflictError if the normalised email is already taken, including
    when a concurrent registration wins the race on the UNIQUE constraint.
    """
    req = _validate(RegisterRequest, data)
    if store.get_by_email(req.email) is not None:
        raise ConflictError("Email is already registered.")

    user = User(email=req.email, hashed_password=hash_password(req.password), role=req.role.value)
    try:
        user.id = store.create_user(user)
    except IntegrityError as exc:
        raise ConflictError("Email is already registered.") from exc

    logger.info("Registered %s account %s", user.role, user.id)
    return user


def _validate(model, data):
    if isinstance(data, model):
        return data
    if isinstance(data, Credentials):
        data = data.model_dump()
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise from_pydantic(exc) from exc
