"""
tests/test_errors.py -- Tests for the error taxonomy and validation formatting.
"""

from __future__ import annotations

import pytest
from pydantic import BaseModel, ValidationError as PydanticValidationError

from core.errors import (
    AppError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
    format_validation_errors,
    from_pydantic,
)


@pytest.mark.parametrize(
    "cls, status",
    [
        (ValidationError, 400),
        (AuthenticationError, 401),
        (AuthorizationError, 403),
        (NotFoundError, 404),
        (ConflictError, 409),
        (InternalError, 500),
    ],
)
def test_status_codes(cls, status) -> None:
    err = cls()
    assert err.status_code == status
    assert isinstance(err, AppError)
    assert err.message == cls.default_message
    assert str(err) == err.message


def test_custom_message_and_details() -> None:
    err = NotFoundError("Product x not found.", details=["id: x"])
    assert err.message == "Product x not found."
    assert err.details == ["id: x"]


def test_format_drops_body_prefix() -> None:
    errors = [
        {"loc": ("body", "items", 0, "quantity"), "msg": "Input should be greater than or equal to 1"},
        {"loc": (), "msg": "Value error, bad"},
    ]
    assert format_validation_errors(errors) == [
        "items.0.quantity: Input should be greater than or equal to 1",
        "Value error, bad",
    ]


def test_from_pydantic() -> None:
    class Sample(BaseModel):
        count: int

    with pytest.raises(PydanticValidationError) as exc_info:
        Sample(count="many")
    err = from_pydantic(exc_info.value)
    assert isinstance(err, ValidationError)
    assert err.details[0].startswith("count:")


def test_format_drops_json_decode_offset() -> None:
    errors = [{"type": "json_invalid", "loc": ("body", 0), "msg": "JSON decode error"}]
    assert format_validation_errors(errors) == ["JSON decode error"]


def test_format_keeps_list_indexes_in_field_paths() -> None:
    errors = [{"type": "missing", "loc": ("body", "items", 2, "product_id"), "msg": "Field required"}]
    assert format_validation_errors(errors) == ["items.2.product_id: Field required"]
