"""
core/errors.py -- Application error taxonomy.

Flow functions (auth/service.py, catalog/service.py, sales/service.py) raise
these; the exception handlers in api/main.py turn them into the error
envelope. Each class carries the HTTP status it maps to so the handler never
needs an isinstance ladder.

Layer rule: no imports from api/, auth/, catalog/, or sales/.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError


class AppError(Exception):
    """Base class for expected, caller-visible failures."""

    status_code: int = 500
    default_message: str = "An unexpected error occurred."

    def __init__(self, message: str | None = None, details: list[str] | None = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Validation failed."


class AuthenticationError(AppError):
    status_code = 401
    default_message = "Invalid credentials."


class AuthorizationError(AppError):
    status_code = 403
    default_message = "You do not have permission to perform this action."


class NotFoundError(AppError):
    status_code = 404
    default_message = "Resource not found."


class ConflictError(AppError):
    status_code = 409
    default_message = "Resource already exists."


class InternalError(AppError):
    status_code = 500


def format_validation_errors(errors: list[dict]) -> list[str]:
    """Render pydantic error dicts as "field.path: message" strings.

    FastAPI prefixes body errors with ("body",); that segment is dropped so
    the path matches the JSON the caller sent. An integer straight after it is
    the character offset of a JSON decode error and is dropped as well.
    """
    lines: list[str] = []
    for err in errors:
        raw = list(err.get("loc", ()))
        if raw and raw[0] == "body":
            raw = raw[1:]
            if raw and isinstance(raw[0], int) and err.get("type") == "json_invalid":
                raw = raw[1:]
        loc = [str(part) for part in raw]
        msg = err.get("msg", "Invalid value")
        lines.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return lines


def from_pydantic(exc: PydanticValidationError) -> ValidationError:
    """Wrap a pydantic ValidationError raised outside the request layer."""
    return ValidationError(details=format_validation_errors(exc.errors()))
