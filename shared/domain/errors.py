"""
Domain Errors

Typed, user-facing errors raised by the domain and application layers.
Each error carries a machine readable ``code`` and the HTTP status the
API layer answers with. Services raise them; views never catch them,
``shared.infrastructure.exception_handler`` renders them.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for every typed error of the marketplace."""

    status_code = 500
    default_code = "ERROR"
    default_message = "Request failed"

    def __init__(self, message: str | None = None, code: str | None = None):
        self.message = message or self.default_message
        self.code = code or self.default_code
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message, "code": self.code}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ValidationError(DomainError):
    """Malformed input: bad dates, missing fields, rule violations."""

    status_code = 400
    default_code = "VALIDATION_ERROR"
    default_message = "Invalid request"


class NotFound(DomainError):
    """Referenced car, booking or payment does not exist."""

    status_code = 404
    default_code = "NOT_FOUND"
    default_message = "Resource not found"


class Forbidden(DomainError):
    """Actor lacks permission for the requested operation."""

    status_code = 403
    default_code = "FORBIDDEN"
    default_message = "You do not have permission to perform this action"


class InvalidStatusTransition(DomainError):
    """Requested status change is not legal from the current state."""

    status_code = 400
    default_code = "INVALID_STATUS_TRANSITION"

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot change booking status from {current} to {target}")


class DatesNotAvailable(DomainError):
    """An overlapping blocking booking exists; caller must pick new dates."""

    status_code = 409
    default_code = "DATES_NOT_AVAILABLE"
    default_message = "Car is not available for the selected dates"


class DuplicateKey(DomainError):
    """Unique constraint violation at the storage layer."""

    status_code = 409
    default_code = "DUPLICATE_KEY"
    default_message = "Resource already exists"


class InternalError(DomainError):
    """Unexpected persistence or logic failure. Message stays generic."""

    status_code = 500
    default_code = "INTERNAL_ERROR"
    default_message = "Internal server error"
