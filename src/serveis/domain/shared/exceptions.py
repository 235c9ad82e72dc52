"""Shared domain exceptions and error codes.

This module defines the closed error taxonomy for the whole service.
Every failure raised by the domain and application layers is a
DomainException subclass whose ``kind`` is fixed by the class; the
presentation layer maps kinds to HTTP statuses in a single table.
"""

from enum import Enum
from typing import Any, ClassVar


class ErrorKind(str, Enum):
    """Closed set of failure kinds.

    The presentation layer must handle every member.
    """

    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    VALIDATION = "validation"
    TOO_MANY_REQUESTS = "too_many_requests"
    INTERNAL = "internal"


class ErrorCode(str, Enum):
    """Stable error codes for API clients.

    These codes are part of the public API contract. Should not be changed.
    """

    # Bad Request (400)
    BAD_REQUEST = "BAD_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_FORMAT = "INVALID_FORMAT"
    REFERENCED_ENTITY_MISSING = "REFERENCED_ENTITY_MISSING"
    REQUIRED_FIELD_MISSING = "REQUIRED_FIELD_MISSING"
    WEAK_PASSWORD = "WEAK_PASSWORD"

    # Unauthorized (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    MISSING_TOKEN = "MISSING_TOKEN"
    INVALID_ACCESS_TOKEN = "INVALID_ACCESS_TOKEN"
    INVALID_REFRESH_TOKEN = "INVALID_REFRESH_TOKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_USER = "INVALID_USER"

    # Forbidden (403)
    FORBIDDEN = "FORBIDDEN"
    USER_DEACTIVATED = "USER_DEACTIVATED"
    INSUFFICIENT_ROLE = "INSUFFICIENT_ROLE"

    # Not Found (404)
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    EMPLOYER_NOT_FOUND = "EMPLOYER_NOT_FOUND"

    # Conflict (409)
    CONFLICT = "CONFLICT"
    EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"

    # Business Rule Violations (422)
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
    NAME_REQUIRED = "NAME_REQUIRED"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    EMPLOYMENT_ALREADY_ENDED = "EMPLOYMENT_ALREADY_ENDED"

    # Too Many Requests (429)
    RATE_LIMITED = "RATE_LIMITED"

    # Internal (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Base exception for all domain-related errors.

    Attributes
    ----------
    kind
        Failure kind, fixed per subclass
    message
        Human-readable error message (safe for end users)
    code
        Stable error code for programmatic handling
    details
        Optional additional context (logged but not exposed to users)
    """

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL
    default_code: ClassVar[ErrorCode] = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"kind={self.kind.value!r}, "
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class BadRequestError(DomainException):
    """Malformed input not caught by the request validators."""

    kind = ErrorKind.BAD_REQUEST
    default_code = ErrorCode.BAD_REQUEST

    def __init__(
        self,
        message: str = "Bad request",
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class UnauthorizedError(DomainException):
    """Missing, invalid or expired credential or token."""

    kind = ErrorKind.UNAUTHORIZED
    default_code = ErrorCode.UNAUTHORIZED

    def __init__(
        self,
        message: str = "Unauthorized",
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ForbiddenError(DomainException):
    """Authenticated, but deactivated or lacking the required role."""

    kind = ErrorKind.FORBIDDEN
    default_code = ErrorCode.FORBIDDEN

    def __init__(
        self,
        message: str = "Forbidden",
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class NotFoundError(DomainException):
    """Raised when a requested entity cannot be found."""

    kind = ErrorKind.NOT_FOUND
    default_code = ErrorCode.ENTITY_NOT_FOUND

    def __init__(
        self,
        message: str = "Resource not found",
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ConflictError(DomainException):
    """Raised when an operation conflicts with existing state."""

    kind = ErrorKind.CONFLICT
    default_code = ErrorCode.CONFLICT

    def __init__(
        self,
        message: str = "Conflict",
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ValidationError(DomainException):
    """Raised when a business rule is violated.

    ``errors`` holds field-level detail as ``{"field", "message"}`` dicts
    and is returned to the client.
    """

    kind = ErrorKind.VALIDATION
    default_code = ErrorCode.BUSINESS_RULE_VIOLATION

    def __init__(
        self,
        message: str = "Validation error",
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
        errors: list[dict[str, str]] | None = None,
    ) -> None:
        super().__init__(message, code, details)
        self.errors = errors or []


class RateLimitExceededError(DomainException):
    """Raised when a client exceeds a request budget."""

    kind = ErrorKind.TOO_MANY_REQUESTS
    default_code = ErrorCode.RATE_LIMITED

    def __init__(
        self,
        message: str = "Too many requests. Try again later.",
        retry_after: int = 0,
        code: ErrorCode | None = None,
    ) -> None:
        super().__init__(message, code, {"retry_after": retry_after})
        self.retry_after = retry_after


class InternalError(DomainException):
    """Unexpected or store-layer fault."""

    kind = ErrorKind.INTERNAL
    default_code = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str = "Internal server error",
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
