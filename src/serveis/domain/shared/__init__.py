"""Shared domain components.

This module exports the error taxonomy and time helpers used across
domain boundaries.
"""

from serveis.domain.shared.exceptions import (
    BadRequestError,
    ConflictError,
    DomainException,
    ErrorCode,
    ErrorKind,
    ForbiddenError,
    InternalError,
    NotFoundError,
    RateLimitExceededError,
    UnauthorizedError,
    ValidationError,
)
from serveis.domain.shared.time import ensure_tz_aware, today_utc, utc_now

__all__ = [
    # Error kinds and codes
    "ErrorKind",
    "ErrorCode",
    # Base exception
    "DomainException",
    # Exception kinds
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "ValidationError",
    "RateLimitExceededError",
    "InternalError",
    # Utilities
    "ensure_tz_aware",
    "today_utc",
    "utc_now",
]
