"""Shared utilities for SQLAlchemy repositories."""

import logging
import re
from typing import Optional

from sqlalchemy.exc import DBAPIError

from serveis.domain.shared.exceptions import (
    BadRequestError,
    ConflictError,
    DomainException,
    ErrorCode,
    InternalError,
)

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NOT_NULL_VIOLATION = "23502"
DATA_EXCEPTION_CLASS = "22"

# SQLite reports no SQLSTATE, only a message
_SQLITE_CODES = (
    ("UNIQUE constraint failed", UNIQUE_VIOLATION),
    ("FOREIGN KEY constraint failed", FOREIGN_KEY_VIOLATION),
    ("NOT NULL constraint failed", NOT_NULL_VIOLATION),
)

_PG_KEY_DETAIL = re.compile(r"Key \((.*?)\)=")
_SQLITE_COLUMN = re.compile(r"constraint failed: \w+\.(\w+)")


def get_sqlstate(error: DBAPIError) -> Optional[str]:
    """
    Extract the SQLSTATE code of a driver error.

    asyncpg exposes it as ``sqlstate`` (on the adapted error or on its
    cause), psycopg as ``pgcode``. For SQLite the code is inferred from
    the message text.
    """
    orig = error.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        code = getattr(candidate, "sqlstate", None) or getattr(
            candidate,
            "pgcode",
            None,
        )
        if code:
            return str(code)

    message = str(orig)
    for marker, code in _SQLITE_CODES:
        if marker in message:
            return code
    return None


def _offending_field(error: DBAPIError) -> Optional[str]:
    cause = getattr(error.orig, "__cause__", None)
    # asyncpg keeps "Key (col)=(...)" in the detail, not the message
    texts = (str(error.orig), str(getattr(cause, "detail", None) or ""))
    for text in texts:
        for pattern in (_PG_KEY_DETAIL, _SQLITE_COLUMN):
            match = pattern.search(text)
            if match:
                return match.group(1)
    column = getattr(cause, "column_name", None)
    return column or None


def translate_db_error(error: DBAPIError) -> DomainException:
    """Map a store error to the shared error taxonomy.

    Unique violations become conflicts; foreign-key, not-null and data
    errors become bad requests; anything else is internal.
    """
    code = get_sqlstate(error)
    field = _offending_field(error) or "field"

    if code == UNIQUE_VIOLATION:
        return ConflictError(f"{field} already exists", details={"field": field})
    if code == FOREIGN_KEY_VIOLATION:
        return BadRequestError(
            "Referenced resource does not exist",
            code=ErrorCode.REFERENCED_ENTITY_MISSING,
        )
    if code == NOT_NULL_VIOLATION:
        return BadRequestError(
            f"{field} is required",
            code=ErrorCode.REQUIRED_FIELD_MISSING,
        )
    if code is not None and code.startswith(DATA_EXCEPTION_CLASS):
        return BadRequestError("Invalid data format", code=ErrorCode.INVALID_FORMAT)

    logger.error("Unclassified database error (sqlstate=%s): %s", code, error.orig)
    return InternalError("Database error", code=ErrorCode.DATABASE_ERROR)
