"""Centralized exception handlers for the FastAPI application.

Domain exceptions are mapped to HTTP responses through a single table
keyed by ErrorKind, so no route decides a status code for a failure.

Error Response Format:
    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE",
        "errors": [{"field": "...", "message": "..."}]   # validation only
    }

Usage:
    from serveis.presentation.api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError

from serveis.domain.shared.exceptions import (
    DomainException,
    ErrorCode,
    ErrorKind,
    RateLimitExceededError,
    ValidationError,
)
from serveis.infrastructure.persistence.sqlalchemy.repositories._utils import (
    translate_db_error,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Error Kind to HTTP Status Mapping
# =============================================================================

KIND_TO_STATUS: dict[ErrorKind, int] = {
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.VALIDATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.TOO_MANY_REQUESTS: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_missing = set(ErrorKind) - set(KIND_TO_STATUS)
if _missing:
    msg = f"KIND_TO_STATUS is missing {sorted(k.value for k in _missing)}"
    raise RuntimeError(msg)


def status_for(exc: DomainException) -> int:
    return KIND_TO_STATUS[exc.kind]


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
    errors: Optional[list[dict[str, str]]] = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    """Create a standardized error response."""
    content: dict[str, Any] = {
        "detail": message,
        "code": code,
    }
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _field_name(loc: tuple[Any, ...]) -> str:
    # ("body", "email") -> "email"; drop the request-part prefix
    parts = [str(part) for part in loc if part not in ("body", "query", "path")]
    return ".".join(parts) or "body"


def _domain_response(request: Request, exc: DomainException) -> JSONResponse:
    status_code = status_for(exc)

    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "Internal domain error on %s %s: %s (code=%s, details=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
            exc.details,
        )
    else:
        logger.warning(
            "Domain exception on %s %s: %s (code=%s, details=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
            exc.details,
        )

    headers = None
    if isinstance(exc, RateLimitExceededError):
        headers = {"Retry-After": str(exc.retry_after)}
    elif status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return _create_error_response(
        status_code=status_code,
        message=exc.message,
        code=exc.code.value,
        errors=exc.errors if isinstance(exc, ValidationError) else None,
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        return _domain_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Report malformed request bodies as 400 with per-field messages."""
        errors = [
            {"field": _field_name(tuple(error.get("loc", ()))), "message": error["msg"]}
            for error in exc.errors()
        ]
        logger.info(
            "Request validation failed on %s %s: %s",
            request.method,
            request.url.path,
            [error["field"] for error in errors],
        )
        return _create_error_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            message="Validation error",
            code=ErrorCode.VALIDATION_ERROR.value,
            errors=errors,
        )

    @app.exception_handler(DBAPIError)
    async def database_exception_handler(
        request: Request,
        exc: DBAPIError,
    ) -> JSONResponse:
        """Translate store errors that escaped the repositories."""
        return _domain_response(request, translate_db_error(exc))

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format.

        The traceback is logged; the client only sees a generic message.
        """
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="An internal error occurred",
            code=ErrorCode.INTERNAL_ERROR.value,
        )
