"""Unit tests for the shared error taxonomy."""

import pytest

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

EXPECTED_KINDS = [
    (BadRequestError, ErrorKind.BAD_REQUEST, ErrorCode.BAD_REQUEST),
    (UnauthorizedError, ErrorKind.UNAUTHORIZED, ErrorCode.UNAUTHORIZED),
    (ForbiddenError, ErrorKind.FORBIDDEN, ErrorCode.FORBIDDEN),
    (NotFoundError, ErrorKind.NOT_FOUND, ErrorCode.ENTITY_NOT_FOUND),
    (ConflictError, ErrorKind.CONFLICT, ErrorCode.CONFLICT),
    (ValidationError, ErrorKind.VALIDATION, ErrorCode.BUSINESS_RULE_VIOLATION),
    (RateLimitExceededError, ErrorKind.TOO_MANY_REQUESTS, ErrorCode.RATE_LIMITED),
    (InternalError, ErrorKind.INTERNAL, ErrorCode.INTERNAL_ERROR),
]


class TestDomainExceptions:
    @pytest.mark.parametrize(("cls", "kind", "code"), EXPECTED_KINDS)
    def test_kind_and_default_code(self, cls, kind, code):
        """Each subclass fixes its kind and has a usable default message."""
        exc = cls()

        assert isinstance(exc, DomainException)
        assert exc.kind == kind
        assert exc.code == code
        assert exc.message

    def test_every_kind_has_a_class(self):
        covered = {kind for _, kind, _ in EXPECTED_KINDS}
        assert covered == set(ErrorKind)

    def test_explicit_code_overrides_default(self):
        exc = NotFoundError("Employer not found", code=ErrorCode.EMPLOYER_NOT_FOUND)

        assert exc.code == ErrorCode.EMPLOYER_NOT_FOUND
        assert str(exc) == "Employer not found"

    def test_validation_error_carries_field_errors(self):
        exc = ValidationError(errors=[{"field": "name", "message": "required"}])
        assert exc.errors == [{"field": "name", "message": "required"}]

    def test_rate_limit_carries_retry_after(self):
        exc = RateLimitExceededError(retry_after=30)

        assert exc.retry_after == 30
        assert exc.details == {"retry_after": 30}

    def test_repr_names_kind_and_code(self):
        text = repr(ConflictError("taken", code=ErrorCode.EMAIL_ALREADY_EXISTS))

        assert "conflict" in text
        assert "EMAIL_ALREADY_EXISTS" in text
