"""Unit tests for store error translation."""

import pytest
from sqlalchemy.exc import DataError, IntegrityError, OperationalError

from serveis.domain.shared.exceptions import (
    BadRequestError,
    ConflictError,
    ErrorCode,
    InternalError,
)
from serveis.infrastructure.persistence.sqlalchemy.repositories._utils import (
    get_sqlstate,
    translate_db_error,
)


class FakeDriverError(Exception):
    """Stands in for an asyncpg error exposing a SQLSTATE."""

    def __init__(self, message: str, sqlstate=None, column_name=None):
        super().__init__(message)
        self.sqlstate = sqlstate
        self.column_name = column_name


def _integrity(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, orig)


class TestGetSqlstate:
    def test_reads_driver_sqlstate(self):
        assert get_sqlstate(_integrity(FakeDriverError("x", "23505"))) == "23505"

    def test_reads_sqlstate_from_cause(self):
        """The asyncpg dialect wraps the driver error; the code sits on its cause."""
        adapted = Exception("wrapped")
        adapted.__cause__ = FakeDriverError("x", "23503")

        assert get_sqlstate(_integrity(adapted)) == "23503"

    @pytest.mark.parametrize(
        ("message", "expected"),
        [
            ("UNIQUE constraint failed: users.email", "23505"),
            ("FOREIGN KEY constraint failed", "23503"),
            ("NOT NULL constraint failed: employers.name", "23502"),
            ("disk I/O error", None),
        ],
    )
    def test_sqlite_messages(self, message, expected):
        assert get_sqlstate(_integrity(Exception(message))) == expected


class TestTranslateDbError:
    def test_unique_violation_is_conflict(self):
        error = _integrity(
            FakeDriverError(
                'duplicate key value violates unique constraint "users_email_key"\n'
                "DETAIL:  Key (email)=(a@example.com) already exists.",
                "23505",
            ),
        )

        result = translate_db_error(error)

        assert isinstance(result, ConflictError)
        assert result.message == "email already exists"

    def test_sqlite_unique_violation_names_column(self):
        result = translate_db_error(
            _integrity(Exception("UNIQUE constraint failed: refresh_tokens.token")),
        )

        assert isinstance(result, ConflictError)
        assert result.details == {"field": "token"}

    def test_foreign_key_violation_is_bad_request(self):
        result = translate_db_error(_integrity(FakeDriverError("fk", "23503")))

        assert isinstance(result, BadRequestError)
        assert result.code == ErrorCode.REFERENCED_ENTITY_MISSING

    def test_not_null_violation_is_bad_request(self):
        adapted = Exception("null value in column")
        adapted.__cause__ = FakeDriverError("null", "23502", column_name="name")

        result = translate_db_error(_integrity(adapted))

        assert isinstance(result, BadRequestError)
        assert result.code == ErrorCode.REQUIRED_FIELD_MISSING
        assert result.message == "name is required"

    def test_data_exception_is_bad_request(self):
        error = DataError("SELECT ...", {}, FakeDriverError("bad input", "22P02"))

        result = translate_db_error(error)

        assert isinstance(result, BadRequestError)
        assert result.code == ErrorCode.INVALID_FORMAT

    def test_anything_else_is_internal(self):
        error = OperationalError("SELECT 1", {}, Exception("connection reset"))

        result = translate_db_error(error)

        assert isinstance(result, InternalError)
        assert result.code == ErrorCode.DATABASE_ERROR
