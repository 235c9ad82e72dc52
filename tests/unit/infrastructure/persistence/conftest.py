"""Fixtures for repository tests against a per-test SQLite database."""

from tests.shared.fixtures.database import (  # noqa: F401
    seeded_user_ids,
    sqlite_engine,
    sqlite_session,
)
