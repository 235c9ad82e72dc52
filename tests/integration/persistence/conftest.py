"""Fixtures for repository tests against an ephemeral PostgreSQL."""

from tests.shared.fixtures.database import (  # noqa: F401
    async_engine,
    db_session,
    pg_user_ids,
    postgres_container,
    postgres_url,
)
