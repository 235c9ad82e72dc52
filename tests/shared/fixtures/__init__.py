"""Shared pytest fixtures and test doubles."""

from tests.shared.fixtures.database import (
    async_engine,
    db_session,
    pg_user_ids,
    postgres_container,
    postgres_url,
    seeded_user_ids,
    sqlite_engine,
    sqlite_session,
)
from tests.shared.fixtures.in_memory import (
    InMemoryRefreshTokenRepository,
    InMemoryUserRepository,
)

__all__ = [
    "async_engine",
    "db_session",
    "pg_user_ids",
    "postgres_container",
    "postgres_url",
    "seeded_user_ids",
    "sqlite_engine",
    "sqlite_session",
    "InMemoryRefreshTokenRepository",
    "InMemoryUserRepository",
]
