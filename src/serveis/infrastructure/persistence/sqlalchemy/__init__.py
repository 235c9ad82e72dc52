"""SQLAlchemy persistence: models, repositories and engine helpers."""

from serveis.infrastructure.persistence.sqlalchemy.database import (
    SessionLease,
    create_engine_from_settings,
    create_engine_from_url,
    create_session_maker,
    create_tables,
    drop_tables,
)

__all__ = [
    "SessionLease",
    "create_engine_from_settings",
    "create_engine_from_url",
    "create_session_maker",
    "create_tables",
    "drop_tables",
]
