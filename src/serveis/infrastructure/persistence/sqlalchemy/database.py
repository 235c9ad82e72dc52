"""Engine, session factory and schema helpers."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from serveis.infrastructure.persistence.sqlalchemy.models import Base

if TYPE_CHECKING:
    from serveis_config.settings import Settings

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_from_url(
    url: str,
    pool_size: int = 20,
    pool_timeout: float = 2.0,
    echo: bool = False,
) -> AsyncEngine:
    """
    Create the shared async engine.

    Pool sizing only applies to server databases; SQLite gets its
    default pool and foreign key enforcement switched on.

    Parameters
    ----------
    url
        SQLAlchemy async URL (``postgresql+asyncpg://`` or ``sqlite+aiosqlite://``)
    pool_size
        Maximum number of pooled connections
    pool_timeout
        Seconds to wait for a free connection before failing
    echo
        Log every SQL statement

    Returns
    -------
    AsyncEngine instance
    """
    if url.startswith("sqlite"):
        engine = create_async_engine(url, echo=echo)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=pool_size,
        max_overflow=0,
        pool_timeout=pool_timeout,
    )


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    return create_engine_from_url(
        settings.database_url,
        pool_size=settings.db_pool_size,
        pool_timeout=settings.db_pool_timeout,
        echo=settings.debug,
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema is up to date")


async def drop_tables(engine: AsyncEngine) -> None:
    """Drop all database tables. Intended for tests and local resets."""
    logger.warning("Dropping all database tables...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


class SessionLease:
    """
    A session held outside a request, reclaimed if it is not released in time.

    If the holder has not released the session after ``release_timeout``
    seconds, a warning is logged and the session is closed, returning its
    connection to the pool. The holder is not interrupted; releasing an
    already reclaimed lease is a no-op.

    Examples
    --------
    >>> async with SessionLease(session_maker, release_timeout=5.0) as session:
    ...     await session.execute(...)
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        release_timeout: float = 5.0,
    ):
        self._session_maker = session_maker
        self._release_timeout = release_timeout
        self._session: Optional[AsyncSession] = None
        self._timer: Optional[asyncio.TimerHandle] = None
        self._reclaim_task: Optional[asyncio.Task[None]] = None
        self._reclaimed = False

    @property
    def reclaimed(self) -> bool:
        return self._reclaimed

    async def acquire(self) -> AsyncSession:
        if self._session is not None:
            msg = "Lease already acquired"
            raise RuntimeError(msg)
        self._session = self._session_maker()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._release_timeout, self._reclaim)
        return self._session

    def _reclaim(self) -> None:
        if self._session is None:
            return
        logger.warning(
            "Database session not released after %.1f seconds, reclaiming it",
            self._release_timeout,
        )
        self._reclaimed = True
        self._reclaim_task = asyncio.ensure_future(self._session.close())

    async def release(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        if self._reclaimed:
            if self._reclaim_task is not None:
                await self._reclaim_task
                self._reclaim_task = None
            return

        if self._session is not None:
            await self._session.close()

    async def __aenter__(self) -> AsyncSession:
        return await self.acquire()

    async def __aexit__(self, *exc_info: object) -> None:
        await self.release()
