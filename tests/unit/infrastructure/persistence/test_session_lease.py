"""Unit tests for SessionLease."""

import asyncio
import logging
from unittest.mock import AsyncMock, Mock

import pytest

from serveis.infrastructure.persistence.sqlalchemy import SessionLease


class TestSessionLease:
    def setup_method(self):
        """Set up test fixtures."""
        self.session = AsyncMock()
        self.session_maker = Mock(return_value=self.session)

    @pytest.mark.asyncio
    async def test_release_in_time_closes_once(self):
        async with SessionLease(self.session_maker, release_timeout=5.0) as session:
            assert session is self.session

        self.session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_held_session_is_reclaimed(self, caplog):
        """A session held past the timeout is closed and a warning logged."""
        lease = SessionLease(self.session_maker, release_timeout=0.01)

        with caplog.at_level(logging.WARNING):
            await lease.acquire()
            await asyncio.sleep(0.05)

        assert lease.reclaimed
        self.session.close.assert_awaited_once()
        assert "not released" in caplog.text

        await lease.release()
        self.session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_acquire_twice_rejected(self):
        lease = SessionLease(self.session_maker)
        await lease.acquire()

        with pytest.raises(RuntimeError):
            await lease.acquire()

        await lease.release()
