"""Refresh token repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from serveis.domain.session.entities.refresh_token import RefreshToken


class RefreshTokenRepository(ABC):
    """Repository interface for persisted refresh tokens (the token store).

    Every mutation is a single conditional statement, so concurrent
    callers never need a surrounding transaction.
    """

    @abstractmethod
    async def create(
        self,
        user_id: int,
        token: str,
        expires_at: datetime,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> RefreshToken:
        """Persist a new, unrevoked token."""

    @abstractmethod
    async def find_active_by_token(self, token: str) -> Optional[RefreshToken]:
        """Return the row only if it is unrevoked and unexpired."""

    @abstractmethod
    async def revoke(self, token: str) -> bool:
        """Revoke one unrevoked token. Returns True if a row changed."""

    @abstractmethod
    async def revoke_all_for_user(self, user_id: int) -> int:
        """Revoke every unrevoked token of a user. Returns the count."""

    @abstractmethod
    async def list_active_for_user(self, user_id: int) -> list[RefreshToken]:
        """List usable tokens of a user, newest first."""

    @abstractmethod
    async def delete_expired_and_revoked(self) -> int:
        """Delete expired or revoked rows. Returns the count."""
