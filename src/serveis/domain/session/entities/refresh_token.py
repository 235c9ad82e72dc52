"""Refresh token entity.

A persisted refresh token is a server-side session. It is usable while
it is neither revoked nor expired; revocation is one-way.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from serveis.domain.shared.time import ensure_tz_aware, utc_now


@dataclass
class RefreshToken:
    """A stored refresh token and its device metadata."""

    id: int
    user_id: int
    token: str
    expires_at: datetime
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None
    revoked: bool = False
    revoked_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        current = now or utc_now()
        return ensure_tz_aware(self.expires_at) <= current

    def is_usable(self, now: Optional[datetime] = None) -> bool:
        return not self.revoked and not self.is_expired(now)

    def __repr__(self) -> str:
        # Never include the token value
        return (
            f"RefreshToken(id={self.id}, user_id={self.user_id}, "
            f"revoked={self.revoked}, expires_at={self.expires_at})"
        )
