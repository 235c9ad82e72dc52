"""Session domain: persisted refresh tokens."""

from serveis.domain.session.entities import RefreshToken
from serveis.domain.session.repositories import RefreshTokenRepository

__all__ = [
    "RefreshToken",
    "RefreshTokenRepository",
]
