"""Abstract interfaces for the auth primitives.

The application layer depends on these rather than on the bcrypt and
PyJWT implementations, so either can be replaced in tests.
"""

from abc import ABC, abstractmethod
from datetime import timedelta

from serveis_auth.schemas import AccessTokenClaims, RefreshTokenClaims


class PasswordHasher(ABC):
    """One-way adaptive password hashing."""

    @abstractmethod
    async def hash(self, password: str) -> str:
        """Hash a plaintext password."""

    @abstractmethod
    async def verify(self, password: str, password_hash: str) -> bool:
        """Check a plaintext password against a stored hash."""


class TokenCodec(ABC):
    """Signs and verifies access and refresh tokens."""

    @property
    @abstractmethod
    def access_expires_in(self) -> str:
        """Configured access token lifetime as a duration string."""

    @property
    @abstractmethod
    def refresh_lifetime(self) -> timedelta:
        """Configured refresh token lifetime."""

    @abstractmethod
    def create_access_token(self, user_id: int, email: str, role: str) -> str:
        """Create a signed access token."""

    @abstractmethod
    def create_refresh_token(self, user_id: int) -> str:
        """Create a signed refresh token."""

    @abstractmethod
    def verify_access_token(self, token: str) -> AccessTokenClaims:
        """Verify an access token, raising InvalidTokenError on failure."""

    @abstractmethod
    def verify_refresh_token(self, token: str) -> RefreshTokenClaims:
        """Verify a refresh token, raising InvalidTokenError on failure."""
