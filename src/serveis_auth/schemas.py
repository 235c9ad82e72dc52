"""Auth schemas and data structures.

These are simple data classes used for transferring decoded token
data between components.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AccessTokenClaims:
    """Decoded access token payload.

    Attributes
    ----------
    user_id
        The subject of the token
    email
        The user's email address at issue time
    role
        The user's role at issue time
    issuer
        The service that signed the token
    expires_at
        Token expiration timestamp
    """

    user_id: int
    email: str
    role: str
    issuer: str
    expires_at: datetime


@dataclass(frozen=True)
class RefreshTokenClaims:
    """Decoded refresh token payload."""

    user_id: int
    token_id: str
    issuer: str
    expires_at: datetime
