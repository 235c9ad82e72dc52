"""Serveis Auth - Generic authentication primitives.

This package provides authentication building blocks that are independent
of the application domain. It handles:
- Password hashing (bcrypt, off the event loop)
- JWT access/refresh token creation and verification
- Token lifetime duration strings

Architecture:
    serveis_auth/
    ├── services/           # bcrypt, PyJWT and duration parsing
    ├── ports.py            # Abstract PasswordHasher / TokenCodec
    ├── schemas.py          # Decoded token claims
    └── exceptions.py       # Auth exceptions

Usage:
    from serveis_auth import JWTService, PasswordHashingService, parse_duration
"""

from serveis_auth.exceptions import (
    AuthError,
    InvalidTokenError,
    WeakPasswordError,
)
from serveis_auth.ports import PasswordHasher, TokenCodec
from serveis_auth.schemas import AccessTokenClaims, RefreshTokenClaims
from serveis_auth.services import (
    DEFAULT_DURATION_MS,
    JWTService,
    PasswordHashingService,
    duration_to_timedelta,
    parse_duration,
)

__all__ = [
    # Services
    "JWTService",
    "PasswordHashingService",
    "parse_duration",
    "duration_to_timedelta",
    "DEFAULT_DURATION_MS",
    # Interfaces
    "PasswordHasher",
    "TokenCodec",
    # Schemas
    "AccessTokenClaims",
    "RefreshTokenClaims",
    # Exceptions
    "AuthError",
    "InvalidTokenError",
    "WeakPasswordError",
]
