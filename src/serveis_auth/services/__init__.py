"""Authentication services.

Provides password hashing, JWT token management and duration parsing.
"""

from serveis_auth.services.duration import (
    DEFAULT_DURATION_MS,
    duration_to_timedelta,
    parse_duration,
)
from serveis_auth.services.jwt_service import JWTService
from serveis_auth.services.password_service import PasswordHashingService

__all__ = [
    "DEFAULT_DURATION_MS",
    "JWTService",
    "PasswordHashingService",
    "duration_to_timedelta",
    "parse_duration",
]
