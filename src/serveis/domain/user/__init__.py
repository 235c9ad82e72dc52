"""User domain: the User aggregate, its value objects and repository."""

from serveis.domain.user.aggregates import User
from serveis.domain.user.exceptions import InvalidEmailError
from serveis.domain.user.repositories import UserRepository
from serveis.domain.user.value_objects import (
    Email,
    UserProfile,
    UserRole,
    normalize_email,
)

__all__ = [
    "Email",
    "InvalidEmailError",
    "User",
    "UserProfile",
    "UserRepository",
    "UserRole",
    "normalize_email",
]
