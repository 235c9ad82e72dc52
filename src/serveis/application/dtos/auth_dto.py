"""DTOs returned by the authentication service."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from serveis.domain.user import User


@dataclass(frozen=True)
class PublicUser:
    """A user as it may leave the service: everything but the hash."""

    id: int
    email: str
    role: str
    active: bool
    name: str
    surname: Optional[str]
    second_surname: Optional[str]
    pseudonym: Optional[str]
    professional_number: Optional[str]
    department: Optional[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "PublicUser":
        if user.id is None:
            msg = "Cannot expose an unsaved user"
            raise ValueError(msg)
        profile = user.profile
        return cls(
            id=user.id,
            email=user.email,
            role=user.role.value,
            active=user.active,
            name=profile.name,
            surname=profile.surname,
            second_surname=profile.second_surname,
            pseudonym=profile.pseudonym,
            professional_number=profile.professional_number,
            department=profile.department,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


@dataclass(frozen=True)
class LoginResult:
    user: PublicUser
    access_token: str
    refresh_token: str
    expires_in: str


@dataclass(frozen=True)
class RefreshResult:
    user: PublicUser
    access_token: str
    expires_in: str
