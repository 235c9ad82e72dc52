"""User context for request-scoped user identity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from serveis.domain.user import UserRole

if TYPE_CHECKING:
    from serveis.domain.user import User


@dataclass(frozen=True)
class UserContext:
    """Immutable identity of the current authenticated user.

    Built by the auth gateway and handed to route handlers explicitly.
    Never carries the password hash.
    """

    user_id: int
    email: str
    role: UserRole
    display_name: str = ""

    @classmethod
    def create(cls, user: User) -> UserContext:
        if user.id is None:
            msg = "Cannot build a context for an unsaved user"
            raise ValueError(msg)
        return cls(
            user_id=user.id,
            email=user.email,
            role=user.role,
            display_name=user.profile.display_name,
        )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def has_role(self, *roles: UserRole | str) -> bool:
        allowed = {UserRole(role) for role in roles}
        return self.role in allowed

    def __str__(self) -> str:
        return f"UserContext({self.email})"

    def __repr__(self) -> str:
        return (
            f"UserContext(user_id={self.user_id}, "
            f"email={self.email!r}, role={self.role.value})"
        )
