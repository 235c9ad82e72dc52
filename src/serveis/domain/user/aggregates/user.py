from datetime import datetime
from typing import Optional, Union

from serveis.domain.shared.time import utc_now
from serveis.domain.user.value_objects import Email, UserProfile, UserRole


class User:
    """
    User aggregate root.

    Holds identity, credential hash, role and profile. Users are never
    hard-deleted; ``deactivate`` flips the active flag and every
    authentication path rejects inactive users.

    The id is assigned by the store, so a freshly created user has
    ``id is None`` until it has been persisted.
    """

    def __init__(  # NOQA: PLR0913
        self,
        email: Union[str, Email],
        password_hash: str,
        profile: UserProfile,
        role: Union[str, UserRole] = UserRole.USER,
        active: bool = True,
        id: Optional[int] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self._email = email if isinstance(email, Email) else Email(email)
        self._id = id
        self._password_hash = password_hash
        self._profile = profile
        self._role = role if isinstance(role, UserRole) else UserRole(role)
        self._active = active
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> Optional[int]:
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def email_obj(self) -> Email:
        return self._email

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def profile(self) -> UserProfile:
        return self._profile

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def is_admin(self) -> bool:
        return self._role == UserRole.ADMIN

    @property
    def active(self) -> bool:
        return self._active

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def assign_id(self, user_id: int) -> None:
        if self._id is not None and self._id != user_id:
            msg = f"User already has id {self._id}"
            raise ValueError(msg)
        self._id = user_id

    def deactivate(self) -> None:
        self._active = False
        self._updated_at = utc_now()

    def update_profile(self, **changes: Optional[str]) -> None:
        self._profile = self._profile.with_updates(**changes)
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        email: Union[str, Email],
        password_hash: str,
        profile: UserProfile,
        role: Union[str, UserRole] = UserRole.USER,
    ) -> "User":
        return cls(
            email=email,
            password_hash=password_hash,
            profile=profile,
            role=role,
            active=True,
        )

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        id: int,
        email: str,
        password_hash: str,
        profile: UserProfile,
        role: str,
        active: bool,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            email=email,
            password_hash=password_hash,
            profile=profile,
            role=role,
            active=active,
            id=id,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return False
        if self._id is None or other._id is None:
            return self is other
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id) if self._id is not None else id(self)

    def __repr__(self) -> str:
        return (
            f"User(id={self._id}, email={self.email!r}, "
            f"role={self._role.value}, active={self._active})"
        )
