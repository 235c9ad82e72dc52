"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Union

from serveis.domain.user.aggregates.user import User
from serveis.domain.user.value_objects.email import Email


class UserRepository(ABC):
    """Repository interface for User aggregates (the credential store)."""

    @abstractmethod
    async def find_by_id(self, user_id: int) -> Optional[User]:
        """Find a user by id, whether active or not."""

    @abstractmethod
    async def find_active_by_id(self, user_id: int) -> Optional[User]:
        """Find a user by id, returning None when it is deactivated."""

    @abstractmethod
    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        """Find a user by normalized email, whether active or not."""

    @abstractmethod
    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        """Check if a user exists with the given email."""

    @abstractmethod
    async def save(self, user: User) -> User:
        """Insert or update a user.

        A new user gets its id assigned. Raises ConflictError when the
        email is already taken.
        """

    @abstractmethod
    async def deactivate(self, user_id: int) -> bool:
        """Set active to false. Returns False if no such user exists."""
