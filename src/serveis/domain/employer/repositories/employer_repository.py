"""Employer repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from serveis.domain.employer.aggregates.employer import Employer


class EmployerRepository(ABC):
    """Repository interface for Employer aggregates.

    Every lookup is scoped to the owning user and ignores soft-deleted rows.
    """

    @abstractmethod
    async def list_for_user(
        self,
        user_id: int,
        only_current: bool = False,
    ) -> list[Employer]:
        """List active employers, newest start date first."""

    @abstractmethod
    async def find_by_id(self, employer_id: int, user_id: int) -> Optional[Employer]:
        """Find an active employer owned by the user."""

    @abstractmethod
    async def save(self, employer: Employer) -> Employer:
        """Insert or update an employer; new ones get their id assigned."""

    @abstractmethod
    async def soft_delete(self, employer_id: int, user_id: int) -> bool:
        """Mark an employer inactive. Returns True if a row changed."""
