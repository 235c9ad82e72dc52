"""Employer management for the current user."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Any, Optional

from serveis.domain.employer import EDITABLE_FIELDS, Employer
from serveis.domain.shared.exceptions import ErrorCode, NotFoundError

if TYPE_CHECKING:
    from serveis.domain.employer import EmployerRepository

logger = logging.getLogger(__name__)


def _not_found() -> NotFoundError:
    return NotFoundError("Employer not found", code=ErrorCode.EMPLOYER_NOT_FOUND)


class EmployerService:
    """
    Application service for a user's employers.

    Every operation is scoped to the owning user; a record owned by
    someone else is indistinguishable from a missing one.
    """

    def __init__(self, employer_repository: EmployerRepository):
        self._repo = employer_repository

    async def list_for_user(
        self,
        user_id: int,
        only_current: bool = False,
    ) -> list[Employer]:
        return await self._repo.list_for_user(user_id, only_current=only_current)

    async def get(self, employer_id: int, user_id: int) -> Employer:
        employer = await self._repo.find_by_id(employer_id, user_id)
        if employer is None:
            raise _not_found()
        return employer

    async def create(self, user_id: int, data: dict[str, Any]) -> Employer:
        unknown = set(data) - set(EDITABLE_FIELDS)
        if unknown:
            msg = f"Unknown employer fields: {sorted(unknown)}"
            raise ValueError(msg)

        employer = Employer.create(user_id=user_id, **data)
        employer = await self._repo.save(employer)
        logger.info("Employer %s created for user %s", employer.id, user_id)
        return employer

    async def update(
        self,
        employer_id: int,
        user_id: int,
        changes: dict[str, Any],
    ) -> Employer:
        """Apply a partial update; keys absent from ``changes`` are kept."""
        employer = await self.get(employer_id, user_id)
        employer.apply_changes(changes)
        employer = await self._repo.save(employer)
        logger.info("Employer %s updated", employer_id)
        return employer

    async def delete(self, employer_id: int, user_id: int) -> None:
        if not await self._repo.soft_delete(employer_id, user_id):
            raise _not_found()
        logger.info("Employer %s deleted", employer_id)

    async def end_relationship(
        self,
        employer_id: int,
        user_id: int,
        end_date: Optional[date] = None,
    ) -> Employer:
        """Set the end date (default today) of a current employer."""
        employer = await self.get(employer_id, user_id)
        employer.end(end_date)
        employer = await self._repo.save(employer)
        logger.info("Employer %s ended on %s", employer_id, employer.end_date)
        return employer
