"""SQLAlchemy implementation of EmployerRepository."""

import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from serveis.domain.employer import EDITABLE_FIELDS, Employer, EmployerRepository
from serveis.domain.shared.exceptions import ErrorCode, NotFoundError
from serveis.domain.shared.time import ensure_tz_aware, utc_now
from serveis.infrastructure.persistence.sqlalchemy.models import EmployerModel
from serveis.infrastructure.persistence.sqlalchemy.repositories._utils import (
    translate_db_error,
)

logger = logging.getLogger(__name__)


class EmployerRepositorySQLAlchemy(EmployerRepository):
    """SQLAlchemy implementation of the EmployerRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_user(
        self,
        user_id: int,
        only_current: bool = False,
    ) -> list[Employer]:
        stmt = select(EmployerModel).where(
            EmployerModel.user_id == user_id,
            EmployerModel.active.is_(True),
        )
        if only_current:
            stmt = stmt.where(EmployerModel.end_date.is_(None))
        stmt = stmt.order_by(EmployerModel.start_date.desc(), EmployerModel.id.desc())

        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def find_by_id(self, employer_id: int, user_id: int) -> Optional[Employer]:
        model = await self._find_model(employer_id, user_id)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def save(self, employer: Employer) -> Employer:
        try:
            if employer.id is not None:
                model = await self._find_model(employer.id, employer.user_id)
                if model is None:
                    raise NotFoundError(
                        "Employer not found",
                        code=ErrorCode.EMPLOYER_NOT_FOUND,
                    )
                self._update_model(model, employer)
            else:
                model = self._map_to_model(employer)
                self._session.add(model)
            await self._session.flush()
        except IntegrityError as e:
            raise translate_db_error(e) from e

        await self._session.refresh(model)
        logger.debug("Saved employer %s for user %s", model.id, model.user_id)
        return self._map_to_domain(model)

    async def soft_delete(self, employer_id: int, user_id: int) -> bool:
        stmt = (
            update(EmployerModel)
            .where(
                EmployerModel.id == employer_id,
                EmployerModel.user_id == user_id,
                EmployerModel.active.is_(True),
            )
            .values(active=False, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def _find_model(
        self,
        employer_id: int,
        user_id: int,
    ) -> Optional[EmployerModel]:
        stmt = select(EmployerModel).where(
            EmployerModel.id == employer_id,
            EmployerModel.user_id == user_id,
            EmployerModel.active.is_(True),
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: EmployerModel) -> Employer:
        return Employer(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            tax_id=model.tax_id,
            address=model.address,
            phone=model.phone,
            email=model.email,
            start_date=model.start_date,
            end_date=model.end_date,
            notes=model.notes,
            active=model.active,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, employer: Employer) -> EmployerModel:
        return EmployerModel(
            user_id=employer.user_id,
            active=employer.active,
            created_at=employer.created_at,
            updated_at=employer.updated_at,
            **{name: getattr(employer, name) for name in EDITABLE_FIELDS},
        )

    def _update_model(self, model: EmployerModel, employer: Employer) -> None:
        for name in EDITABLE_FIELDS:
            setattr(model, name, getattr(employer, name))
        model.updated_at = employer.updated_at
