"""SQLAlchemy implementation of UserRepository."""

import logging
from typing import Optional, Union

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from serveis.domain.shared.exceptions import ConflictError, ErrorCode
from serveis.domain.shared.time import ensure_tz_aware, utc_now
from serveis.domain.user import (
    Email,
    User,
    UserProfile,
    UserRepository,
    normalize_email,
)
from serveis.infrastructure.persistence.sqlalchemy.models import UserModel
from serveis.infrastructure.persistence.sqlalchemy.repositories._utils import (
    UNIQUE_VIOLATION,
    get_sqlstate,
    translate_db_error,
)

logger = logging.getLogger(__name__)


def _email_value(email: Union[str, Email]) -> str:
    return email.value if isinstance(email, Email) else normalize_email(email)


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: int) -> Optional[User]:
        model = await self._find_model_by_id(user_id)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def find_active_by_id(self, user_id: int) -> Optional[User]:
        stmt = select(UserModel).where(
            UserModel.id == user_id,
            UserModel.active.is_(True),
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.email == _email_value(email))
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        stmt = select(UserModel.id).where(UserModel.email == _email_value(email))
        result = await self._session.execute(stmt)
        return result.first() is not None

    async def save(self, user: User) -> User:
        existing = None
        if user.id is not None:
            existing = await self._find_model_by_id(user.id)

        try:
            if existing:
                self._update_model(existing, user)
                await self._session.flush()
                logger.debug("Updated user: %s", user.id)
                return user

            model = self._map_to_model(user)
            self._session.add(model)
            await self._session.flush()
        except IntegrityError as e:
            if get_sqlstate(e) == UNIQUE_VIOLATION:
                raise ConflictError(
                    "This email is already registered",
                    code=ErrorCode.EMAIL_ALREADY_EXISTS,
                ) from e
            raise translate_db_error(e) from e

        user.assign_id(model.id)
        logger.info("Created user: %s", model.id)
        return user

    async def deactivate(self, user_id: int) -> bool:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(active=False, updated_at=utc_now())
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def _find_model_by_id(self, user_id: int) -> Optional[UserModel]:
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            profile=UserProfile(
                name=model.name,
                surname=model.surname,
                second_surname=model.second_surname,
                pseudonym=model.pseudonym,
                professional_number=model.professional_number,
                department=model.department,
            ),
            role=model.role,
            active=model.active,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, user: User) -> UserModel:
        profile = user.profile
        return UserModel(
            email=user.email,
            password_hash=user.password_hash,
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

    def _update_model(self, model: UserModel, user: User) -> None:
        profile = user.profile
        model.email = user.email
        model.password_hash = user.password_hash
        model.role = user.role.value
        model.active = user.active
        model.name = profile.name
        model.surname = profile.surname
        model.second_surname = profile.second_surname
        model.pseudonym = profile.pseudonym
        model.professional_number = profile.professional_number
        model.department = profile.department
        model.updated_at = user.updated_at
