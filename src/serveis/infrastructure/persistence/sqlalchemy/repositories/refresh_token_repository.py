"""SQLAlchemy implementation of RefreshTokenRepository."""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from serveis.domain.session import RefreshToken, RefreshTokenRepository
from serveis.domain.shared.time import ensure_tz_aware, utc_now
from serveis.infrastructure.persistence.sqlalchemy.models import RefreshTokenModel
from serveis.infrastructure.persistence.sqlalchemy.repositories._utils import (
    translate_db_error,
)

logger = logging.getLogger(__name__)


class RefreshTokenRepositorySQLAlchemy(RefreshTokenRepository):
    """SQLAlchemy implementation of the RefreshTokenRepository interface.

    "Now" is always bound as a parameter from ``utc_now()`` rather than
    read from the database clock.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        user_id: int,
        token: str,
        expires_at: datetime,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> RefreshToken:
        model = RefreshTokenModel(
            user_id=user_id,
            token=token,
            expires_at=expires_at,
            user_agent=user_agent,
            ip_address=ip_address,
            revoked=False,
            created_at=utc_now(),
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise translate_db_error(e) from e

        logger.debug("Stored refresh token %s for user %s", model.id, user_id)
        return self._map_to_domain(model)

    async def find_active_by_token(self, token: str) -> Optional[RefreshToken]:
        stmt = select(RefreshTokenModel).where(
            RefreshTokenModel.token == token,
            RefreshTokenModel.revoked.is_(False),
            RefreshTokenModel.expires_at > utc_now(),
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def revoke(self, token: str) -> bool:
        stmt = (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.token == token,
                RefreshTokenModel.revoked.is_(False),
            )
            .values(revoked=True, revoked_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def revoke_all_for_user(self, user_id: int) -> int:
        stmt = (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.user_id == user_id,
                RefreshTokenModel.revoked.is_(False),
            )
            .values(revoked=True, revoked_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    async def list_active_for_user(self, user_id: int) -> list[RefreshToken]:
        stmt = (
            select(RefreshTokenModel)
            .where(
                RefreshTokenModel.user_id == user_id,
                RefreshTokenModel.revoked.is_(False),
                RefreshTokenModel.expires_at > utc_now(),
            )
            .order_by(RefreshTokenModel.created_at.desc(), RefreshTokenModel.id.desc())
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def delete_expired_and_revoked(self) -> int:
        stmt = (
            delete(RefreshTokenModel)
            .where(
                or_(
                    RefreshTokenModel.expires_at < utc_now(),
                    RefreshTokenModel.revoked.is_(True),
                ),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        logger.info("Deleted %d expired or revoked refresh token(s)", result.rowcount)
        return result.rowcount

    def _map_to_domain(self, model: RefreshTokenModel) -> RefreshToken:
        return RefreshToken(
            id=model.id,
            user_id=model.user_id,
            token=model.token,
            expires_at=ensure_tz_aware(model.expires_at),
            user_agent=model.user_agent,
            ip_address=model.ip_address,
            revoked=model.revoked,
            revoked_at=(
                ensure_tz_aware(model.revoked_at)
                if model.revoked_at is not None
                else None
            ),
            created_at=(
                ensure_tz_aware(model.created_at)
                if model.created_at is not None
                else None
            ),
        )
