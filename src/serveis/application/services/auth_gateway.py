"""Auth gateway: turns an Authorization header into a user identity."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Union

from serveis.application.context import UserContext
from serveis.domain.shared.exceptions import (
    DomainException,
    ErrorCode,
    ForbiddenError,
    UnauthorizedError,
)
from serveis.domain.user import UserRole

if TYPE_CHECKING:
    from serveis.application.services.authentication_service import (
        AuthenticationService,
    )
    from serveis.domain.user import UserRepository

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class AuthGateway:
    """Authenticates requests and authorizes identities by role.

    The gateway never mutates the request; callers receive an immutable
    UserContext and pass it on explicitly.
    """

    def __init__(
        self,
        auth_service: AuthenticationService,
        user_repository: UserRepository,
    ):
        self._auth_service = auth_service
        self._user_repo = user_repository

    async def authenticate(self, authorization: Optional[str]) -> UserContext:
        """Resolve a ``Bearer <token>`` header to the active user it names.

        Raises
        ------
        UnauthorizedError
            If the header is missing or malformed, the token is invalid,
            or the user no longer exists or is deactivated.
        """
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise UnauthorizedError(
                "Authentication token not provided",
                code=ErrorCode.MISSING_TOKEN,
            )

        token = authorization[len(BEARER_PREFIX) :].strip()
        claims = self._auth_service.verify_access_token(token)

        user = await self._user_repo.find_active_by_id(claims.user_id)
        if user is None:
            raise UnauthorizedError(
                "User not found or deactivated",
                code=ErrorCode.INVALID_USER,
            )

        return UserContext.create(user)

    async def authenticate_optional(
        self,
        authorization: Optional[str],
    ) -> Optional[UserContext]:
        """Like authenticate, but any failure yields None."""
        if not authorization:
            return None
        try:
            return await self.authenticate(authorization)
        except DomainException as e:
            logger.debug("Optional authentication ignored: %s", e.code.value)
            return None

    @staticmethod
    def authorize(
        identity: Optional[UserContext],
        *allowed_roles: Union[UserRole, str],
    ) -> UserContext:
        """Check an authenticated identity against a set of roles."""
        if identity is None:
            raise UnauthorizedError("Authentication required")

        if not identity.has_role(*allowed_roles):
            logger.warning(
                "User %s with role %s denied (allowed: %s)",
                identity.user_id,
                identity.role.value,
                ", ".join(UserRole(role).value for role in allowed_roles),
            )
            raise ForbiddenError(
                "You do not have permission to perform this action",
                code=ErrorCode.INSUFFICIENT_ROLE,
            )

        return identity
