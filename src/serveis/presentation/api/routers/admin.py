"""Admin router: user management restricted to the admin role."""

import logging

from fastapi import APIRouter

from serveis.presentation.api.dependencies import AdminUser, AuthService, DBSession
from serveis.presentation.api.schemas.admin import DeactivateUserResponse
from serveis.presentation.api.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin")


@router.patch(
    "/users/{user_id}/deactivate",
    summary="Deactivate a user",
    responses={
        200: {"description": "User deactivated and signed out everywhere"},
        403: {"model": ErrorResponse, "description": "Admin access required"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def deactivate_user(
    user_id: int,
    admin: AdminUser,
    auth_service: AuthService,
    session: DBSession,
) -> DeactivateUserResponse:
    """
    Deactivate a user and revoke all of their refresh tokens.

    Access tokens already issued stay valid until they expire, but every
    authenticated request re-checks the active flag.
    """
    count = await auth_service.deactivate_user(user_id)
    await session.commit()
    logger.info("Admin %s deactivated user %s", admin.user_id, user_id)
    return DeactivateUserResponse(user_id=user_id, active=False, tokens_revoked=count)
