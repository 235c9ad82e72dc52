"""Admin schemas."""

from serveis.presentation.api.schemas.common import CamelModel


class DeactivateUserResponse(CamelModel):
    user_id: int
    active: bool
    tokens_revoked: int
