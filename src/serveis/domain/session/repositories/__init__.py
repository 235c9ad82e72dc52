from serveis.domain.session.repositories.refresh_token_repository import (
    RefreshTokenRepository,
)

__all__ = ["RefreshTokenRepository"]
