from serveis.domain.session.entities.refresh_token import RefreshToken

__all__ = ["RefreshToken"]
