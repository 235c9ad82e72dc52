"""Application DTOs."""

from serveis.application.dtos.auth_dto import LoginResult, PublicUser, RefreshResult

__all__ = [
    "LoginResult",
    "PublicUser",
    "RefreshResult",
]
