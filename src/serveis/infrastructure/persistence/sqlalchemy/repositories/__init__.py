"""SQLAlchemy repository implementations."""

from serveis.infrastructure.persistence.sqlalchemy.repositories.employer_repository import (  # NOQA: E501
    EmployerRepositorySQLAlchemy,
)
from serveis.infrastructure.persistence.sqlalchemy.repositories.refresh_token_repository import (  # NOQA: E501
    RefreshTokenRepositorySQLAlchemy,
)
from serveis.infrastructure.persistence.sqlalchemy.repositories.user_repository import (  # NOQA: E501
    UserRepositorySQLAlchemy,
)

__all__ = [
    "EmployerRepositorySQLAlchemy",
    "RefreshTokenRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
]
