"""SQLAlchemy models. Importing this package registers every table on Base."""

from serveis.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from serveis.infrastructure.persistence.sqlalchemy.models.employer_model import (
    EmployerModel,
)
from serveis.infrastructure.persistence.sqlalchemy.models.refresh_token_model import (
    RefreshTokenModel,
)
from serveis.infrastructure.persistence.sqlalchemy.models.user_model import UserModel

__all__ = [
    "Base",
    "EmployerModel",
    "RefreshTokenModel",
    "TimestampMixin",
    "UserModel",
]
