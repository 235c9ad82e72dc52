"""Application layer services."""

from serveis.application.services.auth_gateway import AuthGateway
from serveis.application.services.authentication_service import (
    AuthenticationService,
)
from serveis.application.services.employer_service import EmployerService

__all__ = [
    "AuthGateway",
    "AuthenticationService",
    "EmployerService",
]
