"""API request/response schemas."""

from serveis.presentation.api.schemas.admin import DeactivateUserResponse
from serveis.presentation.api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LogoutAllResponse,
    LogoutResponse,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
    SessionResponse,
    UserResponse,
)
from serveis.presentation.api.schemas.common import (
    CamelModel,
    ErrorResponse,
    FieldError,
    HealthResponse,
)
from serveis.presentation.api.schemas.employers import (
    EmployerCreateRequest,
    EmployerEndRequest,
    EmployerListResponse,
    EmployerResponse,
    EmployerUpdateRequest,
)

__all__ = [
    "CamelModel",
    "DeactivateUserResponse",
    "EmployerCreateRequest",
    "EmployerEndRequest",
    "EmployerListResponse",
    "EmployerResponse",
    "EmployerUpdateRequest",
    "ErrorResponse",
    "FieldError",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "LogoutAllResponse",
    "LogoutResponse",
    "RefreshRequest",
    "RefreshResponse",
    "RegisterRequest",
    "SessionResponse",
    "UserResponse",
]
