"""FastAPI dependency injection for the Serveis API.

Long-lived collaborators (engine, session maker, password hasher, token
codec, rate limiter) are built once by the application lifespan and kept
on ``app.state``. Everything below builds request-scoped repositories
and services from them.
"""

import logging
from typing import Annotated, AsyncGenerator, Awaitable, Callable, Optional, Union

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from serveis.application.context import UserContext
from serveis.application.services import (
    AuthenticationService,
    AuthGateway,
    EmployerService,
)
from serveis.domain.user import UserRole
from serveis.infrastructure.persistence.sqlalchemy.repositories import (
    EmployerRepositorySQLAlchemy,
    RefreshTokenRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from serveis.infrastructure.security.rate_limiter import RateLimiter
from serveis_auth import PasswordHasher, TokenCodec
from serveis_config.settings import Settings

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Application state
# -----------------------------------------------------------------------------


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
RateLimiterDep = Annotated[RateLimiter, Depends(get_rate_limiter)]


# -----------------------------------------------------------------------------
# Database Session
# -----------------------------------------------------------------------------


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.
    Handlers commit explicitly; anything uncommitted is rolled back on close.

    Yields
    ------
    AsyncSession for database operations
    """
    async with request.app.state.session_maker() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------


async def get_authentication_service(
    session: DBSession,
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    token_codec: TokenCodec = Depends(get_token_codec),
) -> AuthenticationService:
    """
    Get authentication service with all dependencies.

    This service orchestrates user registration, login, and session management.
    """
    return AuthenticationService(
        user_repository=UserRepositorySQLAlchemy(session),
        token_repository=RefreshTokenRepositorySQLAlchemy(session),
        password_hasher=password_hasher,
        token_codec=token_codec,
    )


# Type alias for injected auth service
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


async def get_auth_gateway(
    session: DBSession,
    auth_service: AuthService,
) -> AuthGateway:
    return AuthGateway(
        auth_service=auth_service,
        user_repository=UserRepositorySQLAlchemy(session),
    )


Gateway = Annotated[AuthGateway, Depends(get_auth_gateway)]


# -----------------------------------------------------------------------------
# Current User (JWT Authentication)
# -----------------------------------------------------------------------------


async def get_current_user(
    gateway: Gateway,
    authorization: Annotated[Optional[str], Header()] = None,
) -> UserContext:
    """
    FastAPI dependency resolving the Authorization header to a user identity.

    Raises
    ------
    UnauthorizedError
        401 if the token is missing or invalid, or the user is gone or deactivated
    """
    return await gateway.authenticate(authorization)


# Type alias for injected current user
CurrentUser = Annotated[UserContext, Depends(get_current_user)]


async def get_current_user_optional(
    gateway: Gateway,
    authorization: Annotated[Optional[str], Header()] = None,
) -> Optional[UserContext]:
    """
    Optional authentication dependency.

    Returns the current user if a valid token is provided, None otherwise.
    """
    return await gateway.authenticate_optional(authorization)


# Type alias for optional current user
OptionalCurrentUser = Annotated[
    Optional[UserContext],
    Depends(get_current_user_optional),
]


def require_roles(
    *roles: Union[UserRole, str],
) -> Callable[[UserContext], Awaitable[UserContext]]:
    """Build a dependency that admits only users holding one of ``roles``."""

    async def _require_roles(user: CurrentUser) -> UserContext:
        return AuthGateway.authorize(user, *roles)

    return _require_roles


# Type alias for admin user
AdminUser = Annotated[UserContext, Depends(require_roles(UserRole.ADMIN))]


# -----------------------------------------------------------------------------
# Application Services
# -----------------------------------------------------------------------------


async def get_employer_service(session: DBSession) -> EmployerService:
    return EmployerService(EmployerRepositorySQLAlchemy(session))


EmployerServiceDep = Annotated[EmployerService, Depends(get_employer_service)]


# -----------------------------------------------------------------------------
# Client metadata
# -----------------------------------------------------------------------------


def get_client_ip(request: Request) -> Optional[str]:
    """Extract the client IP from the request.

    Reverse proxy headers are client-controlled, so they are only read
    when ``api_trust_proxy_headers`` is enabled (the app sits behind a
    proxy that overwrites them).
    """
    if not request.app.state.settings.api_trust_proxy_headers:
        return request.client.host if request.client else None

    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    if request.client:
        return request.client.host

    return None


def get_user_agent(request: Request) -> Optional[str]:
    return request.headers.get("User-Agent")


ClientIP = Annotated[Optional[str], Depends(get_client_ip)]
UserAgent = Annotated[Optional[str], Depends(get_user_agent)]
