"""Authentication router for registration, login and session management."""

import logging

from fastapi import APIRouter, status

from serveis.application.services import AuthGateway
from serveis.domain.user import UserProfile, UserRole
from serveis.infrastructure.security.rate_limiter import (
    LOGIN_POLICY,
    REGISTER_POLICY,
)
from serveis.presentation.api.dependencies import (
    AuthService,
    ClientIP,
    CurrentUser,
    DBSession,
    OptionalCurrentUser,
    RateLimiterDep,
    UserAgent,
)
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
from serveis.presentation.api.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()

UNKNOWN_CLIENT = "unknown"


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered successfully"},
        400: {"model": ErrorResponse, "description": "Invalid input"},
        401: {"model": ErrorResponse, "description": "Role requires an admin caller"},
        403: {"model": ErrorResponse, "description": "Role requires an admin caller"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
        429: {"model": ErrorResponse, "description": "Too many registrations"},
    },
)
async def register(
    request: RegisterRequest,
    auth_service: AuthService,
    session: DBSession,
    rate_limiter: RateLimiterDep,
    client_ip: ClientIP,
    current_user: OptionalCurrentUser,
) -> UserResponse:
    """
    Register a new account.

    The email is stored lower-cased; the password must be at least 8
    characters and mix upper and lower case letters, digits and one of
    ``!@#$%^&*``. No tokens are issued; log in afterwards. Successful
    registrations do not count towards the per-client limit.

    Anyone may register a plain ``user``. Any other role is only granted
    when the caller is authenticated as an admin.
    """
    if request.role != UserRole.USER:
        AuthGateway.authorize(current_user, UserRole.ADMIN)

    client = client_ip or UNKNOWN_CLIENT
    rate_limiter.check(REGISTER_POLICY, client)

    user = await auth_service.register(
        email=request.email,
        password=request.password,
        profile=UserProfile(
            name=request.name,
            surname=request.surname,
            second_surname=request.second_surname,
            pseudonym=request.pseudonym,
            professional_number=request.professional_number,
            department=request.department,
        ),
        role=request.role,
    )
    await session.commit()
    # Only failed attempts count towards the registration limit
    rate_limiter.forgive(REGISTER_POLICY, client)
    return UserResponse.from_public_user(user)


@router.post(
    "/login",
    summary="Authenticate user",
    responses={
        200: {"description": "Login successful"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        403: {"model": ErrorResponse, "description": "User deactivated"},
        429: {"model": ErrorResponse, "description": "Too many login attempts"},
    },
)
async def login(
    request: LoginRequest,
    auth_service: AuthService,
    session: DBSession,
    rate_limiter: RateLimiterDep,
    client_ip: ClientIP,
    user_agent: UserAgent,
) -> LoginResponse:
    """
    Authenticate with email and password.

    Returns a short-lived access token and a long-lived refresh token.
    The refresh token opens a server-side session tied to this device.
    """
    rate_limiter.check(LOGIN_POLICY, client_ip or UNKNOWN_CLIENT)

    result = await auth_service.login(
        email=request.email,
        password=request.password,
        user_agent=user_agent,
        ip_address=client_ip,
    )
    await session.commit()
    return LoginResponse.from_result(result)


@router.post(
    "/refresh",
    summary="Refresh access token",
    responses={
        200: {"description": "New access token issued"},
        401: {"model": ErrorResponse, "description": "Invalid or expired token"},
        404: {"model": ErrorResponse, "description": "User no longer active"},
    },
)
async def refresh_token(
    request: RefreshRequest,
    auth_service: AuthService,
    session: DBSession,
    client_ip: ClientIP,
    user_agent: UserAgent,
) -> RefreshResponse:
    """
    Get a new access token using a stored refresh token.

    The refresh token is not rotated and stays valid until it expires
    or is revoked.
    """
    try:
        result = await auth_service.refresh(
            request.refresh_token,
            user_agent=user_agent,
            ip_address=client_ip,
        )
    finally:
        # A rejected token may have been revoked; that must persist
        await session.commit()
    return RefreshResponse.from_result(result)


@router.post(
    "/logout",
    summary="Close one session",
    responses={200: {"description": "Whether a session was revoked"}},
)
async def logout(
    request: RefreshRequest,
    auth_service: AuthService,
    session: DBSession,
) -> LogoutResponse:
    """Revoke a refresh token. Unknown or already revoked tokens are not an error."""
    revoked = await auth_service.logout(request.refresh_token)
    await session.commit()
    return LogoutResponse(revoked=revoked)


@router.post(
    "/logout-all",
    summary="Close every session of the current user",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def logout_all(
    current_user: CurrentUser,
    auth_service: AuthService,
    session: DBSession,
) -> LogoutAllResponse:
    count = await auth_service.logout_all(current_user.user_id)
    await session.commit()
    return LogoutAllResponse(tokens_revoked=count)


@router.get(
    "/me",
    summary="Get current user",
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def get_me(
    current_user: CurrentUser,
    auth_service: AuthService,
) -> UserResponse:
    user = await auth_service.get_user(current_user.user_id)
    return UserResponse.from_public_user(user)


@router.get(
    "/sessions",
    summary="List open sessions",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def list_sessions(
    current_user: CurrentUser,
    auth_service: AuthService,
) -> list[SessionResponse]:
    """List the current user's usable refresh tokens, newest first."""
    tokens = await auth_service.list_sessions(current_user.user_id)
    return [SessionResponse.from_token(token) for token in tokens]
