"""Authentication service for registration, login and session management."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Union

from serveis.application.dtos import LoginResult, PublicUser, RefreshResult
from serveis.domain.shared.exceptions import (
    BadRequestError,
    ConflictError,
    ErrorCode,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from serveis.domain.shared.time import utc_now
from serveis.domain.user import (
    Email,
    InvalidEmailError,
    User,
    UserProfile,
    UserRole,
    normalize_email,
)
from serveis_auth import InvalidTokenError, WeakPasswordError

if TYPE_CHECKING:
    from serveis.domain.session import RefreshToken, RefreshTokenRepository
    from serveis.domain.user import UserRepository
    from serveis_auth import AccessTokenClaims, PasswordHasher, TokenCodec

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
INVALID_REFRESH_MESSAGE = "Invalid or expired refresh token"
INVALID_ACCESS_MESSAGE = "Invalid or expired access token"


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates the serveis_auth primitives (password hashing, JWT
    tokens) with the user and session stores to provide:
    - User registration
    - Login issuing an access/refresh token pair
    - Access token renewal from a stored refresh token
    - Single-device and all-device logout

    Refresh tokens are not rotated on use: a refresh token stays valid
    until it expires or is revoked by a logout.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        token_repository: RefreshTokenRepository,
        password_hasher: PasswordHasher,
        token_codec: TokenCodec,
    ):
        self._user_repo = user_repository
        self._token_repo = token_repository
        self._password_hasher = password_hasher
        self._token_codec = token_codec

    def _create_access_token(self, user: User) -> str:
        return self._token_codec.create_access_token(
            user_id=user.id,
            email=user.email,
            role=user.role.value,
        )

    async def register(
        self,
        email: str,
        password: str,
        profile: UserProfile,
        role: Union[str, UserRole] = UserRole.USER,
    ) -> PublicUser:
        """Register a new, active user.

        Raises
        ------
        ConflictError
            If the (normalized) email is already registered.
        BadRequestError
            If the email or password cannot be accepted.
        """
        try:
            email_obj = Email(email)
        except InvalidEmailError as e:
            raise BadRequestError(str(e), code=ErrorCode.INVALID_FORMAT) from e

        if await self._user_repo.exists_by_email(email_obj):
            raise ConflictError(
                "This email is already registered",
                code=ErrorCode.EMAIL_ALREADY_EXISTS,
            )

        try:
            password_hash = await self._password_hasher.hash(password)
        except WeakPasswordError as e:
            raise BadRequestError(e.message, code=ErrorCode.WEAK_PASSWORD) from e

        user = User.create(
            email=email_obj,
            password_hash=password_hash,
            profile=profile,
            role=role,
        )
        user = await self._user_repo.save(user)

        logger.info("User registered: %s (role: %s)", user.id, user.role.value)
        return PublicUser.from_user(user)

    async def login(
        self,
        email: str,
        password: str,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> LoginResult:
        """Authenticate with email and password and open a session.

        An unknown email and a wrong password fail identically so the
        response does not reveal which accounts exist.
        """
        user = await self._user_repo.find_by_email(normalize_email(email))
        if user is None:
            raise UnauthorizedError(
                INVALID_CREDENTIALS_MESSAGE,
                code=ErrorCode.INVALID_CREDENTIALS,
            )

        if not user.active:
            raise ForbiddenError(
                "This user is deactivated",
                code=ErrorCode.USER_DEACTIVATED,
            )

        if not await self._password_hasher.verify(password, user.password_hash):
            raise UnauthorizedError(
                INVALID_CREDENTIALS_MESSAGE,
                code=ErrorCode.INVALID_CREDENTIALS,
            )

        access_token = self._create_access_token(user)
        refresh_token = self._token_codec.create_refresh_token(user.id)
        await self._token_repo.create(
            user_id=user.id,
            token=refresh_token,
            expires_at=utc_now() + self._token_codec.refresh_lifetime,
            user_agent=user_agent,
            ip_address=ip_address,
        )

        logger.info("User logged in: %s", user.id)
        return LoginResult(
            user=PublicUser.from_user(user),
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self._token_codec.access_expires_in,
        )

    async def refresh(
        self,
        refresh_token: str,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> RefreshResult:
        """Issue a new access token for a usable, stored refresh token.

        A stored token that fails signature, expiry, issuer or subject
        checks is revoked before the request is rejected.
        """
        stored = await self._token_repo.find_active_by_token(refresh_token)
        if stored is None:
            raise UnauthorizedError(
                INVALID_REFRESH_MESSAGE,
                code=ErrorCode.INVALID_REFRESH_TOKEN,
            )

        try:
            claims = self._token_codec.verify_refresh_token(refresh_token)
        except InvalidTokenError as e:
            await self._token_repo.revoke(refresh_token)
            logger.warning("Revoked refresh token %s: %s", stored.id, e.message)
            raise UnauthorizedError(
                INVALID_REFRESH_MESSAGE,
                code=ErrorCode.INVALID_REFRESH_TOKEN,
            ) from e

        if claims.user_id != stored.user_id:
            await self._token_repo.revoke(refresh_token)
            logger.warning("Revoked refresh token %s: subject mismatch", stored.id)
            raise UnauthorizedError(
                INVALID_REFRESH_MESSAGE,
                code=ErrorCode.INVALID_REFRESH_TOKEN,
            )

        user = await self._user_repo.find_active_by_id(stored.user_id)
        if user is None:
            raise NotFoundError("User not found", code=ErrorCode.USER_NOT_FOUND)

        logger.debug(
            "Access token refreshed for user %s (agent: %s, ip: %s)",
            user.id,
            user_agent,
            ip_address,
        )
        return RefreshResult(
            user=PublicUser.from_user(user),
            access_token=self._create_access_token(user),
            expires_in=self._token_codec.access_expires_in,
        )

    async def logout(self, refresh_token: str) -> bool:
        """Revoke one refresh token. Idempotent; never fails for unknown tokens."""
        revoked = await self._token_repo.revoke(refresh_token)
        logger.debug("Logout revoked a session: %s", revoked)
        return revoked

    async def logout_all(self, user_id: int) -> int:
        count = await self._token_repo.revoke_all_for_user(user_id)
        logger.info("Revoked %d session(s) for user %s", count, user_id)
        return count

    async def list_sessions(self, user_id: int) -> list[RefreshToken]:
        return await self._token_repo.list_active_for_user(user_id)

    async def get_user(self, user_id: int) -> PublicUser:
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found", code=ErrorCode.USER_NOT_FOUND)
        return PublicUser.from_user(user)

    async def deactivate_user(self, user_id: int) -> int:
        """Deactivate a user and revoke all of their sessions.

        Returns
        -------
        Number of refresh tokens revoked.
        """
        if not await self._user_repo.deactivate(user_id):
            raise NotFoundError("User not found", code=ErrorCode.USER_NOT_FOUND)
        count = await self._token_repo.revoke_all_for_user(user_id)
        logger.info("Deactivated user %s (%d session(s) revoked)", user_id, count)
        return count

    def verify_access_token(self, token: str) -> AccessTokenClaims:
        try:
            return self._token_codec.verify_access_token(token)
        except InvalidTokenError as e:
            raise UnauthorizedError(
                INVALID_ACCESS_MESSAGE,
                code=ErrorCode.INVALID_ACCESS_TOKEN,
            ) from e
