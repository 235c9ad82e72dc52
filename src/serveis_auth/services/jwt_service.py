"""JWT token service.

Provides JWT token creation and verification for authentication.
Access and refresh tokens are signed with separate secrets.
"""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

import jwt

from serveis_auth.exceptions import InvalidTokenError
from serveis_auth.ports import TokenCodec
from serveis_auth.schemas import AccessTokenClaims, RefreshTokenClaims
from serveis_auth.services.duration import duration_to_timedelta


class JWTService(TokenCodec):
    """Service for JWT token creation and verification.

    Handles access tokens (short-lived, stateless) and refresh tokens
    (long-lived, tracked by the token store).

    Examples
    --------
    >>> service = JWTService("access-secret", "refresh-secret")
    >>> token = service.create_access_token(1, "user@example.com", "user")
    >>> claims = service.verify_access_token(token)
    >>> print(claims.user_id)
    1
    """

    ALGORITHM = "HS256"
    DEFAULT_ISSUER = "serveis-extraordinaris-api"
    ACCESS_TYPE = "access"
    REFRESH_TYPE = "refresh"

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        issuer: str = DEFAULT_ISSUER,
        access_expires_in: str = "15m",
        refresh_expires_in: str = "7d",
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        access_secret
            Secret key for signing access tokens.
        refresh_secret
            Secret key for signing refresh tokens. Must differ from
            the access secret.
        issuer
            Value of the ``iss`` claim, checked on verification.
        access_expires_in
            Access token lifetime as a duration string (default "15m")
        refresh_expires_in
            Refresh token lifetime as a duration string (default "7d")
        """
        if not access_secret or not refresh_secret:
            msg = "JWT secret keys cannot be empty"
            raise ValueError(msg)
        if access_secret == refresh_secret:
            msg = "Access and refresh secrets must differ"
            raise ValueError(msg)

        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self._issuer = issuer
        self._access_expires_in = access_expires_in
        self._access_lifetime = duration_to_timedelta(access_expires_in)
        self._refresh_lifetime = duration_to_timedelta(refresh_expires_in)

    @property
    def access_expires_in(self) -> str:
        return self._access_expires_in

    @property
    def access_lifetime(self) -> timedelta:
        return self._access_lifetime

    @property
    def refresh_lifetime(self) -> timedelta:
        return self._refresh_lifetime

    def create_access_token(
        self,
        user_id: int,
        email: str,
        role: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a short-lived access token.

        Parameters
        ----------
        user_id
            The user's unique identifier
        email
            The user's email address
        role
            The user's role
        expires_delta
            Custom expiration time (optional)

        Returns
        -------
        The encoded JWT token string
        """
        payload = {
            "sub": str(user_id),
            "email": email,
            "role": role,
            "type": self.ACCESS_TYPE,
        }
        return self._encode(
            payload,
            self._access_secret,
            expires_delta or self._access_lifetime,
        )

    def create_refresh_token(
        self,
        user_id: int,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a long-lived refresh token.

        The ``jti`` claim makes every token unique, even when two are
        issued for the same user within the same second.
        """
        payload = {
            "sub": str(user_id),
            "type": self.REFRESH_TYPE,
            "jti": uuid4().hex,
        }
        return self._encode(
            payload,
            self._refresh_secret,
            expires_delta or self._refresh_lifetime,
        )

    def verify_access_token(self, token: str) -> AccessTokenClaims:
        """Verify and decode an access token.

        Raises
        ------
        InvalidTokenError
            If token is invalid, expired, malformed or not an access token
        """
        payload = self._decode(token, self._access_secret, self.ACCESS_TYPE)
        try:
            return AccessTokenClaims(
                user_id=int(payload["sub"]),
                email=payload["email"],
                role=payload["role"],
                issuer=payload["iss"],
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e

    def verify_refresh_token(self, token: str) -> RefreshTokenClaims:
        """Verify and decode a refresh token.

        Raises
        ------
        InvalidTokenError
            If token is invalid, expired, malformed or not a refresh token
        """
        payload = self._decode(token, self._refresh_secret, self.REFRESH_TYPE)
        try:
            return RefreshTokenClaims(
                user_id=int(payload["sub"]),
                token_id=payload["jti"],
                issuer=payload["iss"],
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e

    def _encode(
        self,
        payload: dict[str, Any],
        secret: str,
        expires_delta: timedelta,
    ) -> str:
        now = datetime.now(tz=timezone.utc)
        claims = {
            **payload,
            "iss": self._issuer,
            "iat": now,
            "exp": now + expires_delta,
        }
        return jwt.encode(claims, secret, algorithm=self.ALGORITHM)

    def _decode(self, token: str, secret: str, expected_type: str) -> dict[str, Any]:
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.ALGORITHM],
                issuer=self._issuer,
                options={"require": ["exp", "iss", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

        if payload.get("type") != expected_type:
            msg = f"Expected {expected_type} token"
            raise InvalidTokenError(msg)

        return payload
