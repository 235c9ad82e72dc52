"""Authentication schemas for request/response models."""

import re
from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, EmailStr, Field, field_validator

from serveis.application.dtos import LoginResult, PublicUser, RefreshResult
from serveis.domain.session import RefreshToken
from serveis.domain.user import UserRole
from serveis.presentation.api.schemas.common import CamelModel

PASSWORD_SPECIAL_CHARACTERS = "!@#$%^&*"

_PASSWORD_RULES = (
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
    (
        re.compile(f"[{re.escape(PASSWORD_SPECIAL_CHARACTERS)}]"),
        f"Password must contain at least one special character "
        f"({PASSWORD_SPECIAL_CHARACTERS})",
    ),
)


class RegisterRequest(CamelModel):
    """Request schema for user registration."""

    email: EmailStr = Field(..., max_length=255, description="User's email address")
    password: str = Field(
        ...,
        min_length=8,
        max_length=72,
        description="Password (8-72 characters, mixed case, digit and symbol)",
    )
    name: str = Field(..., min_length=2, max_length=100)
    role: UserRole = UserRole.USER
    surname: Optional[str] = Field(default=None, max_length=100)
    second_surname: Optional[str] = Field(default=None, max_length=100)
    pseudonym: Optional[str] = Field(default=None, max_length=100)
    professional_number: Optional[str] = Field(default=None, max_length=50)
    department: Optional[str] = Field(default=None, max_length=100)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "Secure#Pass1",
                "name": "Anna",
                "surname": "Puig",
            },
        },
    )

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("password")
    @classmethod
    def _check_password_strength(cls, v: str) -> str:
        for pattern, message in _PASSWORD_RULES:
            if not pattern.search(v):
                raise ValueError(message)
        return v


class LoginRequest(CamelModel):
    """Request schema for user login."""

    email: EmailStr
    password: str = Field(..., min_length=1)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "Secure#Pass1",
            },
        },
    )


class RefreshRequest(CamelModel):
    """Request schema for token refresh and logout."""

    refresh_token: str = Field(..., min_length=10)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "refreshToken": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
            },
        },
    )


class UserResponse(CamelModel):
    """A user without its password hash."""

    id: int
    email: str
    role: str
    active: bool
    name: str
    surname: Optional[str] = None
    second_surname: Optional[str] = None
    pseudonym: Optional[str] = None
    professional_number: Optional[str] = None
    department: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_public_user(cls, user: PublicUser) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            role=user.role,
            active=user.active,
            name=user.name,
            surname=user.surname,
            second_surname=user.second_surname,
            pseudonym=user.pseudonym,
            professional_number=user.professional_number,
            department=user.department,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class LoginResponse(CamelModel):
    user: UserResponse
    access_token: str
    refresh_token: str
    expires_in: str = Field(..., description="Access token lifetime, e.g. '15m'")

    @classmethod
    def from_result(cls, result: LoginResult) -> "LoginResponse":
        return cls(
            user=UserResponse.from_public_user(result.user),
            access_token=result.access_token,
            refresh_token=result.refresh_token,
            expires_in=result.expires_in,
        )


class RefreshResponse(CamelModel):
    user: UserResponse
    access_token: str
    expires_in: str

    @classmethod
    def from_result(cls, result: RefreshResult) -> "RefreshResponse":
        return cls(
            user=UserResponse.from_public_user(result.user),
            access_token=result.access_token,
            expires_in=result.expires_in,
        )


class LogoutResponse(CamelModel):
    revoked: bool


class LogoutAllResponse(CamelModel):
    tokens_revoked: int


class SessionResponse(CamelModel):
    """An open session; the token value itself is never returned."""

    id: int
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None
    created_at: Optional[datetime] = None
    expires_at: datetime

    @classmethod
    def from_token(cls, token: RefreshToken) -> "SessionResponse":
        return cls(
            id=token.id,
            user_agent=token.user_agent,
            ip_address=token.ip_address,
            created_at=token.created_at,
            expires_at=token.expires_at,
        )
