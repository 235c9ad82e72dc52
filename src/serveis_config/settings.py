"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. SERVEIS_ENV_FILE environment variable (absolute path to .env file)
3. config/.env.dev - local development
4. config/.env - production/Docker

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import SecretStr, computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / ".git").is_dir():
            return parent
        if parent == Path("/app"):
            return parent

    return Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    """Get the config directory path."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. SERVEIS_ENV_FILE env var (full path)
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("SERVEIS_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (config/.env.dev or config/.env)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Security (MUST be set - app fails without these)
    jwt_access_secret: SecretStr  # Signs access tokens
    jwt_refresh_secret: SecretStr  # Signs refresh tokens, must differ
    postgres_password: SecretStr

    # Application
    app_name: str = "Serveis Extraordinaris"
    debug: bool = False

    # JWT (duration strings: <int><s|m|h|d>)
    jwt_issuer: str = "serveis-extraordinaris-api"
    jwt_access_expires_in: str = "15m"
    jwt_refresh_expires_in: str = "7d"

    # Password hashing
    bcrypt_rounds: int = 12

    # Database (POSTGRES_ prefix)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_db: str = "serveis"
    db_url: str | None = None  # Full URL override (e.g. sqlite+aiosqlite://)

    # Connection pool
    db_pool_size: int = 20
    db_pool_timeout: float = 2.0
    db_release_timeout: float = 5.0

    # API (API_ prefix)
    api_host: str = "0.0.0.0"
    api_port: int = 5000
    api_debug: bool = False
    api_cors_origins: str = "http://localhost:3000"
    api_trust_proxy_headers: bool = False  # Honour X-Forwarded-For / X-Real-IP

    # Rate limiting
    rate_limit_enabled: bool = True

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _validate_cors_origins(cls, v: Any) -> str:
        """Ensure cors_origins is stored as comma-separated string."""
        if isinstance(v, list):
            return ",".join(v)
        return str(v) if v else ""

    @field_validator("postgres_port", "api_port")
    @classmethod
    def _validate_port(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            msg = f"Invalid port: {v}. Must be a number between 1 and 65535."
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def _validate_distinct_jwt_secrets(self) -> Settings:
        access = self.jwt_access_secret.get_secret_value()
        refresh = self.jwt_refresh_secret.get_secret_value()
        if not access or not refresh:
            msg = "JWT secrets cannot be empty"
            raise ValueError(msg)
        if access == refresh:
            msg = "JWT_ACCESS_SECRET and JWT_REFRESH_SECRET must differ"
            raise ValueError(msg)
        return self

    # Computed properties
    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """Construct the database URL from components."""
        if self.db_url:
            return self.db_url
        return (
            f"postgresql+asyncpg://{self.postgres_user}:"
            f"{self.postgres_password.get_secret_value()}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [o.strip() for o in self.api_cors_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings.

    Required fields (jwt_access_secret, jwt_refresh_secret, postgres_password)
    must be provided via environment variables or .env file.
    """
    return Settings()  # type: ignore[call-arg]  # pydantic-settings loads from env


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
