"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator, Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.middleware.base import BaseHTTPMiddleware

from serveis.infrastructure.persistence.sqlalchemy.database import (
    create_engine_from_settings,
    create_session_maker,
    create_tables,
)
from serveis.infrastructure.security.rate_limiter import RateLimiter
from serveis.presentation.api.dependencies import OptionalCurrentUser
from serveis.presentation.api.exception_handlers import setup_exception_handlers
from serveis.presentation.api.middleware import RequestIdFilter, request_id_middleware
from serveis.presentation.api.routers import (
    admin_router,
    auth_router,
    employers_router,
)
from serveis.presentation.api.schemas.common import HealthResponse
from serveis_auth import JWTService, PasswordHashingService
from serveis_config.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(request_id)s | %(message)s"


@lru_cache(maxsize=1)
def _configure_logging(log_level_name: str = "INFO") -> None:
    """Configure application logging.

    Sets up logging for the serveis packages with:
    - Console output with timestamps, module names and request ids
    - Configurable log level for serveis modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing config
    )
    for handler in logging.getLogger().handlers:
        handler.addFilter(RequestIdFilter())

    # Set levels for our application
    logging.getLogger("serveis").setLevel(log_level)
    logging.getLogger("serveis_auth").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

# API version info
API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Registration, login and session management.

**Tokens:**
- Access tokens are short-lived JWTs sent as `Authorization: Bearer <token>`
- Refresh tokens are long-lived, stored server-side and revocable
- Refreshing issues a new access token; the refresh token is not rotated
""",
    },
    {
        "name": "Employers",
        "description": "Companies the current user works or has worked for.",
    },
    {
        "name": "Admin",
        "description": "User management restricted to administrators.",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
    {
        "name": "Info",
        "description": "API information and discovery.",
    },
]


def _build_state(app: FastAPI, settings: Settings, engine: AsyncEngine) -> None:
    """Attach the shared collaborators that request dependencies draw from."""
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_maker = create_session_maker(engine)
    app.state.password_hasher = PasswordHashingService(rounds=settings.bcrypt_rounds)
    app.state.token_codec = JWTService(
        access_secret=settings.jwt_access_secret.get_secret_value(),
        refresh_secret=settings.jwt_refresh_secret.get_secret_value(),
        issuer=settings.jwt_issuer,
        access_expires_in=settings.jwt_access_expires_in,
        refresh_expires_in=settings.jwt_refresh_expires_in,
    )
    app.state.rate_limiter = RateLimiter(enabled=settings.rate_limit_enabled)


def _make_lifespan(settings: Settings, engine: Optional[AsyncEngine]):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        logger.info("Starting %s API v%s...", settings.app_name, API_VERSION)
        owns_engine = engine is None
        active_engine = engine or create_engine_from_settings(settings)
        _build_state(app, settings, active_engine)

        try:
            await create_tables(active_engine)
        except OSError:
            logger.critical("Could not connect to the database.")
            raise SystemExit(1) from None

        yield

        logger.info("Shutting down %s API...", settings.app_name)
        if owns_engine:
            await active_engine.dispose()
            logger.info("Database connections closed")

    return lifespan


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints."""
    v1_router = APIRouter()

    v1_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    v1_router.include_router(
        employers_router,
        prefix="/employers",
        tags=["Employers"],
    )
    v1_router.include_router(admin_router, tags=["Admin"])

    return v1_router


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[AsyncEngine] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.
    engine
        Optional pre-built engine; the caller then owns its disposal.

    Returns
    -------
    Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    # Configure logging on first app creation (not on module import)
    _configure_logging(settings.log_level)

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Authentication, sessions and employer records.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=_make_lifespan(settings, engine),
        openapi_tags=OPENAPI_TAGS,
    )

    app.add_middleware(BaseHTTPMiddleware, dispatch=request_id_middleware)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    setup_exception_handlers(app)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint. Unversioned for load balancers."""
        return HealthResponse(status="healthy", version=API_VERSION)

    @app.get("/", tags=["Info"])
    async def root(user: OptionalCurrentUser) -> dict:
        """API root endpoint; greets the caller when a valid token is sent."""
        return {
            "name": f"{settings.app_name} API",
            "version": API_VERSION,
            "api_base": API_V1_PREFIX,
            "authenticated": user is not None,
            "user": user.display_name if user else None,
            "endpoints": {
                "health": "/health",
                "auth": f"{API_V1_PREFIX}/auth",
                "employers": f"{API_V1_PREFIX}/employers",
            },
        }

    return app
