from serveis.presentation.api.routers.admin import router as admin_router
from serveis.presentation.api.routers.auth import router as auth_router
from serveis.presentation.api.routers.employers import router as employers_router

__all__ = [
    "admin_router",
    "auth_router",
    "employers_router",
]
