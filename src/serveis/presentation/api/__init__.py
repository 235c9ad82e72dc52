"""REST API presentation layer for Serveis.

This package provides a FastAPI-based REST API for the Serveis backend.

Structure:
    api/
    ├── app.py                # FastAPI application factory
    ├── main.py               # ASGI entry point for uvicorn
    ├── dependencies.py       # Dependency injection
    ├── exception_handlers.py # Error kind to HTTP status mapping
    ├── middleware.py         # Request id propagation
    ├── routers/              # API route handlers
    └── schemas/              # Pydantic request/response schemas
"""

from serveis.presentation.api.app import create_app

__all__ = ["create_app"]
