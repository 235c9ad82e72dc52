"""ASGI entry point: ``uvicorn serveis.presentation.api.main:app``."""

from serveis.presentation.api.app import create_app

app = create_app()
