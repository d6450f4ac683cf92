"""Browser interface: a FastAPI application and its single-page UI."""

from .app import create_app

__all__ = ["create_app"]
