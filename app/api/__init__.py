"""API endpoints package."""

from app.api.router import create_public_router

__all__ = ["create_public_router"]
