"""API router factory with core endpoints."""

import logging

from fastapi import APIRouter, Request, Response, status

from app.config import get_settings
from app.utils.templates import templates

logger = logging.getLogger(__name__)


def create_public_router() -> APIRouter:
    """Create router with the browser-facing pages and dialogs.

    Returns:
        APIRouter with index, health and dialog routes.
    """
    from app.api.courses import router as courses_router
    from app.api.students import router as students_router

    router = APIRouter()

    @router.get("/")
    async def index(request: Request) -> Response:
        """Page hosting the create-course and add-student dialogs."""
        settings = get_settings()
        return templates.TemplateResponse(
            request=request,
            name="index.html",
            context={"title": settings.api_title},
        )

    @router.get("/health", tags=["Health"], status_code=status.HTTP_200_OK)
    async def health_check() -> dict:
        """Health check endpoint - basic application health.

        Returns:
            Health status response.
        """
        return {"status": "healthy"}

    router.include_router(courses_router)
    router.include_router(students_router)

    return router
