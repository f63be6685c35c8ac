"""Centralized exception handlers for FastAPI application."""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.exceptions import BackendError, SubmissionInProgressError
from app.utils.notifications import Notification, hx_trigger_header

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExceptionConfig:
    """Configuration for exception handler behavior."""

    status_code: int
    error_name: str
    log_level: str = "warning"
    include_detail: bool = True


# Exception type to configuration mapping
EXCEPTION_CONFIGS: dict[type[Exception], ExceptionConfig] = {
    SubmissionInProgressError: ExceptionConfig(
        status_code=status.HTTP_409_CONFLICT,
        error_name="Conflict",
    ),
    BackendError: ExceptionConfig(
        status_code=status.HTTP_502_BAD_GATEWAY,
        error_name="Bad Gateway",
        log_level="error",
        include_detail=False,
    ),
}


def _log_exception(exc: Exception, config: ExceptionConfig) -> None:
    """Log exception with appropriate level."""
    log_func: Callable[..., None] = getattr(logger, config.log_level)
    log_func(f"{type(exc).__name__}: {exc}")


def _build_response_content(exc: Exception, config: ExceptionConfig) -> dict[str, Any]:
    """Build response content based on exception type."""
    content: dict[str, Any] = {"error": config.error_name}

    if isinstance(exc, BackendError):
        content["message"] = "School backend is unavailable. Please try again later."
    elif config.include_detail:
        content["message"] = str(exc)

    if isinstance(exc, SubmissionInProgressError):
        content["form_id"] = exc.form_id

    return content


def _create_handler(
    config: ExceptionConfig,
) -> Callable[[Request, Exception], JSONResponse]:
    """Create exception handler function for given config."""

    async def handler(request: Request, exc: Exception) -> JSONResponse:
        _log_exception(exc, config)
        content = _build_response_content(exc, config)
        response = JSONResponse(status_code=config.status_code, content=content)
        if isinstance(exc, SubmissionInProgressError):
            header = hx_trigger_header(
                [Notification.warning("Submission already in progress")]
            )
            if header is not None:
                response.headers["HX-Trigger"] = header
        return response

    return handler


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors."""
    logger.warning(f"Validation error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation Error",
            "message": "Invalid request data",
            "details": exc.errors(),
        },
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "message": "An unexpected error occurred. Please try again later.",
        },
    )


async def not_found_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> Response:
    """Handle 404 Not Found with content negotiation.

    Returns HTML template for browsers, JSON for API clients.

    Args:
        request: FastAPI request object.
        exc: HTTP exception.

    Returns:
        TemplateResponse or JSONResponse based on Accept header.
    """
    from app.utils.templates import templates

    logger.warning(f"404 Not Found: {request.url.path}")

    accept_header = request.headers.get("accept", "")

    if "text/html" in accept_header:
        return templates.TemplateResponse(
            request=request,
            name="404.html",
            status_code=status.HTTP_404_NOT_FOUND,
        )

    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "Not Found",
            "message": f"The requested resource was not found: {request.url.path}",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Args:
        app: FastAPI application instance.
    """
    for exc_type, config in EXCEPTION_CONFIGS.items():
        app.add_exception_handler(exc_type, _create_handler(config))

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(404, not_found_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
