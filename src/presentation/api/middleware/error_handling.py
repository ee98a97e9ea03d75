"""Global exception handling for the FastAPI application.

CORS rejections become short plain-text responses carrying the rejection's
status code. Unexpected exceptions, such as a crashing origin validator, are
converted into the JSON ``ErrorResponse`` schema.
"""

from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from src.domain.exceptions import CorsRejectedError
from src.infrastructure.logging.config import get_logger
from src.presentation.schemas.error import ErrorDetail, ErrorResponse


logger = get_logger(__name__)

# Type alias for cleaner function signatures
ExceptionHandler = Callable[[Request, Any], Awaitable[Response]]


def cors_rejection_response(exc: CorsRejectedError) -> PlainTextResponse:
    """Render a CORS rejection as its status code with a plain-text reason."""
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions as last resort.

    Covers failures raised by origin validators, which run inside the CORS
    middleware before any route handler. Logs full exception details while
    returning a safe generic message.

    Args:
        request: Incoming HTTP request
        exc: Unhandled exception

    Returns:
        JSON response with generic error message (500 status)
    """
    logger.exception(
        "unhandled_exception",
        exception_type=type(exc).__name__,
        error=str(exc),
        path=request.url.path,
    )

    error_response = ErrorResponse(
        error=ErrorDetail(
            code="INTERNAL_SERVER_ERROR",
            message="An unexpected error occurred",
            details=None,
        )
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    # Generic exception handler (catch-all)
    generic_handler: ExceptionHandler = generic_exception_handler
    app.add_exception_handler(Exception, generic_handler)
