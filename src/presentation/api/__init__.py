"""FastAPI application factory and configuration."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.container import Container
from src.infrastructure.logging.config import configure_logging, get_logger
from src.presentation.api.middleware.cors import setup_cors
from src.presentation.api.middleware.error_handling import setup_exception_handlers
from src.presentation.api.v1 import api_router


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan events."""
    policy = app.state.container.cors_policy()
    logger.info(
        "application_startup",
        app_name=app.title,
        version=app.version,
        cors_allowed_methods=list(policy.allowed_methods),
        cors_allowed_headers=list(policy.allowed_headers),
        cors_reject_non_cors_requests=policy.reject_non_cors_requests,
    )

    yield

    logger.info("application_shutdown")


def create_app(container: Container | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        container: Pre-configured container, e.g. with an overridden
            ``origin_validator``. A fresh one is created when omitted.

    Returns:
        Configured FastAPI application instance
    """
    container = container or Container()
    settings = container.config()

    configure_logging(settings)

    # Fail fast on a misconfigured policy, before serving any request
    negotiator = container.cors_negotiator()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="CORS negotiation gateway: classifies cross-origin requests, "
        "validates their Origin and answers preflights.",
        lifespan=lifespan,
    )

    # Store container in app state for access if needed
    app.state.container = container

    setup_exception_handlers(app)
    setup_cors(app, negotiator)

    app.include_router(api_router)

    return app
