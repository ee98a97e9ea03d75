"""Health check endpoints for monitoring and orchestration.

Provides a liveness probe plus a read-only view of the active CORS policy,
useful when debugging why a browser's preflight is being refused.
"""

from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.container import Container
from src.domain.cors import CorsPolicy
from src.infrastructure.config import Settings


router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    environment: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "status": "healthy",
                    "version": "1.0.0",
                    "environment": "production",
                }
            ]
        }
    }


class CorsPolicyResponse(BaseModel):
    """Effective CORS policy, as normalised at construction."""

    reject_non_cors_requests: bool
    allowed_methods: list[str]
    allowed_headers: list[str]
    expose_headers: list[str]
    allow_credentials: bool
    max_age_seconds: int


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health Check",
)
@inject
async def health_check(
    settings: Annotated[Settings, Depends(Provide[Container.config])],
) -> HealthResponse:
    """Return the application status, version and environment."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.app_env,
    )


@router.get(
    "/health/cors",
    response_model=CorsPolicyResponse,
    status_code=status.HTTP_200_OK,
    summary="Active CORS policy",
)
@inject
async def cors_policy(
    policy: Annotated[CorsPolicy, Depends(Provide[Container.cors_policy])],
) -> CorsPolicyResponse:
    """Expose the normalised CORS policy (validator excluded)."""
    return CorsPolicyResponse(
        reject_non_cors_requests=policy.reject_non_cors_requests,
        allowed_methods=list(policy.allowed_methods),
        allowed_headers=list(policy.allowed_headers),
        expose_headers=list(policy.expose_headers),
        allow_credentials=policy.allow_credentials,
        max_age_seconds=policy.max_age_seconds,
    )
