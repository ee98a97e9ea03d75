"""Dependency injection container configuration."""

from dependency_injector import containers, providers

from src.app.usecases.cors_negotiation import CorsNegotiator
from src.domain.cors import CorsPolicy
from src.domain.interfaces import OriginValidator
from src.infrastructure.config import Settings, get_settings
from src.infrastructure.origin_validators import StaticOriginValidator


def build_cors_policy(settings: Settings, origin_validator: OriginValidator) -> CorsPolicy:
    """Map the ``cors_*`` settings onto an immutable policy."""
    return CorsPolicy(
        origin_validator=origin_validator,
        reject_non_cors_requests=settings.cors_reject_non_cors_requests,
        allowed_methods=settings.cors_allowed_methods,
        allowed_headers=settings.cors_allowed_headers,
        allow_credentials=settings.cors_allow_credentials,
        max_age_seconds=settings.cors_max_age,
        expose_headers=settings.cors_expose_headers,
    )


class Container(containers.DeclarativeContainer):
    """Application dependency injection container.

    Override ``origin_validator`` to plug in a custom ``OriginValidator``
    (regex, database lookup, ...) without touching the policy wiring.
    """

    wiring_config = containers.WiringConfiguration(
        modules=[
            "src.presentation.api.v1.endpoints.health",
        ]
    )

    # Configuration
    config = providers.Singleton(get_settings)

    # Origin validation (defaults to the CORS_ALLOWED_ORIGINS allow-list)
    origin_validator = providers.Singleton(
        StaticOriginValidator,
        allowed_origins=config.provided.cors_allowed_origins,
    )

    # Policy is immutable and shared by every request
    cors_policy = providers.Singleton(
        build_cors_policy,
        settings=config,
        origin_validator=origin_validator,
    )

    cors_negotiator = providers.Singleton(CorsNegotiator, policy=cors_policy)
