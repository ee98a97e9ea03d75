"""Global test configuration and fixtures.

Fixture Scoping Strategy:
- session: test settings (immutable)
- function: container, app instance, clients (need fresh state)

Most integration tests build their own app through ``make_app`` so each
test states the exact CORS policy it exercises.
"""

from collections.abc import Callable, Generator
from typing import Any

import pytest
from dependency_injector import providers
from fastapi import FastAPI, Request, Response
from fastapi.testclient import TestClient

from src.container import Container
from src.domain.cors import CorsPolicy
from src.infrastructure.config import Settings
from src.presentation.api import create_app
from tests.factories import RecordingOriginValidator, policy_factory


# ============================================================================
# Session-Scoped Fixtures (Immutable Resources)
# ============================================================================


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings (session-scoped).

    Returns:
        Settings instance configured for testing
    """
    return Settings(
        app_env="testing",
        app_name="CORS Gate Test",
        app_version="9.9.9",
        debug=True,
        log_level="DEBUG",
        cors_reject_non_cors_requests=False,
        cors_allowed_origins=["http://a.com"],
        cors_allowed_methods=["GET", "POST"],
        cors_allowed_headers=["X-Custom"],
        cors_expose_headers=[],
        cors_allow_credentials=False,
        cors_max_age=600,
    )


# ============================================================================
# Function-Scoped Fixtures
# ============================================================================


@pytest.fixture
def accepting_validator() -> RecordingOriginValidator:
    """Validator accepting every origin."""
    return RecordingOriginValidator(result=True)


@pytest.fixture
def rejecting_validator() -> RecordingOriginValidator:
    """Validator refusing every origin."""
    return RecordingOriginValidator(result=False)


@pytest.fixture
def scenario_policy(accepting_validator: RecordingOriginValidator) -> CorsPolicy:
    """Policy allowing GET/POST and the X-Custom header for any origin."""
    return policy_factory(
        origin_validator=accepting_validator,
        allowed_methods=["GET", "POST"],
        allowed_headers=["X-Custom"],
    )


@pytest.fixture
def make_app(test_settings: Settings) -> Callable[..., FastAPI]:
    """Factory building an app whose container uses the given settings/validator.

    Example:
        >>> app = make_app(origin_validator=RecordingOriginValidator(False))
    """

    def _make_app(
        settings: Settings | None = None,
        origin_validator: Any = None,
        **settings_overrides: Any,
    ) -> FastAPI:
        settings = settings or test_settings
        if settings_overrides:
            settings = settings.model_copy(update=settings_overrides)

        container = Container()
        container.config.override(providers.Object(settings))
        if origin_validator is not None:
            container.origin_validator.override(providers.Object(origin_validator))

        app = create_app(container)
        app.state.handler_calls = 0

        @app.api_route("/echo", methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"])
        async def echo(request: Request) -> dict[str, str]:
            request.app.state.handler_calls += 1
            return {"message": "handled"}

        @app.get("/exposing")
        async def exposing(request: Request) -> Response:
            request.app.state.handler_calls += 1
            return Response(
                content="own headers",
                headers={"Access-Control-Expose-Headers": "X-Handler-Chosen"},
            )

        return app

    return _make_app


@pytest.fixture
def app(make_app: Callable[..., FastAPI]) -> FastAPI:
    """Default application: test settings and the static origin allow-list."""
    return make_app()


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient]:
    """Create test client for synchronous API testing (function-scoped).

    Yields:
        TestClient: Synchronous test client
    """
    with TestClient(app) as test_client:
        yield test_client
