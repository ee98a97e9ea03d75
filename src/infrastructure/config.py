"""Application configuration with environment variable support."""

from functools import lru_cache
from typing import Annotated, Any, cast

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = Field(default="cors-gate", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    app_env: str = Field(default="development", alias="APP_ENV")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    workers: int = Field(default=1, alias="WORKERS")
    reload: bool = Field(default=False, alias="RELOAD")

    # CORS
    cors_reject_non_cors_requests: bool = Field(
        default=False,
        alias="CORS_REJECT_NON_CORS_REQUESTS",
        description="Reject same-origin and Origin-less requests with 403",
    )
    cors_allowed_origins: Annotated[list[str], NoDecode] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        alias="CORS_ALLOWED_ORIGINS",
        description="Origins accepted by the default static origin validator",
    )
    cors_allowed_methods: Annotated[list[str], NoDecode] = Field(
        default=["GET", "POST", "PUT", "PATCH", "DELETE"],
        alias="CORS_ALLOWED_METHODS",
    )
    cors_allowed_headers: Annotated[list[str], NoDecode] = Field(
        default=[
            "Accept",
            "Content-Type",
            "Authorization",
            "X-Requested-With",
        ],
        alias="CORS_ALLOWED_HEADERS",
    )
    cors_expose_headers: Annotated[list[str], NoDecode] = Field(
        default=[],
        alias="CORS_EXPOSE_HEADERS",
        description="Response headers readable by cross-origin scripts",
    )
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")
    cors_max_age: int = Field(
        default=3600,
        alias="CORS_MAX_AGE",
        description="Access-Control-Max-Age advertised to browsers, in seconds",
    )

    @field_validator(
        "cors_allowed_origins",
        "cors_allowed_methods",
        "cors_allowed_headers",
        "cors_expose_headers",
        mode="before",
    )
    @classmethod
    def parse_comma_separated(cls, v: Any) -> list[str]:
        """Parse list settings from a comma-separated string or a list."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return cast("list[str]", v)

    @field_validator("cors_max_age")
    @classmethod
    def validate_max_age(cls, v: int) -> int:
        """Validate max age is not negative."""
        if v < 0:
            raise ValueError("CORS_MAX_AGE must not be negative")
        return v

    @field_validator("cors_allowed_origins")
    @classmethod
    def validate_cors_origins_https(cls, v: list[str], info: Any) -> list[str]:
        """Validate CORS origins use HTTPS in production."""
        app_env = info.data.get("app_env", "development")
        if app_env.lower() == "production":
            for origin in v:
                if origin == "*":
                    continue
                if not origin.startswith("https://") and not origin.startswith("http://localhost"):
                    raise ValueError(
                        f"Production CORS origins must use HTTPS: {origin}. "
                        f"Only localhost is allowed with http:// for testing."
                    )
        return v

    @model_validator(mode="after")
    def validate_wildcard_with_credentials(self) -> "Settings":
        """Refuse to accept any origin with credentials in production."""
        if (
            self.is_production
            and self.cors_allow_credentials
            and "*" in self.cors_allowed_origins
        ):
            raise ValueError(
                "CORS_ALLOWED_ORIGINS must not contain '*' when "
                "CORS_ALLOW_CREDENTIALS is enabled in production"
            )
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
