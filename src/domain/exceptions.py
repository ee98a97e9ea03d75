"""Domain-specific exceptions for CORS negotiation errors.

This module defines the exception hierarchy raised while negotiating
cross-origin requests, separating programming errors (a misconfigured
policy) from request-scoped rejections that become HTTP 403 responses.
"""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain-related errors.

    Attributes:
        code: Machine-readable error code
        message: Human-readable error message
        details: Optional additional error context (dict or list)
    """

    code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | list[Any] | None = None) -> None:
        """Initialize domain exception.

        Args:
            message: Human-readable error description
            details: Optional additional context about the error
        """
        self.message = message
        self.details = details
        super().__init__(self.message)


class CorsConfigurationError(DomainException):
    """Raised when a CORS policy is constructed with invalid settings.

    This is a programming error (e.g. a missing origin validator) and is
    raised at construction time, never while serving a request.
    """

    code = "CORS_CONFIGURATION_ERROR"


class CorsRejectedError(DomainException):
    """Base class for request-scoped CORS rejections.

    Every rejection is terminal: the wrapped handler is never invoked and
    the client receives ``status_code`` with ``message`` as a plain-text body.
    """

    code = "CORS_REJECTED"
    status_code: int = 403
    default_message: str = "Forbidden"

    def __init__(
        self, message: str | None = None, details: dict[str, Any] | list[Any] | None = None
    ) -> None:
        super().__init__(message or self.default_message, details)


class NonCorsRequestError(CorsRejectedError):
    """Raised for same-origin traffic when the policy rejects non-CORS requests."""

    code = "NON_CORS_REQUEST"
    default_message = "Non CORS request"


class InvalidOriginError(CorsRejectedError):
    """Raised when the origin validator refuses the request's Origin."""

    code = "INVALID_ORIGIN"
    default_message = "Invalid Origin"


class InvalidPreflightError(CorsRejectedError):
    """Raised when a preflight asks for a method or header that is not allowed."""

    code = "INVALID_PREFLIGHT"
    default_message = "Invalid Preflight Request"
