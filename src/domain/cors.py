"""CORS domain model: request classification and negotiation policy.

``CorsRequestInfo`` is a read-only view of the CORS-relevant parts of one
request. ``CorsPolicy`` is the immutable configuration shared by every
request; its normalised lookup sets are derived once at construction so
concurrent readers never observe a partially built cache.
"""

import string
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from src.domain.exceptions import CorsConfigurationError
from src.domain.interfaces import CallableOriginValidator, OriginValidator


# Request headers
ORIGIN = "Origin"
ACCESS_CONTROL_REQUEST_METHOD = "Access-Control-Request-Method"
ACCESS_CONTROL_REQUEST_HEADERS = "Access-Control-Request-Headers"

# Response headers
ACCESS_CONTROL_ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ACCESS_CONTROL_ALLOW_METHODS = "Access-Control-Allow-Methods"
ACCESS_CONTROL_ALLOW_HEADERS = "Access-Control-Allow-Headers"
ACCESS_CONTROL_ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
ACCESS_CONTROL_MAX_AGE = "Access-Control-Max-Age"
ACCESS_CONTROL_EXPOSE_HEADERS = "Access-Control-Expose-Headers"

PREFLIGHT_METHOD = "OPTIONS"

# RFC 7230 token characters
_TOKEN_CHARS = frozenset(string.ascii_letters + string.digits + "!#$%&'*+-.^_`|~")


def canonical_header_key(name: str) -> str:
    """Return the canonical form of an HTTP header name.

    The first letter and every letter following a hyphen are upper-cased,
    everything else is lower-cased: ``x-custom-id`` becomes ``X-Custom-Id``.
    Names containing characters outside the token alphabet are returned
    unchanged.

    Args:
        name: Header name as received or configured

    Returns:
        Canonical header name
    """
    if not name or any(char not in _TOKEN_CHARS for char in name):
        return name
    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-"))


def split_header_list(values: Iterable[str]) -> list[str]:
    """Split comma-delimited header lines into trimmed, non-empty entries."""
    return [item.strip() for value in values for item in value.split(",") if item.strip()]


@dataclass(frozen=True, slots=True)
class CorsRequestInfo:
    """CORS-relevant fields of a single request.

    Attributes:
        is_cors: Request carries an Origin that is not the request's own host
        origin: Origin header value (empty when absent)
        is_preflight: CORS ``OPTIONS`` request announcing a method
        requested_method: Upper-cased Access-Control-Request-Method value
        requested_headers: Canonical names from Access-Control-Request-Headers
    """

    is_cors: bool
    origin: str = ""
    is_preflight: bool = False
    requested_method: str = ""
    requested_headers: tuple[str, ...] = ()

    @classmethod
    def from_headers(
        cls,
        method: str,
        host: str,
        origin: str | None,
        request_method: str | None = None,
        request_headers: Iterable[str] = (),
    ) -> "CorsRequestInfo":
        """Classify a request from its method, Host and CORS request headers.

        Args:
            method: HTTP method of the request
            host: Value of the request's Host header
            origin: Origin header value, or None when absent
            request_method: Access-Control-Request-Method value, if any
            request_headers: Every Access-Control-Request-Headers header line

        Returns:
            Classified request info
        """
        origin = origin or ""
        is_cors = bool(origin) and _is_cross_origin(origin, host)
        requested_method = (request_method or "").strip().upper()
        requested_headers = tuple(
            canonical_header_key(name) for name in split_header_list(request_headers)
        )
        is_preflight = (
            is_cors and method.upper() == PREFLIGHT_METHOD and bool(requested_method)
        )
        return cls(
            is_cors=is_cors,
            origin=origin,
            is_preflight=is_preflight,
            requested_method=requested_method,
            requested_headers=requested_headers,
        )


def _is_cross_origin(origin: str, host: str) -> bool:
    if origin == "null":
        return True
    try:
        parts = urlsplit(origin)
    except ValueError:
        return False
    # Not an absolute URI: not a CORS request at all
    if not parts.scheme or not parts.netloc:
        return False
    return parts.netloc.lower() != host.strip().lower()


def _dedupe(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(value for value in values if value))


@dataclass(frozen=True, slots=True)
class CorsPolicy:
    """Immutable CORS negotiation policy.

    ``allowed_methods`` are stored upper-cased and ``allowed_headers`` in
    canonical case, both de-duplicated in configured order. A plain callable
    passed as ``origin_validator`` is wrapped in ``CallableOriginValidator``.

    Raises:
        CorsConfigurationError: If no origin validator is given or
            ``max_age_seconds`` is negative
    """

    origin_validator: OriginValidator
    reject_non_cors_requests: bool = False
    allowed_methods: Sequence[str] = ()
    allowed_headers: Sequence[str] = ()
    allow_credentials: bool = False
    max_age_seconds: int = 0
    expose_headers: Sequence[str] = ()
    allowed_method_set: frozenset[str] = field(init=False, repr=False, compare=False)
    allowed_header_set: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        validator = self.origin_validator
        if validator is None:
            raise CorsConfigurationError("CorsPolicy requires an origin_validator")
        if not isinstance(validator, OriginValidator):
            if not callable(validator):
                raise CorsConfigurationError(
                    "origin_validator must be an OriginValidator or a callable",
                    details={"type": type(validator).__name__},
                )
            validator = CallableOriginValidator(validator)
        if self.max_age_seconds < 0:
            raise CorsConfigurationError(
                "max_age_seconds must not be negative",
                details={"max_age_seconds": self.max_age_seconds},
            )

        methods = _dedupe(method.strip().upper() for method in self.allowed_methods)
        headers = _dedupe(canonical_header_key(name.strip()) for name in self.allowed_headers)
        exposed = _dedupe(canonical_header_key(name.strip()) for name in self.expose_headers)

        object.__setattr__(self, "origin_validator", validator)
        object.__setattr__(self, "allowed_methods", methods)
        object.__setattr__(self, "allowed_headers", headers)
        object.__setattr__(self, "expose_headers", exposed)
        object.__setattr__(self, "allowed_method_set", frozenset(methods))
        object.__setattr__(self, "allowed_header_set", frozenset(headers))

    def allows_method(self, method: str) -> bool:
        """Check a preflight's requested method against the allow-list."""
        return method.upper() in self.allowed_method_set

    def allows_headers(self, headers: Iterable[str]) -> bool:
        """Check that every requested header is on the allow-list."""
        return all(canonical_header_key(name) in self.allowed_header_set for name in headers)
