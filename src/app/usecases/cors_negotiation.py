"""CORS negotiation use case.

Decides, for one request, whether it passes through untouched, is answered
directly as a preflight, or is delegated to the wrapped handler with CORS
headers attached. Rejections are raised as ``CorsRejectedError`` subclasses.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from src.domain.cors import (
    ACCESS_CONTROL_ALLOW_CREDENTIALS,
    ACCESS_CONTROL_ALLOW_HEADERS,
    ACCESS_CONTROL_ALLOW_METHODS,
    ACCESS_CONTROL_ALLOW_ORIGIN,
    ACCESS_CONTROL_EXPOSE_HEADERS,
    ACCESS_CONTROL_MAX_AGE,
    CorsPolicy,
    CorsRequestInfo,
)
from src.domain.exceptions import InvalidOriginError, InvalidPreflightError, NonCorsRequestError


class CorsDecisionKind(StrEnum):
    """Outcome of a successful negotiation."""

    PASS_THROUGH = "pass_through"
    PREFLIGHT = "preflight"
    SIMPLE = "simple"


@dataclass(frozen=True, slots=True)
class CorsDecision:
    """Accepted negotiation result.

    ``headers`` holds ``(name, value)`` pairs in emission order; a name may
    repeat, one entry per value of a multi-valued header.
    """

    kind: CorsDecisionKind
    headers: tuple[tuple[str, str], ...] = ()

    @property
    def is_terminal(self) -> bool:
        """True when the wrapped handler must not run."""
        return self.kind is CorsDecisionKind.PREFLIGHT

    def header_values(self, name: str) -> list[str]:
        """Return every value emitted for ``name`` (case-insensitive)."""
        lowered = name.lower()
        return [value for key, value in self.headers if key.lower() == lowered]


class CorsNegotiator:
    """Use case classifying and validating cross-origin requests."""

    def __init__(self, policy: CorsPolicy) -> None:
        self._policy = policy

    @property
    def policy(self) -> CorsPolicy:
        return self._policy

    def execute(self, info: CorsRequestInfo, request: Any = None) -> CorsDecision:
        """Execute the use case.

        Args:
            info: Classified CORS view of the request
            request: Framework request handed to the origin validator

        Returns:
            The accepted decision with the response headers to emit

        Raises:
            NonCorsRequestError: Non-CORS request while the policy rejects them
            InvalidOriginError: The origin validator refused the origin
            InvalidPreflightError: Preflight method or header not allowed
        """
        policy = self._policy

        if not info.is_cors:
            if policy.reject_non_cors_requests:
                raise NonCorsRequestError()
            return CorsDecision(kind=CorsDecisionKind.PASS_THROUGH)

        if not policy.origin_validator.validate(info.origin, request):
            raise InvalidOriginError(details={"origin": info.origin})

        if info.is_preflight:
            return self._preflight(info)
        return self._simple(info)

    def _preflight(self, info: CorsRequestInfo) -> CorsDecision:
        policy = self._policy

        if not policy.allows_method(info.requested_method):
            raise InvalidPreflightError(
                details={"origin": info.origin, "method": info.requested_method}
            )
        rejected = [name for name in info.requested_headers if not policy.allows_headers([name])]
        if rejected:
            raise InvalidPreflightError(details={"origin": info.origin, "headers": rejected})

        headers: list[tuple[str, str]] = []
        headers.extend((ACCESS_CONTROL_ALLOW_METHODS, method) for method in policy.allowed_methods)
        headers.extend((ACCESS_CONTROL_ALLOW_HEADERS, name) for name in policy.allowed_headers)
        headers.append((ACCESS_CONTROL_ALLOW_ORIGIN, info.origin))
        if policy.allow_credentials:
            headers.append((ACCESS_CONTROL_ALLOW_CREDENTIALS, "true"))
        headers.append((ACCESS_CONTROL_MAX_AGE, str(policy.max_age_seconds)))

        return CorsDecision(kind=CorsDecisionKind.PREFLIGHT, headers=tuple(headers))

    def _simple(self, info: CorsRequestInfo) -> CorsDecision:
        policy = self._policy

        headers: list[tuple[str, str]] = [
            (ACCESS_CONTROL_EXPOSE_HEADERS, name) for name in policy.expose_headers
        ]
        headers.append((ACCESS_CONTROL_ALLOW_ORIGIN, info.origin))
        if policy.allow_credentials:
            headers.append((ACCESS_CONTROL_ALLOW_CREDENTIALS, "true"))

        return CorsDecision(kind=CorsDecisionKind.SIMPLE, headers=tuple(headers))
