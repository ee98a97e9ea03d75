"""CORS (Cross-Origin Resource Sharing) negotiation middleware.

Classifies every request as non-CORS, preflight or simple, validates the
declared Origin through the configured policy, and either rejects the
request, answers the preflight directly, or delegates to the wrapped
application with the CORS response headers attached.
"""

from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request, Response, status
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from src.app.usecases.cors_negotiation import CorsDecision, CorsDecisionKind, CorsNegotiator
from src.domain.cors import (
    ACCESS_CONTROL_REQUEST_HEADERS,
    ACCESS_CONTROL_REQUEST_METHOD,
    ORIGIN,
    CorsRequestInfo,
)
from src.domain.exceptions import CorsRejectedError
from src.infrastructure.logging.config import get_logger
from src.presentation.api.middleware.error_handling import cors_rejection_response


logger = get_logger(__name__)


def extract_cors_info(request: Request) -> CorsRequestInfo:
    """Build the CORS view of a Starlette request."""
    return CorsRequestInfo.from_headers(
        method=request.method,
        host=request.headers.get("host", ""),
        origin=request.headers.get(ORIGIN),
        request_method=request.headers.get(ACCESS_CONTROL_REQUEST_METHOD),
        request_headers=request.headers.getlist(ACCESS_CONTROL_REQUEST_HEADERS),
    )


def apply_cors_headers(response: Response, decision: CorsDecision) -> None:
    """Attach the decision's headers to a response produced downstream.

    Headers behave as if set before the handler ran: a header the handler
    already set is left untouched. Multi-valued headers get one line per value.
    """
    present = {key.lower() for key in response.headers.keys()}
    for name, value in decision.headers:
        if name.lower() in present:
            continue
        response.headers.append(name, value)


class CorsMiddleware(BaseHTTPMiddleware):
    """Negotiate CORS for every request passing through the application.

    The origin validator runs in the thread pool, so validators doing
    blocking work (database lookups, remote calls) do not stall the event
    loop. Rejections and preflight responses never reach the wrapped app.
    ``cors_origin`` and ``cors_kind`` are bound as structlog context vars for
    the lifetime of the request.    """

    def __init__(self, app: ASGIApp, negotiator: CorsNegotiator) -> None:
        super().__init__(app)
        self.negotiator = negotiator

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Negotiate CORS, then answer, reject or delegate."""
        info = extract_cors_info(request)

        with structlog.contextvars.bound_contextvars(cors_origin=info.origin or None):
            try:
                decision = await run_in_threadpool(self.negotiator.execute, info, request)
            except CorsRejectedError as exc:
                logger.warning(
                    "cors_request_rejected",
                    code=exc.code,
                    reason=exc.message,
                    method=request.method,
                    path=request.url.path,
                )
                return cors_rejection_response(exc)

            with structlog.contextvars.bound_contextvars(cors_kind=decision.kind.value):
                return await self._respond(request, call_next, info, decision)

    async def _respond(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
        info: CorsRequestInfo,
        decision: CorsDecision,
    ) -> Response:
        if decision.kind is CorsDecisionKind.PREFLIGHT:
            logger.debug(
                "cors_preflight_accepted",
                requested_method=info.requested_method,
                requested_headers=list(info.requested_headers),
                path=request.url.path,
            )
            response = Response(status_code=status.HTTP_200_OK)
            apply_cors_headers(response, decision)
            return response

        response = await call_next(request)

        if decision.kind is CorsDecisionKind.SIMPLE:
            apply_cors_headers(response, decision)

        return response


def setup_cors(app: FastAPI, negotiator: CorsNegotiator) -> None:
    """Install the CORS negotiation middleware."""
    app.add_middleware(CorsMiddleware, negotiator=negotiator)
