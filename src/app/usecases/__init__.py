"""Application use cases."""

from src.app.usecases.cors_negotiation import CorsDecision, CorsDecisionKind, CorsNegotiator


__all__ = [
    "CorsDecision",
    "CorsDecisionKind",
    "CorsNegotiator",
]
