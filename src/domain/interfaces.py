"""Capability interfaces consumed by the CORS domain.

The origin decision is delegated to an ``OriginValidator`` so policies can
plug in anything from a static allow-list to a database lookup without the
negotiator knowing how the decision is made.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


class OriginValidator(ABC):
    """Decides whether a cross-origin request's Origin is acceptable.

    Implementations may block (for instance on a database lookup). The
    negotiator imposes no timeout of its own; latency policy belongs to the
    implementation.
    """

    @abstractmethod
    def validate(self, origin: str, request: Any) -> bool:
        """Return True if ``origin`` may access the resource.

        Args:
            origin: Raw value of the request's Origin header
            request: The framework request object, for context-dependent rules

        Returns:
            True to accept the origin, False to reject it
        """


class CallableOriginValidator(OriginValidator):
    """Adapt a plain ``(origin, request) -> bool`` function to ``OriginValidator``."""

    def __init__(self, func: Callable[[str, Any], bool]) -> None:
        if not callable(func):
            raise TypeError(f"origin validator must be callable, got {type(func).__name__}")
        self._func = func

    def validate(self, origin: str, request: Any) -> bool:
        return bool(self._func(origin, request))

    def __repr__(self) -> str:
        return f"CallableOriginValidator({self._func!r})"
