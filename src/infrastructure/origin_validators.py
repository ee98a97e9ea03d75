"""Stock ``OriginValidator`` implementations.

Covers the common origin rules: exact allow-list equality and regular
expressions. Anything else (database lookups, per-request rules) can be
plugged in by implementing ``OriginValidator`` or passing a callable to
``CorsPolicy``.
"""

import re
from collections.abc import Iterable
from typing import Any

from src.domain.interfaces import OriginValidator


WILDCARD = "*"


def _normalize_origin(origin: str) -> str:
    return origin.strip().rstrip("/").lower()


class StaticOriginValidator(OriginValidator):
    """Accept origins found in a fixed allow-list.

    Matching is case-insensitive and ignores a trailing slash. A ``"*"``
    entry accepts every origin; the accepted origin is still echoed back
    verbatim, never as a wildcard.
    """

    def __init__(self, allowed_origins: Iterable[str]) -> None:
        origins = frozenset(_normalize_origin(origin) for origin in allowed_origins if origin)
        self._allow_all = WILDCARD in origins
        self._allowed = origins - {WILDCARD}

    @property
    def allowed_origins(self) -> frozenset[str]:
        return self._allowed

    def validate(self, origin: str, request: Any) -> bool:
        if not origin:
            return False
        return self._allow_all or _normalize_origin(origin) in self._allowed

    def __repr__(self) -> str:
        if self._allow_all:
            return "StaticOriginValidator(['*'])"
        return f"StaticOriginValidator({sorted(self._allowed)!r})"


class RegexOriginValidator(OriginValidator):
    """Accept origins that fully match a regular expression.

    Example:
        >>> validator = RegexOriginValidator(r"https://([a-z0-9-]+\\.)?example\\.com")
        >>> validator.validate("https://api.example.com", None)
        True
    """

    def __init__(self, pattern: str | re.Pattern[str], flags: int = re.IGNORECASE) -> None:
        self._pattern = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern, flags)

    @property
    def pattern(self) -> re.Pattern[str]:
        return self._pattern

    def validate(self, origin: str, request: Any) -> bool:
        return bool(origin) and self._pattern.fullmatch(origin) is not None

    def __repr__(self) -> str:
        return f"RegexOriginValidator({self._pattern.pattern!r})"
