"""Infrastructure layer containing implementations."""

__all__ = [
    "config",
    "logging",
    "origin_validators",
]
