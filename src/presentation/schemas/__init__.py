"""API schemas."""

from src.presentation.schemas.error import ErrorDetail, ErrorResponse


__all__ = [
    "ErrorDetail",
    "ErrorResponse",
]
