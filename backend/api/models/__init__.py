"""API models package."""

from .errors import ErrorResponse, ValidationErrorResponse
from .session import SessionUserResponse

__all__ = [
    "ErrorResponse",
    "ValidationErrorResponse",
    "SessionUserResponse",
]
