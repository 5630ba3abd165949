"""
Base exception classes for the Eros identity backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


class ErosError(Exception):
    """
    Base exception for all Eros errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigError(ErosError):
    """Required configuration is missing or unusable. Fatal at startup."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message, code=code or "CONFIG_ERROR")


class NotFoundError(ErosError):
    """Resource not found."""

    pass


class ValidationError(ErosError):
    """
    Input validation failed.

    Carries the full ordered list of error codes produced by the
    validation engine, never just the first failure.
    """

    def __init__(
        self,
        errors: list[Any],
        message: str = "Request validation failed",
    ):
        codes = [getattr(error, "value", str(error)) for error in errors]
        super().__init__(
            message,
            code="VALIDATION_FAILED",
            details={"errors": codes},
        )
        self.errors = list(errors)


class AuthenticationError(ErosError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(ErosError):
    """Authorization failed (insufficient permissions)."""

    pass


class ConflictError(ErosError):
    """A write collided with a uniqueness constraint held by another record."""

    pass


class ExternalServiceError(ErosError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
