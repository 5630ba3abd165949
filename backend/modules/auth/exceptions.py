"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import AuthenticationError, AuthorizationError, ConfigError, ErosError
from modules.validation.errors import ErrorCode


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code=ErrorCode.TOKEN_MISSING.value)


class TokenExpiredError(AuthenticationError):
    """Raised when a session token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code=ErrorCode.TOKEN_EXPIRED.value)


class TokenInvalidError(AuthenticationError):
    """Raised for a bad signature, malformed structure, or issuer/audience mismatch."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code=ErrorCode.TOKEN_INVALID.value)


class IdentityVerificationError(AuthenticationError):
    """
    Raised when a third-party identity token cannot be verified.

    ``reason`` distinguishes rejection, timeout, provider outage and
    malformed claims for server-side logs; callers only ever see the
    uniform code and message.
    """

    def __init__(self, reason: str, message: str = "Identity token verification failed"):
        super().__init__(message, code=ErrorCode.IDENTITY_VERIFICATION_FAILED.value)
        self.reason = reason


class InsufficientPermissionsError(AuthorizationError):
    """Raised when the session lacks a required role."""

    def __init__(self, required_role: str, roles: list[str]):
        super().__init__(
            f"Insufficient permissions. Required: {required_role}",
            code=ErrorCode.INSUFFICIENT_PERMISSIONS.value,
            details={"required_role": required_role, "roles": roles},
        )


class AlreadyInitializedError(ConfigError):
    """Raised when the identity provider is initialized a second time."""

    def __init__(self, message: str = "Identity provider is already initialized"):
        super().__init__(message, code="ALREADY_INITIALIZED")


class ProviderNotInitializedError(ConfigError):
    """Raised when the identity provider is used before initialization."""

    def __init__(self, message: str = "Identity provider has not been initialized"):
        super().__init__(message, code="PROVIDER_NOT_INITIALIZED")


class ProviderError(ErosError):
    """Base for failures reported by the identity provider client."""

    pass


class ProviderTokenRejectedError(ProviderError):
    """The provider rejected the token (expired, revoked, malformed, bad signature)."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, code="PROVIDER_TOKEN_REJECTED", details=details)


class ProviderUnavailableError(ProviderError):
    """The provider could not be reached or answered with a transient failure."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, code="PROVIDER_UNAVAILABLE", details=details)
