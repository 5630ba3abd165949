"""
Authentication module.

Handles self-issued session tokens and verification of third-party
identity tokens.

Public API:
- ISessionTokenService / SessionTokenService: Issue and verify session tokens
- IExternalIdentityVerifier / ExternalIdentityVerifier: Verify provider tokens
- initialize_identity_provider: One-time provider initialization
- Models: SessionClaims, TokenSubject, JwtSettings, ProviderSettings, Role
- Auth exceptions: TokenInvalidError, TokenExpiredError, etc.
"""

from .interfaces import IExternalIdentityVerifier, IIdentityProviderClient, ISessionTokenService
from .models import (
    JWTPayload,
    JwtSettings,
    ProviderSettings,
    Role,
    SessionClaims,
    TokenSubject,
    VerificationFailure,
    VerificationReason,
    VerificationResult,
    VerificationSuccess,
)
from .exceptions import (
    AlreadyInitializedError,
    IdentityVerificationError,
    InsufficientPermissionsError,
    MissingTokenError,
    ProviderNotInitializedError,
    TokenExpiredError,
    TokenInvalidError,
)
from .provider import (
    IdentityProviderHandle,
    get_identity_provider,
    initialize_identity_provider,
    is_identity_provider_initialized,
)
from .tokens import SessionTokenService
from .verifier import ExternalIdentityVerifier

__all__ = [
    # Interfaces
    "ISessionTokenService",
    "IIdentityProviderClient",
    "IExternalIdentityVerifier",
    # Implementations
    "SessionTokenService",
    "ExternalIdentityVerifier",
    "IdentityProviderHandle",
    "initialize_identity_provider",
    "get_identity_provider",
    "is_identity_provider_initialized",
    # Models
    "JWTPayload",
    "JwtSettings",
    "ProviderSettings",
    "Role",
    "SessionClaims",
    "TokenSubject",
    "VerificationFailure",
    "VerificationReason",
    "VerificationResult",
    "VerificationSuccess",
    # Exceptions
    "AlreadyInitializedError",
    "IdentityVerificationError",
    "InsufficientPermissionsError",
    "MissingTokenError",
    "ProviderNotInitializedError",
    "TokenExpiredError",
    "TokenInvalidError",
]
