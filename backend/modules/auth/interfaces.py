"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. This enables testing with fakes and swapping the
identity provider without touching callers.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from shared.models import Principal

from .models import SessionClaims, TokenSubject, VerificationResult


@runtime_checkable
class ISessionTokenService(Protocol):
    """Issues and verifies self-signed session tokens."""

    def issue(self, subject: TokenSubject) -> str:
        """
        Issue a signed session token for the given user claims.

        Args:
            subject: Subject ID, email and roles to embed

        Returns:
            Compact serialized token
        """
        ...

    def verify(self, token: str) -> SessionClaims:
        """
        Verify a session token locally and rebuild its claims.

        Raises:
            MissingTokenError: If the token is empty
            TokenExpiredError: If the token has expired
            TokenInvalidError: For bad signature, structure, issuer or audience
        """
        ...

    def verify_and_extract(self, token: str) -> TokenSubject:
        """Verify a token and project out its user claims."""
        ...


@runtime_checkable
class IIdentityProviderClient(Protocol):
    """
    Client for the third-party identity provider.

    Blocking; callers are responsible for running it off the event loop.
    """

    def verify_id_token(self, token: str) -> dict[str, Any]:
        """
        Verify an identity token with the provider.

        Returns:
            Claim dict containing at least ``sub``, and optionally
            ``email``, ``phone_number`` and ``email_verified``

        Raises:
            ProviderTokenRejectedError: Token is expired, revoked or malformed
            ProviderUnavailableError: Provider could not be reached
        """
        ...


@runtime_checkable
class IExternalIdentityVerifier(Protocol):
    """Turns third-party identity tokens into request principals."""

    async def verify_result(self, token: str) -> VerificationResult:
        """Verify a token and return a tagged success/failure result."""
        ...

    async def verify(self, token: str) -> Principal:
        """
        Verify a token and return its principal.

        Raises:
            IdentityVerificationError: On any verification failure
        """
        ...

    async def verify_or_none(self, token: str) -> Optional[Principal]:
        """Verify a token, returning None instead of raising on failure."""
        ...
