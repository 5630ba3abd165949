"""
External identity verification.

Delegates signature, expiry and revocation checks to the identity
provider client and maps every outcome to either a Principal or a
classified failure. The provider call runs in a worker thread under an
explicit timeout so a slow provider never stalls the event loop.
"""

import asyncio
import logging
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from shared.models import Principal

from .exceptions import (
    IdentityVerificationError,
    ProviderTokenRejectedError,
    ProviderUnavailableError,
)
from .interfaces import IExternalIdentityVerifier
from .models import (
    VerificationFailure,
    VerificationReason,
    VerificationResult,
    VerificationSuccess,
)
from .provider import IdentityProviderHandle

logger = logging.getLogger(__name__)


def principal_from_claims(claims: dict[str, Any]) -> Principal:
    """
    Build a Principal from a provider claim dict.

    Raises:
        ValueError: If the subject is missing or the claims have the wrong shape
    """
    subject_id = claims.get("sub")
    if not isinstance(subject_id, str) or not subject_id:
        raise ValueError("Identity claims are missing a subject")

    try:
        return Principal(
            subject_id=subject_id,
            email=claims.get("email") or None,
            phone_number=claims.get("phone_number") or None,
            email_verified=bool(claims.get("email_verified", False)),
            raw_claims=dict(claims),
        )
    except PydanticValidationError as e:
        raise ValueError(f"Identity claims have an unexpected shape: {e}") from e


class ExternalIdentityVerifier(IExternalIdentityVerifier):
    """Verifies third-party identity tokens through the provider handle."""

    def __init__(self, provider: IdentityProviderHandle):
        self._client = provider.client
        self._timeout = provider.timeout_seconds

    async def verify_result(self, token: str) -> VerificationResult:
        if not token or not token.strip():
            return VerificationFailure(
                reason=VerificationReason.MALFORMED, message="Empty identity token"
            )

        try:
            claims = await asyncio.wait_for(
                asyncio.to_thread(self._client.verify_id_token, token),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Identity provider timed out after %.1fs (reason=timeout)", self._timeout
            )
            return VerificationFailure(
                reason=VerificationReason.TIMEOUT, message="Identity provider timed out"
            )
        except ProviderUnavailableError as e:
            logger.warning("Identity provider unavailable (reason=unavailable): %s", e.message)
            return VerificationFailure(reason=VerificationReason.UNAVAILABLE, message=e.message)
        except ProviderTokenRejectedError as e:
            logger.info("Identity token rejected by provider (reason=rejected): %s", e.message)
            return VerificationFailure(reason=VerificationReason.REJECTED, message=e.message)
        except Exception as e:
            # Unclassified client fault; the boundary still sees a plain failure
            logger.exception("Identity provider call failed (reason=unavailable)")
            return VerificationFailure(
                reason=VerificationReason.UNAVAILABLE, message=f"{type(e).__name__}: {e}"
            )

        try:
            principal = principal_from_claims(claims)
        except ValueError as e:
            logger.warning("Identity claims unusable (reason=malformed): %s", e)
            return VerificationFailure(reason=VerificationReason.MALFORMED, message=str(e))

        return VerificationSuccess(principal=principal)

    async def verify(self, token: str) -> Principal:
        result = await self.verify_result(token)
        if isinstance(result, VerificationFailure):
            raise IdentityVerificationError(reason=result.reason.value)
        return result.principal

    async def verify_or_none(self, token: str) -> Optional[Principal]:
        try:
            return await self.verify(token)
        except IdentityVerificationError:
            return None
