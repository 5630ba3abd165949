"""
Session token service.

Issues and verifies self-signed HS256 session tokens. Verification is a
purely local cryptographic check: signature first, then required claims,
issuer and audience, then expiry against the injected clock.
"""

import logging
from datetime import datetime, timezone
from typing import Callable

import jwt
from jwt.utils import base64url_decode, base64url_encode
from pydantic import ValidationError as PydanticValidationError

from shared.exceptions import ConfigError

from .exceptions import MissingTokenError, TokenExpiredError, TokenInvalidError
from .interfaces import ISessionTokenService
from .models import JWTPayload, JwtSettings, SessionClaims, TokenSubject

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "email", "iat", "exp", "iss", "aud"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionTokenService(ISessionTokenService):
    """
    Implementation of the session token service.

    Stateless after construction and safe for concurrent use. A token whose
    ``exp`` equals the current time is still accepted; it is expired one
    second later.
    """

    ALGORITHM = "HS256"

    def __init__(
        self,
        settings: JwtSettings,
        clock: Callable[[], datetime] = _utcnow,
    ):
        if not settings.secret or not settings.secret.strip():
            raise ConfigError(
                "JWT secret must not be blank. Set the JWT_SECRET environment variable."
            )
        self._settings = settings
        self._clock = clock

    @property
    def expires_in(self) -> int:
        """Lifetime of newly issued tokens, in seconds."""
        return int(self._settings.expiry.total_seconds())

    def issue(self, subject: TokenSubject) -> str:
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + self._settings.expiry

        payload = {
            "sub": subject.subject,
            "email": subject.email,
            "roles": list(subject.roles),
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            "iss": self._settings.issuer,
            "aud": self._settings.audience,
        }
        return jwt.encode(payload, self._settings.secret, algorithm=self.ALGORITHM)

    def verify(self, token: str) -> SessionClaims:
        if not token:
            raise MissingTokenError()

        self._check_signature_encoding(token)

        try:
            payload = jwt.decode(
                token,
                self._settings.secret,
                algorithms=[self.ALGORITHM],
                audience=self._settings.audience,
                issuer=self._settings.issuer,
                options={
                    "require": REQUIRED_CLAIMS,
                    # Expiry is checked below against the injected clock
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
            claims = JWTPayload(**payload)
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError(f"Invalid token: {e}")
        except PydanticValidationError:
            raise TokenInvalidError("Invalid token: unexpected claim types")

        expires_at = datetime.fromtimestamp(claims.exp, tz=timezone.utc)
        if self._clock() > expires_at:
            raise TokenExpiredError()

        return SessionClaims(
            subject=claims.sub,
            email=claims.email,
            roles=claims.roles,
            issued_at=datetime.fromtimestamp(claims.iat, tz=timezone.utc),
            expires_at=expires_at,
            issuer=claims.iss,
            audience=claims.aud,
        )

    def verify_and_extract(self, token: str) -> TokenSubject:
        return self.verify(token).to_subject()

    @staticmethod
    def _check_signature_encoding(token: str) -> None:
        """
        Reject signatures whose base64url text is not the canonical encoding.

        The decoder ignores unused trailing bits, so without this check two
        different signature strings could verify as the same bytes.
        """
        segments = token.split(".")
        if len(segments) != 3:
            raise TokenInvalidError("Invalid token: expected three segments")
        signature = segments[2].encode("ascii", errors="replace")
        try:
            canonical = base64url_encode(base64url_decode(signature))
        except (ValueError, TypeError):
            raise TokenInvalidError("Invalid token: malformed signature")
        if canonical != signature:
            raise TokenInvalidError("Invalid token: signature verification failed")
