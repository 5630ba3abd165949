"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel, Field

from shared.config import Settings
from shared.models import Principal
from modules.validation.lookup import parse_enum


class Role(str, Enum):
    """Roles carried in session tokens."""

    USER = "user"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Role"]:
        return parse_enum(cls, value)


class TokenSubject(BaseModel):
    """The user claims a session token is issued for."""

    subject: str = Field(..., min_length=1, description="Subject (user ID)")
    email: str = Field(..., description="User's email")
    roles: list[str] = Field(default_factory=lambda: [Role.USER.value], description="Ordered roles")

    model_config = {"frozen": True}


class SessionClaims(BaseModel):
    """
    Verified payload of a self-issued session token.

    Request-scoped: reconstructed on every verification, never cached.
    """

    subject: str
    email: str
    roles: list[str]
    issued_at: datetime
    expires_at: datetime
    issuer: str
    audience: str

    model_config = {"frozen": True}

    def to_subject(self) -> TokenSubject:
        """Project the user claims out of the full claim set."""
        return TokenSubject(subject=self.subject, email=self.email, roles=list(self.roles))

    def has_role(self, role: Union[Role, str]) -> bool:
        wanted = role if isinstance(role, Role) else Role.parse(role)
        return wanted is not None and any(Role.parse(r) is wanted for r in self.roles)


class JWTPayload(BaseModel):
    """Compact claim shape of a signed session token."""

    sub: str = Field(..., min_length=1, description="Subject (user ID)")
    email: str = Field(..., description="User's email")
    roles: list[str] = Field(default_factory=list, description="User roles")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")
    iss: str = Field(..., description="Issuer")
    aud: str = Field(..., description="Audience")


class JwtSettings(BaseModel):
    """Signing configuration for session tokens."""

    secret: str = Field(..., repr=False)
    issuer: str = "eros-backend"
    audience: str = "eros-users"
    realm: str = "eros-api"
    expiry: timedelta = timedelta(days=7)

    model_config = {"frozen": True}

    @classmethod
    def from_settings(cls, settings: Settings) -> "JwtSettings":
        return cls(
            secret=settings.jwt_secret,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            realm=settings.jwt_realm,
            expiry=timedelta(days=settings.jwt_expiry_days),
        )


class ProviderSettings(BaseModel):
    """Settings for the one-time identity provider initialization."""

    credential_source: str = Field(..., description="Path to the provider credential file")
    project_id: str = Field(..., description="Provider project ID")
    timeout_seconds: float = Field(default=5.0, gt=0, description="Verification call timeout")

    model_config = {"frozen": True}

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProviderSettings":
        return cls(
            credential_source=settings.identity_provider_credentials_path,
            project_id=settings.identity_provider_project_id,
            timeout_seconds=settings.identity_provider_timeout_seconds,
        )


class VerificationReason(str, Enum):
    """Why an identity token failed verification. Server-side only."""

    REJECTED = "rejected"
    TIMEOUT = "timeout"
    UNAVAILABLE = "unavailable"
    MALFORMED = "malformed"


class VerificationSuccess(BaseModel):
    principal: Principal

    model_config = {"frozen": True}


class VerificationFailure(BaseModel):
    reason: VerificationReason
    message: str

    model_config = {"frozen": True}


VerificationResult = Union[VerificationSuccess, VerificationFailure]
