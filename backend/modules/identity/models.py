"""
Identity module data models.

IdentityRecord mirrors one row of the ``identities`` table. The store
owns the row; services only pass copies around for one request.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class IdentityRecord(BaseModel):
    """The synchronized local identity row."""

    id: str = Field(..., description="Provider subject ID (primary key)")
    email: str = Field(..., description="Normalized email (unique)")
    phone: Optional[str] = Field(None, description="E.164 phone (unique if present)")
    created_at: datetime = Field(..., description="Set once on first sync")
    updated_at: datetime = Field(..., description="Bumped on every sync or touch")
    last_active_at: Optional[datetime] = Field(None, description="Set only by touch")

    model_config = {"frozen": True}


class SyncResult(BaseModel):
    """Outcome of an upsert: the stored row and whether this call inserted it."""

    record: IdentityRecord
    was_created: bool

    model_config = {"frozen": True}


class IdentitySummary(BaseModel):
    """Client-facing projection of an identity."""

    id: str
    email: str
    phone: Optional[str] = None
    email_verified: bool = False

    @classmethod
    def from_record(cls, record: IdentityRecord, email_verified: bool) -> "IdentitySummary":
        return cls(
            id=record.id,
            email=record.email,
            phone=record.phone,
            email_verified=email_verified,
        )


class SyncProfileResponse(BaseModel):
    """Response from POST /auth/sync-profile."""

    user: IdentitySummary
    is_new_user: bool


class AuthResponse(BaseModel):
    """Response from POST /auth/session."""

    access_token: str = Field(..., description="Session token for authenticated requests")
    token_type: str = Field(default="Bearer", description="Type of token")
    expires_in: int = Field(..., description="Seconds until the token expires")
    user: IdentitySummary
