"""
Session models for the users endpoints.

These models represent the verified claims of a self-issued session token.
"""

from datetime import datetime
from pydantic import BaseModel


class SessionUserResponse(BaseModel):
    """The caller as described by their session token."""

    id: str
    email: str
    roles: list[str]
    issued_at: datetime
    expires_at: datetime
