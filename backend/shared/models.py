"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field


class Principal(BaseModel):
    """
    The verified identity asserted by a third-party token for one request.

    Produced only by a successful external identity verification and made
    available to route handlers via dependency injection. Never cached or
    shared across requests.
    """

    subject_id: str = Field(..., description="Provider subject (user) ID")
    email: Optional[str] = Field(None, description="Email asserted by the provider")
    phone_number: Optional[str] = Field(None, description="Phone asserted by the provider")
    email_verified: bool = Field(default=False, description="Whether the provider verified the email")
    raw_claims: dict[str, Any] = Field(default_factory=dict, description="Full claim set")

    model_config = {
        "frozen": True,  # Make immutable for safety
    }
