"""
Validation module data models.
"""

from typing import Iterable
from pydantic import BaseModel, Field

from shared.config import Settings
from shared.exceptions import ValidationError

from .errors import ErrorCode


class ValidationOutcome(BaseModel):
    """
    Aggregated result of running validation rules.

    ``valid`` is true iff ``errors`` is empty. ``errors`` keeps the order
    in which rules appended them.
    """

    valid: bool = Field(..., description="Whether every rule passed")
    errors: list[ErrorCode] = Field(default_factory=list, description="Ordered error codes")

    model_config = {"frozen": True}

    @classmethod
    def success(cls) -> "ValidationOutcome":
        return cls(valid=True, errors=[])

    @classmethod
    def failure(cls, *errors: ErrorCode) -> "ValidationOutcome":
        return cls(valid=False, errors=list(errors))

    @classmethod
    def from_errors(cls, errors: Iterable[ErrorCode]) -> "ValidationOutcome":
        errors = list(errors)
        return cls(valid=not errors, errors=errors)

    def raise_for_errors(self) -> None:
        """Raise ValidationError carrying every collected code, if any."""
        if not self.valid:
            raise ValidationError(self.errors)


class ValidationPolicy(BaseModel):
    """Tunable bounds used by the field validators (inclusive ranges)."""

    min_age: int = 18
    otp_min_length: int = 6
    otp_max_length: int = 6
    phone_min_digits: int = 1
    phone_max_digits: int = 15

    model_config = {"frozen": True}

    @classmethod
    def from_settings(cls, settings: Settings) -> "ValidationPolicy":
        return cls(
            min_age=settings.min_age,
            otp_min_length=settings.otp_min_length,
            otp_max_length=settings.otp_max_length,
            phone_min_digits=settings.phone_min_digits,
            phone_max_digits=settings.phone_max_digits,
        )
