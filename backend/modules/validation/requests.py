"""
Request models gated by the validation engine.

Fields are optional at parse time so that null, empty and malformed input
all reach the field validators and produce their own error codes.
"""

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field

from .engine import FieldRule, RuleSet, not_blank
from .errors import ErrorCode
from .models import ValidationOutcome, ValidationPolicy
from .validators import (
    AgeValidator,
    EmailValidator,
    OTPValidator,
    PasswordValidator,
    PhoneValidator,
)


class RegisterRequest(BaseModel):
    """
    Request model for user registration.

    Rules, in order: name not blank, email, password, phone, minimum age.
    """

    email: Optional[str] = Field(None, description="User's email address")
    password: Optional[str] = Field(None, description="User's password")
    phone: Optional[str] = Field(None, description="Phone number in E.164 format")
    name: Optional[str] = Field(None, description="User's full name")
    birth_date: Optional[str] = Field(None, description="Date of birth (YYYY-MM-DD)")

    @staticmethod
    def rules(policy: ValidationPolicy, today: Optional[date] = None) -> RuleSet:
        age = AgeValidator(policy.min_age)
        return RuleSet(
            FieldRule("name", not_blank(ErrorCode.NAME_BLANK)),
            FieldRule("email", EmailValidator().validate),
            FieldRule("password", PasswordValidator().validate),
            FieldRule("phone", PhoneValidator(policy.phone_min_digits, policy.phone_max_digits).validate),
            FieldRule("birth_date", lambda value: age.validate(value, today)),
        )

    def validate_fields(
        self,
        policy: Optional[ValidationPolicy] = None,
        today: Optional[date] = None,
    ) -> ValidationOutcome:
        return self.rules(policy or ValidationPolicy(), today).validate(self)

    def is_valid(
        self,
        policy: Optional[ValidationPolicy] = None,
        today: Optional[date] = None,
    ) -> bool:
        return self.validate_fields(policy, today).valid


class LoginRequest(BaseModel):
    """Request model for user login. Rules: email, password."""

    email: Optional[str] = Field(None, description="User's email address")
    password: Optional[str] = Field(None, description="User's password")

    @staticmethod
    def rules() -> RuleSet:
        return RuleSet(
            FieldRule("email", EmailValidator().validate),
            FieldRule("password", PasswordValidator().validate),
        )

    def validate_fields(self) -> ValidationOutcome:
        return self.rules().validate(self)

    def is_valid(self) -> bool:
        return self.validate_fields().valid


class VerifyPhoneRequest(BaseModel):
    """Request model for phone verification. Rules: phone, otp."""

    phone: Optional[str] = Field(None, description="Phone number to verify")
    otp: Optional[str] = Field(None, description="One-time password sent to the phone")

    @staticmethod
    def rules(policy: ValidationPolicy) -> RuleSet:
        return RuleSet(
            FieldRule("phone", PhoneValidator(policy.phone_min_digits, policy.phone_max_digits).validate),
            FieldRule("otp", OTPValidator(policy.otp_min_length, policy.otp_max_length).validate),
        )

    def validate_fields(self, policy: Optional[ValidationPolicy] = None) -> ValidationOutcome:
        return self.rules(policy or ValidationPolicy()).validate(self)

    def is_valid(self, policy: Optional[ValidationPolicy] = None) -> bool:
        return self.validate_fields(policy).valid
