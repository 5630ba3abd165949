"""
Validation module.

Composable field validators that gate untrusted input before it reaches
the identity store.

Public API:
- ErrorCode: Closed vocabulary of failure codes
- ValidationOutcome: Aggregated pass/fail result with ordered errors
- RuleSet / FieldRule: Composition of field validators
- Field validators: Email, Password, Phone, OTP, Age
- Request models: RegisterRequest, LoginRequest, VerifyPhoneRequest
"""

from .errors import ErrorCode
from .models import ValidationOutcome, ValidationPolicy
from .engine import FieldRule, RuleSet, not_blank, optional
from .lookup import parse_enum
from .validators import (
    AgeValidator,
    EmailValidator,
    OTPValidator,
    PasswordValidator,
    PhoneValidator,
)
from .requests import LoginRequest, RegisterRequest, VerifyPhoneRequest

__all__ = [
    "ErrorCode",
    "ValidationOutcome",
    "ValidationPolicy",
    "FieldRule",
    "RuleSet",
    "not_blank",
    "optional",
    "parse_enum",
    "AgeValidator",
    "EmailValidator",
    "OTPValidator",
    "PasswordValidator",
    "PhoneValidator",
    "LoginRequest",
    "RegisterRequest",
    "VerifyPhoneRequest",
]
