"""
Closed vocabulary of classified failures.

Every validation rule and every auth failure maps to exactly one
ErrorCode. Clients branch on the code; the message is for humans.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes surfaced to API clients."""

    # Email
    EMAIL_NULL = "EMAIL_NULL"
    EMAIL_EMPTY = "EMAIL_EMPTY"
    EMAIL_INVALID = "EMAIL_INVALID"

    # Password
    PASSWORD_NULL = "PASSWORD_NULL"
    PASSWORD_EMPTY = "PASSWORD_EMPTY"
    PASSWORD_WHITESPACE = "PASSWORD_WHITESPACE"
    PASSWORD_TOO_SHORT = "PASSWORD_TOO_SHORT"
    PASSWORD_UPPER_MISSING = "PASSWORD_UPPER_MISSING"
    PASSWORD_LOWER_MISSING = "PASSWORD_LOWER_MISSING"
    PASSWORD_DIGIT_MISSING = "PASSWORD_DIGIT_MISSING"
    PASSWORD_SPECIAL_MISSING = "PASSWORD_SPECIAL_MISSING"

    # Phone
    PHONE_NULL = "PHONE_NULL"
    PHONE_EMPTY = "PHONE_EMPTY"
    PHONE_PLUS_MISSING = "PHONE_PLUS_MISSING"
    PHONE_NON_DIGITS = "PHONE_NON_DIGITS"
    PHONE_LEADING_ZERO = "PHONE_LEADING_ZERO"
    PHONE_TOO_SHORT = "PHONE_TOO_SHORT"
    PHONE_TOO_LONG = "PHONE_TOO_LONG"

    # OTP
    OTP_BLANK = "OTP_BLANK"
    OTP_NON_DIGITS = "OTP_NON_DIGITS"
    OTP_WRONG_LENGTH = "OTP_WRONG_LENGTH"

    # Birth date / age
    DATE_FORMAT = "DATE_FORMAT"
    UNDERAGE = "UNDERAGE"

    # Profile
    NAME_BLANK = "NAME_BLANK"

    # Authentication
    TOKEN_MISSING = "TOKEN_MISSING"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_INVALID = "TOKEN_INVALID"
    IDENTITY_VERIFICATION_FAILED = "IDENTITY_VERIFICATION_FAILED"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"

    # Identity synchronization
    IDENTITY_EMAIL_REQUIRED = "IDENTITY_EMAIL_REQUIRED"
    IDENTITY_EMAIL_TAKEN = "IDENTITY_EMAIL_TAKEN"
    IDENTITY_PHONE_TAKEN = "IDENTITY_PHONE_TAKEN"
    IDENTITY_NOT_FOUND = "IDENTITY_NOT_FOUND"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.EMAIL_NULL: "Email must not be null.",
    ErrorCode.EMAIL_EMPTY: "Email must not be empty.",
    ErrorCode.EMAIL_INVALID: "Email is not a valid address.",
    ErrorCode.PASSWORD_NULL: "Password must not be null.",
    ErrorCode.PASSWORD_EMPTY: "Password must not be empty.",
    ErrorCode.PASSWORD_WHITESPACE: "Password must not contain whitespace.",
    ErrorCode.PASSWORD_TOO_SHORT: "Password is too short.",
    ErrorCode.PASSWORD_UPPER_MISSING: "Password is missing an uppercase letter.",
    ErrorCode.PASSWORD_LOWER_MISSING: "Password is missing a lowercase letter.",
    ErrorCode.PASSWORD_DIGIT_MISSING: "Password is missing a digit.",
    ErrorCode.PASSWORD_SPECIAL_MISSING: "Password is missing a special character.",
    ErrorCode.PHONE_NULL: "Phone number must not be null.",
    ErrorCode.PHONE_EMPTY: "Phone number must not be empty.",
    ErrorCode.PHONE_PLUS_MISSING: "Phone number must start with '+'.",
    ErrorCode.PHONE_NON_DIGITS: "Phone number must contain only digits after '+'.",
    ErrorCode.PHONE_LEADING_ZERO: "Phone number must not start with 0 after '+'.",
    ErrorCode.PHONE_TOO_SHORT: "Phone number has too few digits.",
    ErrorCode.PHONE_TOO_LONG: "Phone number has too many digits.",
    ErrorCode.OTP_BLANK: "OTP must not be blank.",
    ErrorCode.OTP_NON_DIGITS: "OTP must contain only digits.",
    ErrorCode.OTP_WRONG_LENGTH: "OTP has the wrong length.",
    ErrorCode.DATE_FORMAT: "Birth date must use the YYYY-MM-DD format.",
    ErrorCode.UNDERAGE: "User is below the minimum age.",
    ErrorCode.NAME_BLANK: "Name must not be blank.",
    ErrorCode.TOKEN_MISSING: "Authentication required.",
    ErrorCode.TOKEN_EXPIRED: "Authentication token has expired.",
    ErrorCode.TOKEN_INVALID: "Invalid authentication token.",
    ErrorCode.IDENTITY_VERIFICATION_FAILED: "Identity token verification failed.",
    ErrorCode.INSUFFICIENT_PERMISSIONS: "Insufficient permissions.",
    ErrorCode.IDENTITY_EMAIL_REQUIRED: "Identity token must contain an email.",
    ErrorCode.IDENTITY_EMAIL_TAKEN: "Email is already registered to another user.",
    ErrorCode.IDENTITY_PHONE_TAKEN: "Phone number is already registered to another user.",
    ErrorCode.IDENTITY_NOT_FOUND: "Identity not found.",
}
