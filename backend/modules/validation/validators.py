"""
Field validators.

Each validator checks one field and returns a ValidationOutcome with zero
or more ErrorCodes. Validators are stateless apart from their policy
bounds and are safe to share across requests.
"""

import re
from datetime import date, datetime
from typing import Optional, Union

from .errors import ErrorCode
from .models import ValidationOutcome

ASCII_DIGITS = frozenset("0123456789")


def _all_digits(value: str) -> bool:
    return bool(value) and all(char in ASCII_DIGITS for char in value)


class EmailValidator:
    """
    Email validator using a conservative RFC 5322 subset.

    Local part: ``a-zA-Z0-9_!#$%&'*+/=?`{|}~^.-``, a required ``@``,
    domain: ``a-zA-Z0-9.-``.
    """

    PATTERN = re.compile(r"^[a-zA-Z0-9_!#$%&'*+/=?`{|}~^.-]+@[a-zA-Z0-9.-]+$")

    def validate(self, email: Optional[str]) -> ValidationOutcome:
        if email is None:
            return ValidationOutcome.failure(ErrorCode.EMAIL_NULL)
        if email == "":
            return ValidationOutcome.failure(ErrorCode.EMAIL_EMPTY)
        if not self.PATTERN.fullmatch(email):
            return ValidationOutcome.failure(ErrorCode.EMAIL_INVALID)
        return ValidationOutcome.success()

    def is_valid(self, email: Optional[str]) -> bool:
        return self.validate(email).valid


class PasswordValidator:
    """
    Password strength validator.

    Null, empty and whitespace-containing passwords are rejected outright.
    Otherwise every strength rule is checked and each failure is reported.
    """

    MIN_LENGTH = 8
    SPECIAL_CHARS = "!@#$%^&*()_+-=[]{}|;:,.<>?\\"

    def validate(self, password: Optional[str]) -> ValidationOutcome:
        if password is None:
            return ValidationOutcome.failure(ErrorCode.PASSWORD_NULL)
        if password == "":
            return ValidationOutcome.failure(ErrorCode.PASSWORD_EMPTY)
        if any(char.isspace() for char in password):
            return ValidationOutcome.failure(ErrorCode.PASSWORD_WHITESPACE)

        errors: list[ErrorCode] = []
        if len(password) < self.MIN_LENGTH:
            errors.append(ErrorCode.PASSWORD_TOO_SHORT)
        if not any(char.isupper() for char in password):
            errors.append(ErrorCode.PASSWORD_UPPER_MISSING)
        if not any(char.islower() for char in password):
            errors.append(ErrorCode.PASSWORD_LOWER_MISSING)
        if not any(char in ASCII_DIGITS for char in password):
            errors.append(ErrorCode.PASSWORD_DIGIT_MISSING)
        if not any(char in self.SPECIAL_CHARS for char in password):
            errors.append(ErrorCode.PASSWORD_SPECIAL_MISSING)

        return ValidationOutcome.from_errors(errors)

    def is_valid(self, password: Optional[str]) -> bool:
        return self.validate(password).valid

    @classmethod
    def requirements(cls) -> list[str]:
        """Human-readable list of the password rules."""
        return [
            f"At least {cls.MIN_LENGTH} characters long",
            "At least one uppercase letter (A-Z)",
            "At least one lowercase letter (a-z)",
            "At least one digit (0-9)",
            f"At least one special character {cls.SPECIAL_CHARS}",
        ]


class PhoneValidator:
    """
    E.164 subset validator.

    A number starts with ``+`` followed only by digits, the first of which
    is non-zero, with a digit count inside ``[min_digits, max_digits]``.
    Once the ``+`` is present, every violated clause is reported.
    """

    def __init__(self, min_digits: int = 1, max_digits: int = 15):
        self.min_digits = min_digits
        self.max_digits = max_digits

    def validate(self, phone_number: Optional[str]) -> ValidationOutcome:
        if phone_number is None:
            return ValidationOutcome.failure(ErrorCode.PHONE_NULL)
        if phone_number == "":
            return ValidationOutcome.failure(ErrorCode.PHONE_EMPTY)
        if not phone_number.startswith("+"):
            return ValidationOutcome.failure(ErrorCode.PHONE_PLUS_MISSING)

        digits = phone_number[1:]
        if not digits:
            return ValidationOutcome.failure(ErrorCode.PHONE_EMPTY)

        errors: list[ErrorCode] = []
        if not _all_digits(digits):
            errors.append(ErrorCode.PHONE_NON_DIGITS)
        if digits[0] == "0":
            errors.append(ErrorCode.PHONE_LEADING_ZERO)
        if len(digits) < self.min_digits:
            errors.append(ErrorCode.PHONE_TOO_SHORT)
        if len(digits) > self.max_digits:
            errors.append(ErrorCode.PHONE_TOO_LONG)

        return ValidationOutcome.from_errors(errors)

    def is_valid(self, phone_number: Optional[str]) -> bool:
        return self.validate(phone_number).valid

    @staticmethod
    def normalize(phone_number: Optional[str]) -> Optional[str]:
        """
        Strip common formatting (spaces, hyphens, parentheses, dots).

        Does not add a country code and does not validate the result.
        """
        if phone_number is None:
            return None
        return re.sub(r"[\s\-().]", "", phone_number)

    def format_info(self) -> str:
        return (
            "E.164 international phone number format: must start with '+', "
            f"followed by {self.min_digits}-{self.max_digits} digits, "
            "the first of which is not 0, with no spaces or other formatting. "
            "Examples: +14155552671, +442071838750"
        )


class OTPValidator:
    """One-time password format validator: all digits, length in range."""

    def __init__(self, min_length: int = 6, max_length: int = 6):
        self.min_length = min_length
        self.max_length = max_length

    def validate(self, otp: Optional[str]) -> ValidationOutcome:
        if otp is None or not otp.strip():
            return ValidationOutcome.failure(ErrorCode.OTP_BLANK)

        errors: list[ErrorCode] = []
        if not _all_digits(otp):
            errors.append(ErrorCode.OTP_NON_DIGITS)
        if not self.min_length <= len(otp) <= self.max_length:
            errors.append(ErrorCode.OTP_WRONG_LENGTH)

        return ValidationOutcome.from_errors(errors)

    def is_valid(self, otp: Optional[str]) -> bool:
        return self.validate(otp).valid


class AgeValidator:
    """
    Minimum-age validator.

    Accepts a ``date`` or an ISO-8601 ``YYYY-MM-DD`` string. Age is the
    number of whole calendar years between the birth date and today.
    """

    DATE_FORMAT = "%Y-%m-%d"

    def __init__(self, min_age: int = 18):
        self.min_age = min_age

    @classmethod
    def parse(cls, birth_date: Union[str, date, None]) -> Optional[date]:
        """Parse a birth date, returning None when it is not a valid date."""
        if isinstance(birth_date, datetime):
            return birth_date.date()
        if isinstance(birth_date, date):
            return birth_date
        if not isinstance(birth_date, str):
            return None
        try:
            return datetime.strptime(birth_date, cls.DATE_FORMAT).date()
        except ValueError:
            return None

    @staticmethod
    def age_on(birth_date: date, today: date) -> int:
        # A Feb 29 birthday completes its year on Mar 1 in non-leap years
        before_birthday = (today.month, today.day) < (birth_date.month, birth_date.day)
        return today.year - birth_date.year - before_birthday

    def validate(
        self,
        birth_date: Union[str, date, None],
        today: Optional[date] = None,
    ) -> ValidationOutcome:
        parsed = self.parse(birth_date)
        if parsed is None:
            return ValidationOutcome.failure(ErrorCode.DATE_FORMAT)

        today = today or date.today()
        if self.age_on(parsed, today) < self.min_age:
            return ValidationOutcome.failure(ErrorCode.UNDERAGE)
        return ValidationOutcome.success()

    def is_valid(self, birth_date: Union[str, date, None], today: Optional[date] = None) -> bool:
        return self.validate(birth_date, today).valid
