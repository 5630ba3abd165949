"""Tests for the field validators."""

import pytest
from datetime import date

from modules.validation.errors import ErrorCode
from modules.validation.validators import (
    AgeValidator,
    EmailValidator,
    OTPValidator,
    PasswordValidator,
    PhoneValidator,
)


class TestEmailValidator:
    @pytest.mark.parametrize("email", [
        "user@example.com",
        "first.last@sub.example.org",
        "USER+tag@Example.COM",
        "o'brien@example.ie",
    ])
    def test_valid_emails(self, email):
        assert EmailValidator().is_valid(email)

    def test_null(self):
        assert EmailValidator().validate(None).errors == [ErrorCode.EMAIL_NULL]

    def test_empty(self):
        assert EmailValidator().validate("").errors == [ErrorCode.EMAIL_EMPTY]

    @pytest.mark.parametrize("email", [
        "plainaddress",
        "user@",
        "@example.com",
        "a b@example.com",
        "user@exam_ple.com",
        "user@@example.com",
    ])
    def test_invalid_format(self, email):
        outcome = EmailValidator().validate(email)
        assert not outcome.valid
        assert outcome.errors == [ErrorCode.EMAIL_INVALID]


class TestPasswordValidator:
    def test_strong_password(self):
        outcome = PasswordValidator().validate("Password1!")
        assert outcome.valid
        assert outcome.errors == []

    def test_backslash_counts_as_special(self):
        assert PasswordValidator().validate("Password1\\").valid
        assert "\\" in PasswordValidator.SPECIAL_CHARS

    def test_null(self):
        assert PasswordValidator().validate(None).errors == [ErrorCode.PASSWORD_NULL]

    def test_empty(self):
        assert PasswordValidator().validate("").errors == [ErrorCode.PASSWORD_EMPTY]

    def test_whitespace_short_circuits(self):
        """Whitespace is reported alone, without the strength rules."""
        assert PasswordValidator().validate("a b").errors == [ErrorCode.PASSWORD_WHITESPACE]

    def test_reports_every_failed_strength_rule(self):
        outcome = PasswordValidator().validate("abc")
        assert outcome.errors == [
            ErrorCode.PASSWORD_TOO_SHORT,
            ErrorCode.PASSWORD_UPPER_MISSING,
            ErrorCode.PASSWORD_DIGIT_MISSING,
            ErrorCode.PASSWORD_SPECIAL_MISSING,
        ]

    def test_missing_lower_only(self):
        assert PasswordValidator().validate("PASSWORD1!").errors == [
            ErrorCode.PASSWORD_LOWER_MISSING
        ]

    def test_exact_minimum_length(self):
        assert PasswordValidator().is_valid("Abcdef1!")
        assert PasswordValidator().validate("Abcde1!").errors == [ErrorCode.PASSWORD_TOO_SHORT]

    def test_requirements_describe_every_rule(self):
        requirements = PasswordValidator.requirements()
        assert len(requirements) == 5
        assert "8" in requirements[0]


class TestPhoneValidator:
    @pytest.mark.parametrize("phone", ["+14155552671", "+442071838750", "+1"])
    def test_valid_numbers(self, phone):
        assert PhoneValidator().is_valid(phone)

    def test_null(self):
        assert PhoneValidator().validate(None).errors == [ErrorCode.PHONE_NULL]

    def test_empty(self):
        assert PhoneValidator().validate("").errors == [ErrorCode.PHONE_EMPTY]

    def test_plus_alone_is_empty(self):
        assert PhoneValidator().validate("+").errors == [ErrorCode.PHONE_EMPTY]

    def test_missing_plus(self):
        assert PhoneValidator().validate("14155552671").errors == [ErrorCode.PHONE_PLUS_MISSING]

    def test_leading_zero(self):
        assert PhoneValidator().validate("+0123").errors == [ErrorCode.PHONE_LEADING_ZERO]

    def test_non_digits(self):
        assert PhoneValidator().validate("+1415-555").errors == [ErrorCode.PHONE_NON_DIGITS]

    def test_too_long_with_leading_zero_reports_both(self):
        outcome = PhoneValidator().validate("+0" + "1" * 15)
        assert outcome.errors == [ErrorCode.PHONE_LEADING_ZERO, ErrorCode.PHONE_TOO_LONG]

    def test_max_digits_boundary(self):
        assert PhoneValidator().is_valid("+1" + "2" * 14)
        assert PhoneValidator().validate("+1" + "2" * 15).errors == [ErrorCode.PHONE_TOO_LONG]

    def test_min_digits_policy(self):
        validator = PhoneValidator(min_digits=8, max_digits=15)
        assert validator.validate("+1234").errors == [ErrorCode.PHONE_TOO_SHORT]

    def test_non_ascii_digits_rejected(self):
        assert PhoneValidator().validate("+١٢٣").errors == [ErrorCode.PHONE_NON_DIGITS]

    def test_normalize_strips_formatting(self):
        assert PhoneValidator.normalize("+1 (415) 555-2671") == "+14155552671"
        assert PhoneValidator.normalize("+44.20.7183.8750") == "+442071838750"
        assert PhoneValidator.normalize(None) is None

    def test_format_info_mentions_bounds(self):
        assert "1-15" in PhoneValidator().format_info()


class TestOTPValidator:
    @pytest.mark.parametrize("otp", ["123456", "000000"])
    def test_valid_codes(self, otp):
        assert OTPValidator().is_valid(otp)

    @pytest.mark.parametrize("otp", [None, "", "   "])
    def test_blank(self, otp):
        assert OTPValidator().validate(otp).errors == [ErrorCode.OTP_BLANK]

    def test_wrong_length(self):
        assert OTPValidator().validate("12345").errors == [ErrorCode.OTP_WRONG_LENGTH]
        assert OTPValidator().validate("1234567").errors == [ErrorCode.OTP_WRONG_LENGTH]

    def test_non_digits(self):
        assert OTPValidator().validate("12a456").errors == [ErrorCode.OTP_NON_DIGITS]

    def test_non_digits_and_wrong_length(self):
        assert OTPValidator().validate("12a45").errors == [
            ErrorCode.OTP_NON_DIGITS,
            ErrorCode.OTP_WRONG_LENGTH,
        ]

    def test_non_ascii_digits_rejected(self):
        assert OTPValidator().validate("١٢٣٤٥٦").errors == [ErrorCode.OTP_NON_DIGITS]

    def test_length_range(self):
        validator = OTPValidator(min_length=4, max_length=8)
        assert validator.is_valid("1234")
        assert validator.is_valid("12345678")
        assert not validator.is_valid("123")


class TestAgeValidator:
    TODAY = date(2025, 1, 15)

    def test_exactly_min_age_is_valid(self):
        assert AgeValidator().validate("2007-01-15", today=self.TODAY).valid

    def test_one_day_short_is_underage(self):
        outcome = AgeValidator().validate("2007-01-16", today=self.TODAY)
        assert outcome.errors == [ErrorCode.UNDERAGE]

    def test_accepts_date_objects(self):
        assert AgeValidator().is_valid(date(1990, 6, 1), today=self.TODAY)

    @pytest.mark.parametrize("value", [None, "", "15/01/2007", "2007-02-30", "not-a-date", 20070115])
    def test_unparseable_dates(self, value):
        assert AgeValidator().validate(value, today=self.TODAY).errors == [ErrorCode.DATE_FORMAT]

    def test_custom_min_age(self):
        validator = AgeValidator(min_age=21)
        assert validator.validate("2005-01-15", today=self.TODAY).errors == [ErrorCode.UNDERAGE]

    def test_age_on_counts_whole_years(self):
        assert AgeValidator.age_on(date(2000, 1, 16), self.TODAY) == 24
        assert AgeValidator.age_on(date(2000, 1, 15), self.TODAY) == 25

    def test_leap_day_birthday_in_non_leap_year(self):
        leap_born = date(2008, 2, 29)
        assert AgeValidator.age_on(leap_born, date(2026, 2, 28)) == 17
        assert AgeValidator.age_on(leap_born, date(2026, 3, 1)) == 18
        assert AgeValidator.age_on(leap_born, date(2028, 2, 29)) == 20
        assert AgeValidator().validate("2008-02-29", today=date(2026, 2, 28)).errors == [ErrorCode.UNDERAGE]
        assert AgeValidator().is_valid("2008-02-29", today=date(2026, 3, 1))
