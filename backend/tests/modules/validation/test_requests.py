"""Tests for the request models gated by the validation engine."""

from datetime import date

from modules.validation.errors import ErrorCode
from modules.validation.models import ValidationPolicy
from modules.validation.requests import LoginRequest, RegisterRequest, VerifyPhoneRequest

TODAY = date(2025, 1, 15)


class TestRegisterRequest:
    def valid_request(self, **overrides) -> RegisterRequest:
        data = {
            "email": "ada@example.com",
            "password": "Password1!",
            "phone": "+14155552671",
            "name": "Ada Lovelace",
            "birth_date": "1990-12-10",
        }
        data.update(overrides)
        return RegisterRequest(**data)

    def test_valid_request(self):
        outcome = self.valid_request().validate_fields(today=TODAY)
        assert outcome.valid
        assert outcome.errors == []

    def test_empty_request_reports_every_field_in_order(self):
        outcome = RegisterRequest().validate_fields(today=TODAY)
        assert outcome.errors == [
            ErrorCode.NAME_BLANK,
            ErrorCode.EMAIL_NULL,
            ErrorCode.PASSWORD_NULL,
            ErrorCode.PHONE_NULL,
            ErrorCode.DATE_FORMAT,
        ]

    def test_collects_across_fields(self):
        outcome = self.valid_request(email="nope", password="abc").validate_fields(today=TODAY)
        assert outcome.errors == [
            ErrorCode.EMAIL_INVALID,
            ErrorCode.PASSWORD_TOO_SHORT,
            ErrorCode.PASSWORD_UPPER_MISSING,
            ErrorCode.PASSWORD_DIGIT_MISSING,
            ErrorCode.PASSWORD_SPECIAL_MISSING,
        ]

    def test_underage(self):
        outcome = self.valid_request(birth_date="2007-01-16").validate_fields(today=TODAY)
        assert outcome.errors == [ErrorCode.UNDERAGE]

    def test_policy_min_age(self):
        policy = ValidationPolicy(min_age=21)
        outcome = self.valid_request(birth_date="2005-01-15").validate_fields(policy, today=TODAY)
        assert outcome.errors == [ErrorCode.UNDERAGE]

    def test_is_valid(self):
        assert self.valid_request().is_valid()
        assert not RegisterRequest().is_valid()

    def test_is_valid_uses_given_day(self):
        request = self.valid_request(birth_date="2007-01-16")
        assert not request.is_valid(today=TODAY)
        assert request.is_valid(today=date(2025, 1, 16))
        assert not request.is_valid(ValidationPolicy(min_age=21), today=date(2025, 1, 16))


class TestLoginRequest:
    def test_valid(self):
        assert LoginRequest(email="ada@example.com", password="Password1!").is_valid()

    def test_empty_fields_report_independently(self):
        outcome = LoginRequest(email="", password="").validate_fields()
        assert outcome.errors == [ErrorCode.EMAIL_EMPTY, ErrorCode.PASSWORD_EMPTY]

    def test_errors_in_order(self):
        outcome = LoginRequest(email="", password="has space").validate_fields()
        assert outcome.errors == [ErrorCode.EMAIL_EMPTY, ErrorCode.PASSWORD_WHITESPACE]


class TestVerifyPhoneRequest:
    def test_valid(self):
        assert VerifyPhoneRequest(phone="+14155552671", otp="000000").is_valid()

    def test_errors_in_order(self):
        outcome = VerifyPhoneRequest(phone="4155552671", otp="12345").validate_fields()
        assert outcome.errors == [ErrorCode.PHONE_PLUS_MISSING, ErrorCode.OTP_WRONG_LENGTH]

    def test_policy_otp_length(self):
        policy = ValidationPolicy(otp_min_length=4, otp_max_length=4)
        request = VerifyPhoneRequest(phone="+14155552671", otp="1234")
        assert request.is_valid(policy)
        assert not request.is_valid()
