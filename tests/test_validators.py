"""
Tests for registration payload validation.
"""

import pytest

from auth.schemas import RegistrationRequest
from auth.validators import (
    MSG_INVALID_EMAIL,
    MSG_INVALID_PHONE,
    MSG_PASSWORD_MISMATCH,
    MSG_PASSWORD_TOO_SHORT,
    MSG_REQUIRED,
    normalize_phone,
    validate_registration,
)


def _payload(**overrides) -> RegistrationRequest:
    fields = {
        "username": "alice",
        "email": "a@b.com",
        "password": "secret1",
        "confirmPassword": "secret1",
    }
    fields.update(overrides)
    return RegistrationRequest(**fields)


class TestValidateRegistration:
    def test_valid_payload(self):
        assert validate_registration(_payload()) is None

    def test_valid_payload_with_phone(self):
        assert validate_registration(_payload(phone="+1 (212) 555-0100")) is None

    @pytest.mark.parametrize("field", ["username", "email", "password", "confirmPassword"])
    def test_missing_field(self, field):
        assert validate_registration(_payload(**{field: None})) == MSG_REQUIRED

    @pytest.mark.parametrize("field", ["username", "email", "password", "confirmPassword"])
    def test_empty_field(self, field):
        assert validate_registration(_payload(**{field: ""})) == MSG_REQUIRED

    def test_phone_is_optional(self):
        assert validate_registration(_payload(phone=None)) is None
        assert validate_registration(_payload(phone="")) is None

    @pytest.mark.parametrize(
        "email",
        ["plainaddress", "a@b", "@b.com", "a@.com", "a b@c.com", "a@b@c.com", "a@b.", "a@b.com\n"],
    )
    def test_bad_email(self, email):
        assert validate_registration(_payload(email=email)) == MSG_INVALID_EMAIL

    @pytest.mark.parametrize("email", ["a@b.com", "first.last@sub.example.org", "x+y@d.co"])
    def test_good_email(self, email):
        assert validate_registration(_payload(email=email)) is None

    @pytest.mark.parametrize("phone", ["123456", "555-abc-1234", "1" * 21, "#1234567"])
    def test_bad_phone(self, phone):
        assert validate_registration(_payload(phone=phone)) == MSG_INVALID_PHONE

    def test_password_mismatch(self):
        assert validate_registration(_payload(confirmPassword="secret2")) == MSG_PASSWORD_MISMATCH

    def test_short_password_even_when_confirmed(self):
        result = validate_registration(_payload(password="abc", confirmPassword="abc"))
        assert result == MSG_PASSWORD_TOO_SHORT
        assert result == "Password must be at least 6 characters long"

    def test_first_violation_wins(self):
        # bad email, bad phone, mismatch and short password all at once
        payload = _payload(email="nope", phone="x", password="a", confirmPassword="b")
        assert validate_registration(payload) == MSG_INVALID_EMAIL

    def test_mismatch_reported_before_length(self):
        payload = _payload(password="a", confirmPassword="b")
        assert validate_registration(payload) == MSG_PASSWORD_MISMATCH


class TestNormalizePhone:
    def test_trims(self):
        assert normalize_phone("  555-0100 ") == "555-0100"

    def test_blank_becomes_none(self):
        assert normalize_phone("   ") is None
        assert normalize_phone(None) is None
