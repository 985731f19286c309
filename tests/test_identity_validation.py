# This project was developed with assistance from AI tools.
"""Tests for identity step field validation and formatting helpers."""

from datetime import date

from kyc_onboarding.schemas.identity import IdentityForm
from kyc_onboarding.services.identity_validation import (
    format_full_name,
    format_physical_address,
    is_identity_valid,
    validate_identity,
)

TODAY = date(2026, 10, 19)


def _errors(identity: IdentityForm, **changes) -> dict[str, str]:
    return validate_identity(identity.model_copy(update=changes), today=TODAY)


class TestRequiredFields:
    def test_valid_identity_has_no_errors(self, identity):
        assert validate_identity(identity, today=TODAY) == {}
        assert is_identity_valid(identity, today=TODAY)

    def test_empty_form_reports_every_required_field(self):
        errors = validate_identity(IdentityForm(), today=TODAY)
        assert set(errors) == {
            "first_name",
            "last_name",
            "email",
            "phone",
            "dob",
            "gender",
            "address_street",
            "address_city",
            "address_region",
            "address_postal_code",
            "address_country",
        }

    def test_middle_name_is_optional(self, identity):
        assert "middle_name" not in _errors(identity, middle_name="")

    def test_whitespace_counts_as_missing(self, identity):
        assert _errors(identity, first_name="   ") == {"first_name": "First name is required."}

    def test_region_message(self, identity):
        assert _errors(identity, address_region="") == {
            "address_region": "State/Province is required."
        }


class TestNames:
    def test_name_too_long(self, identity):
        errors = _errors(identity, last_name="x" * 81)
        assert errors == {"last_name": "Last name is too long."}

    def test_name_at_limit_accepted(self, identity):
        assert _errors(identity, first_name="x" * 80) == {}

    def test_long_middle_name_rejected(self, identity):
        assert "middle_name" in _errors(identity, middle_name="y" * 81)

    def test_street_too_long(self, identity):
        assert _errors(identity, address_street="s" * 121) == {
            "address_street": "Street address is too long."
        }


class TestEmail:
    def test_rejects_missing_at(self, identity):
        assert _errors(identity, email="ada.example.com") == {
            "email": "Enter a valid email address."
        }

    def test_rejects_missing_tld(self, identity):
        assert "email" in _errors(identity, email="ada@example")

    def test_rejects_inner_whitespace(self, identity):
        assert "email" in _errors(identity, email="ada lovelace@example.com")

    def test_surrounding_whitespace_ignored(self, identity):
        assert _errors(identity, email="  ada@example.com ") == {}


class TestPhone:
    def test_formatting_characters_ignored(self, identity):
        assert _errors(identity, phone="(415) 555-0100") == {}

    def test_too_few_digits(self, identity):
        assert _errors(identity, phone="555-010") == {"phone": "Enter a valid phone number."}

    def test_seven_digits_accepted(self, identity):
        assert _errors(identity, phone="555-0100") == {}

    def test_too_many_digits(self, identity):
        assert "phone" in _errors(identity, phone="+1 234 567 890 123 456")


class TestDOB:
    def test_future_date(self, identity):
        assert _errors(identity, dob="2026-10-20") == {
            "dob": "Date of birth cannot be in the future."
        }

    def test_today_accepted(self, identity):
        assert _errors(identity, dob="2026-10-19") == {}

    def test_non_iso_format(self, identity):
        assert _errors(identity, dob="10/12/1990") == {"dob": "Enter a valid date of birth."}

    def test_impossible_calendar_date(self, identity):
        assert _errors(identity, dob="2001-02-30") == {"dob": "Enter a valid date of birth."}

    def test_older_than_130_years(self, identity):
        assert _errors(identity, dob="1896-10-18") == {"dob": "Enter a valid date of birth."}

    def test_exactly_130_years_accepted(self, identity):
        assert _errors(identity, dob="1896-10-19") == {}

    def test_leap_day_reference(self, identity):
        errors = validate_identity(
            identity.model_copy(update={"dob": "1898-02-28"}), today=date(2028, 2, 29)
        )
        assert errors == {}


class TestPostalCode:
    def test_too_short(self, identity):
        assert _errors(identity, address_postal_code="12") == {
            "address_postal_code": "Enter a valid postal code."
        }

    def test_too_long(self, identity):
        assert "address_postal_code" in _errors(identity, address_postal_code="1" * 21)

    def test_alphanumeric_accepted(self, identity):
        assert _errors(identity, address_postal_code="V6B 1A1") == {}


class TestFormatting:
    def test_full_name_with_middle(self, identity):
        assert format_full_name(identity) == "Ada King Lovelace"

    def test_full_name_skips_blank_middle(self, identity):
        assert format_full_name(identity.model_copy(update={"middle_name": " "})) == "Ada Lovelace"

    def test_physical_address(self, identity):
        assert (
            format_physical_address(identity)
            == "1 Analytical Way, San Francisco, CA, 94105, US"
        )

    def test_physical_address_skips_blanks(self):
        form = IdentityForm(address_city="Austin", address_country="US")
        assert format_physical_address(form) == "Austin, US"
