# This project was developed with assistance from AI tools.
"""Tests for PII masking utilities."""

from kyc_onboarding.services.pii import mask_dob, mask_email, mask_phone, mask_pii


class TestMaskEmail:
    def test_standard(self):
        assert mask_email("ada@example.com") == "a***@example.com"

    def test_no_at_sign(self):
        assert mask_email("not-an-email") == "***"

    def test_none(self):
        assert mask_email(None) is None


class TestMaskPhone:
    def test_keeps_last_four_digits(self):
        assert mask_phone("+1 (415) 555-0100") == "***-0100"

    def test_short(self):
        assert mask_phone("12") == "***-****"


class TestMaskDob:
    def test_keeps_year(self):
        assert mask_dob("1990-12-10") == "1990-**-**"

    def test_unparseable(self):
        assert mask_dob("unknown") == "****-**-**"


class TestMaskPii:
    def test_masks_known_keys(self):
        masked = mask_pii(
            {"applicantId": "app_1", "email": "ada@example.com", "phone": "4155550100"}
        )
        assert masked == {
            "applicantId": "app_1",
            "email": "a***@example.com",
            "phone": "***-0100",
        }

    def test_walks_nested_structures(self):
        masked = mask_pii({"events": [{"dateOfBirth": "1990-12-10"}], "count": 1})
        assert masked == {"events": [{"dateOfBirth": "1990-**-**"}], "count": 1}

    def test_non_string_values_untouched(self):
        assert mask_pii({"email": ["a@b.co"]}) == {"email": ["a@b.co"]}

    def test_input_not_mutated(self):
        event = {"email": "ada@example.com"}
        mask_pii(event)
        assert event == {"email": "ada@example.com"}
