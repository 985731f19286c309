# This project was developed with assistance from AI tools.
"""Tests for the response envelope builders."""

from kyc_onboarding.schemas.envelope import ApiEnvelope, ErrorCode, failure, success


def test_success_is_ok():
    envelope = success({"status": "uploaded"})
    assert envelope.ok
    assert envelope.error is None


def test_failure_is_not_ok():
    envelope = failure(ErrorCode.MISSING_MEDIA, "Provide a selfie.")
    assert not envelope.ok
    assert envelope.data is None
    assert envelope.error.code == "MISSING_MEDIA"


def test_null_data_without_error_is_not_ok():
    assert not ApiEnvelope(data=None, error=None).ok
