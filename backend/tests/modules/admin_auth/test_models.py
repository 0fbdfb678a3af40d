"""Tests for admin auth models."""

import pytest
from datetime import datetime, timedelta, timezone
from pydantic import ValidationError

from modules.admin_auth.models import (
    AdminRole,
    EmailSubmission,
    OTPRecord,
    OTPSubmission,
)


NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class TestOTPRecord:
    def test_not_expired_at_expiry_instant(self):
        record = OTPRecord(email="ops@example.com", code="123456", expires_at=NOW)
        assert not record.is_expired(NOW)

    def test_expired_after_expiry(self):
        record = OTPRecord(email="ops@example.com", code="123456", expires_at=NOW)
        assert record.is_expired(NOW + timedelta(seconds=1))


class TestAdminRole:
    def test_values(self):
        assert {r.value for r in AdminRole} == {"super_admin", "sales", "support"}


class TestRequestBodies:
    def test_email_submission_validates_format(self):
        assert EmailSubmission(email="ops@example.com").email == "ops@example.com"
        with pytest.raises(ValidationError):
            EmailSubmission(email="not-an-email")

    def test_otp_submission_requires_six_characters(self):
        assert OTPSubmission(otp="123456").otp == "123456"
        with pytest.raises(ValidationError):
            OTPSubmission(otp="12345")
        with pytest.raises(ValidationError):
            OTPSubmission(otp="1234567")
