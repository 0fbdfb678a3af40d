"""Tests for shared/log_utils.py."""

from shared.log_utils import redact_email


class TestRedactEmail:
    def test_keeps_domain_and_prefix(self):
        assert redact_email("ops@example.com") == "op***@example.com"

    def test_short_local_part(self):
        assert redact_email("a@example.com") == "a***@example.com"

    def test_not_an_email(self):
        assert redact_email("nobody") == "redacted"
