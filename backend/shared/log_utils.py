"""
Logging helpers shared across modules.

Modules log through ``logging.getLogger(__name__)``; this file only holds
the root configuration and PII redaction used in log lines.
"""

import logging


def configure_logging(debug: bool = False) -> None:
    """Configure the root logger once for the API process."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def redact_email(email: str) -> str:
    """Redact an email address for logging to avoid PII leakage."""
    if "@" not in email:
        return "redacted"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"
