"""
OTP delivery channels.
"""

import logging

from shared.log_utils import redact_email

from .interfaces import IOTPDelivery

logger = logging.getLogger(__name__)


class LoggingOTPDelivery(IOTPDelivery):
    """
    Development channel: writes the code to the application log.

    Replace with a mail-backed channel in deployments that send email.
    """

    async def deliver(self, email: str, code: str) -> bool:
        logger.info(f"OTP for {redact_email(email)}: {code}")
        return True
