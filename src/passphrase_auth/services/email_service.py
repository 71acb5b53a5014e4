"""Email service — delivers issued passphrases via async SMTP."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from email.message import EmailMessage

import aiosmtplib

from passphrase_auth.config import settings
from passphrase_auth.exceptions import DeliveryError

logger = logging.getLogger(__name__)


class PassphraseDelivery(ABC):
    """Hands a plaintext passphrase to its owner out of band."""

    @abstractmethod
    async def send_passphrase(self, to_email: str, passphrase: str, ttl_minutes: int) -> None:
        """Deliver *passphrase* to *to_email*; raise ``DeliveryError`` on failure."""


class EmailService(PassphraseDelivery):
    """Sends passphrase emails using the configured SMTP server.

    With no ``SMTP_HOST`` configured the message is only logged, which is
    what local development and the simulator rely on.
    """

    async def send_passphrase(self, to_email: str, passphrase: str, ttl_minutes: int) -> None:
        """Send the passphrase email.

        Parameters
        ----------
        to_email:
            Recipient email address.
        passphrase:
            The plaintext passphrase, shown once in the message body.
        ttl_minutes:
            Validity window mentioned to the recipient.
        """
        if not settings.smtp_host:
            logger.warning(
                "SMTP_HOST not set, passphrase for %s logged only: %s", to_email, passphrase
            )
            return

        msg = self.build_message(to_email, passphrase, ttl_minutes)

        logger.info("Sending passphrase email to %s", to_email)
        try:
            await aiosmtplib.send(
                msg,
                hostname=settings.smtp_host,
                port=settings.smtp_port,
                username=settings.smtp_username or None,
                password=settings.smtp_password or None,
                use_tls=settings.smtp_use_tls,
                timeout=settings.smtp_timeout_seconds,
            )
        except (aiosmtplib.SMTPException, OSError) as exc:
            logger.error("Failed to send passphrase email to %s: %s", to_email, exc)
            raise DeliveryError(f"Could not send email: {exc}") from exc

        logger.info("Passphrase email sent to %s", to_email)

    @staticmethod
    def build_message(to_email: str, passphrase: str, ttl_minutes: int) -> EmailMessage:
        notice = f"Don't lose it. Will expire in {ttl_minutes} minutes"

        msg = EmailMessage()
        msg["Subject"] = "Your 2FA code"
        msg["From"] = settings.email_from
        msg["To"] = to_email
        msg.set_content(f"{passphrase} - {notice}.")
        msg.add_alternative(
            f"<!DOCTYPE html><body><h2>{passphrase}</h2><p>{notice}</p></body>",
            subtype="html",
        )
        return msg
