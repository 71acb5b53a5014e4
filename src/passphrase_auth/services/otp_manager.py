"""OTP lifecycle manager — issues and redeems one-time passphrases.

Issuance:   validate email → generate → hash → upsert with expiry → deliver
Redemption: fetch hash + expiry → check expiry → verify → outcome

A redeemed passphrase is not consumed; it keeps working until it expires
or a newer one is issued for the same email.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from enum import Enum

from email_validator import EmailNotValidError, validate_email

from passphrase_auth.config import settings
from passphrase_auth.exceptions import ClientInputError, RecordNotFoundError
from passphrase_auth.services.email_service import PassphraseDelivery
from passphrase_auth.services.hasher import CredentialHasher
from passphrase_auth.services.passphrase_generator import PassphraseGenerator
from passphrase_auth.stores.base import OTPStore

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def unix_now() -> int:
    """Current time as whole Unix seconds."""
    return int(time.time())


class VerificationOutcome(str, Enum):
    SUCCESS = "success"
    EXPIRED = "expired"
    INVALID = "invalid"


class OTPLifecycleManager:
    """Orchestrates passphrase issuance and redemption for one request.

    All collaborators are injected; the manager itself holds no state
    between calls.
    """

    def __init__(
        self,
        store: OTPStore,
        delivery: PassphraseDelivery,
        generator: PassphraseGenerator | None = None,
        hasher: CredentialHasher | None = None,
        clock: Clock = unix_now,
        ttl_seconds: int | None = None,
    ) -> None:
        self._store = store
        self._delivery = delivery
        self._generator = generator or PassphraseGenerator()
        self._hasher = hasher or CredentialHasher()
        self._clock = clock
        self._ttl = ttl_seconds if ttl_seconds is not None else settings.passphrase_ttl_seconds

    async def request_otp(self, identity: str) -> str:
        """Issue a new passphrase for *identity* and return its plaintext.

        The stored record is not rolled back if delivery fails, so an
        issued-but-undelivered passphrase can exist.
        """
        email = self._validate_identity(identity)

        passphrase = self._generator.generate()
        digest = await asyncio.to_thread(self._hasher.hash, passphrase)
        expires_at = self._clock() + self._ttl

        await self._store.upsert(email, digest, expires_at)
        logger.info("Passphrase issued for %s, valid until %d", email, expires_at)

        await self._delivery.send_passphrase(email, passphrase, self._ttl // 60)
        return passphrase

    async def verify_otp(self, identity: str, candidate: str) -> VerificationOutcome:
        """Check *candidate* against the passphrase last issued to *identity*."""
        if not candidate:
            raise ClientInputError("No passphrase was sent")

        email = (identity or "").strip()
        record = await self._store.fetch(email)
        if record is None:
            raise RecordNotFoundError(f"No passphrase was issued for {email!r}")

        if self._clock() >= record.expires_at:
            logger.info("Expired passphrase submitted for %s", email)
            return VerificationOutcome.EXPIRED

        matched = await asyncio.to_thread(
            self._hasher.verify, record.hashed_secret, candidate
        )
        if not matched:
            logger.info("Invalid passphrase submitted for %s", email)
            return VerificationOutcome.INVALID

        logger.info("Passphrase verified for %s", email)
        return VerificationOutcome.SUCCESS

    @staticmethod
    def _validate_identity(identity: str) -> str:
        email = (identity or "").strip()
        if not email:
            raise ClientInputError("No email was sent")
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ClientInputError(f"Invalid email address: {exc}") from exc
        return email
