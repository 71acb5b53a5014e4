"""In-memory OTP store — used by the simulator and the test-suite."""

from __future__ import annotations

import logging

from passphrase_auth.stores.base import OTPRecord, OTPStore

logger = logging.getLogger(__name__)


class InMemoryOTPStore(OTPStore):
    """Process-local OTP store.

    Each entry maps ``email → OTPRecord``.  Nothing is purged: expired
    records stay until the next issuance overwrites them.
    """

    def __init__(self) -> None:
        self._store: dict[str, OTPRecord] = {}

    async def upsert(self, identity: str, hashed_secret: bytes, expires_at: int) -> None:
        self._store[identity] = OTPRecord(
            identity=identity, hashed_secret=bytes(hashed_secret), expires_at=expires_at
        )
        logger.debug("Stored passphrase hash for %s (expires at %d)", identity, expires_at)

    async def fetch(self, identity: str) -> OTPRecord | None:
        return self._store.get(identity)

    def __len__(self) -> int:
        return len(self._store)
