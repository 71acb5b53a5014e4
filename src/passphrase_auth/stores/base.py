"""Base store — abstract interface every OTP persistence backend implements."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class OTPRecord:
    """The current passphrase state for one email address."""

    identity: str
    hashed_secret: bytes
    expires_at: int


class OTPStore(ABC):
    """Durable mapping from an email address to its latest passphrase hash.

    Implementations must give read-your-writes consistency for a single
    identity.  Concurrent upserts for the same identity are last-write-wins.
    """

    @abstractmethod
    async def upsert(self, identity: str, hashed_secret: bytes, expires_at: int) -> None:
        """Insert or replace the record for *identity*."""

    @abstractmethod
    async def fetch(self, identity: str) -> OTPRecord | None:
        """Return the record for *identity*, or ``None`` if none was issued."""
