"""Shared fixtures — fake clock, in-memory store, mocked delivery."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from passphrase_auth.services.email_service import EmailService
from passphrase_auth.services.hasher import CredentialHasher
from passphrase_auth.services.otp_manager import OTPLifecycleManager
from passphrase_auth.services.passphrase_generator import PassphraseGenerator
from passphrase_auth.stores.memory import InMemoryOTPStore

TEST_WORDS = ["anchor", "bramble", "cobalt", "driftwood", "ember", "fjord", "gossamer"]


class FakeClock:
    """Callable clock frozen at ``now`` (Unix seconds) until moved."""

    def __init__(self, now: int = 1000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def clock():
    return FakeClock(1000)


@pytest.fixture
def store():
    return InMemoryOTPStore()


@pytest.fixture
def delivery():
    """Mocked email service — never actually sends emails."""
    svc = EmailService()
    svc.send_passphrase = AsyncMock()
    return svc


@pytest.fixture(scope="session")
def hasher():
    return CredentialHasher()


@pytest.fixture
def generator():
    return PassphraseGenerator(pattern="WWW", separator="-", wordlist=TEST_WORDS)


@pytest.fixture
def manager(store, delivery, generator, hasher, clock):
    return OTPLifecycleManager(
        store=store,
        delivery=delivery,
        generator=generator,
        hasher=hasher,
        clock=clock,
        ttl_seconds=1800,
    )
