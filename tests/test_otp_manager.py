"""Tests for the OTPLifecycleManager — issuance, redemption and expiry."""

from __future__ import annotations

import pytest

from passphrase_auth.exceptions import (
    ClientInputError,
    DeliveryError,
    GenerationError,
    RecordNotFoundError,
)
from passphrase_auth.services.otp_manager import OTPLifecycleManager, VerificationOutcome
from passphrase_auth.services.passphrase_generator import PassphraseGenerator

ALICE = "alice@example.com"


# ──────────────────────────────────────────────────────────
# Issuance
# ──────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_issue_stores_hash_with_thirty_minute_expiry(manager, store, hasher):
    passphrase = await manager.request_otp(ALICE)

    record = await store.fetch(ALICE)
    assert record is not None
    assert record.expires_at == 1000 + 1800
    assert record.hashed_secret != passphrase.encode()
    assert record.hashed_secret == hasher.hash(passphrase)


@pytest.mark.asyncio
async def test_issue_delivers_plaintext_and_returns_it(manager, delivery):
    passphrase = await manager.request_otp(ALICE)

    assert len(passphrase.split("-")) == 3
    delivery.send_passphrase.assert_awaited_once_with(ALICE, passphrase, 30)


@pytest.mark.asyncio
async def test_second_issuance_overwrites_first(store, delivery, clock, hasher):
    def manager_for(word: str) -> OTPLifecycleManager:
        return OTPLifecycleManager(
            store=store,
            delivery=delivery,
            generator=PassphraseGenerator(pattern="W", wordlist=[word]),
            hasher=hasher,
            clock=clock,
            ttl_seconds=1800,
        )

    first = await manager_for("anchor").request_otp(ALICE)
    first_record = await store.fetch(ALICE)

    clock.now = 1200
    second_manager = manager_for("bramble")
    second = await second_manager.request_otp(ALICE)
    record = await store.fetch(ALICE)

    assert (first, second) == ("anchor", "bramble")
    assert len(store) == 1
    assert record.expires_at == 1200 + 1800
    assert record.hashed_secret == hasher.hash("bramble")
    assert record.hashed_secret != first_record.hashed_secret
    assert await second_manager.verify_otp(ALICE, "anchor") is VerificationOutcome.INVALID
    assert await second_manager.verify_otp(ALICE, "bramble") is VerificationOutcome.SUCCESS


@pytest.mark.asyncio
@pytest.mark.parametrize("identity", ["", "   ", "not-an-email", "alice@", "@example.com"])
async def test_invalid_email_is_client_error(manager, store, delivery, identity):
    with pytest.raises(ClientInputError) as exc_info:
        await manager.request_otp(identity)

    assert exc_info.value.status_code == 400
    assert len(store) == 0
    delivery.send_passphrase.assert_not_called()


@pytest.mark.asyncio
async def test_generation_failure_is_server_error(store, delivery, hasher, clock):
    manager = OTPLifecycleManager(
        store=store,
        delivery=delivery,
        generator=PassphraseGenerator(pattern="WWW", wordlist=[]),
        hasher=hasher,
        clock=clock,
    )

    with pytest.raises(GenerationError) as exc_info:
        await manager.request_otp(ALICE)

    assert exc_info.value.status_code == 500
    assert len(store) == 0
    delivery.send_passphrase.assert_not_called()


@pytest.mark.asyncio
async def test_delivery_failure_keeps_stored_passphrase(store, delivery, hasher, clock):
    delivery.send_passphrase.side_effect = DeliveryError("Could not send email: refused")
    manager = OTPLifecycleManager(
        store=store,
        delivery=delivery,
        generator=PassphraseGenerator(pattern="WW", separator="-", wordlist=["anchor"]),
        hasher=hasher,
        clock=clock,
        ttl_seconds=1800,
    )

    with pytest.raises(DeliveryError):
        await manager.request_otp(ALICE)

    # Issued but undelivered: a correct guess still logs in.
    assert await store.fetch(ALICE) is not None
    outcome = await manager.verify_otp(ALICE, "anchor-anchor")
    assert outcome is VerificationOutcome.SUCCESS


# ──────────────────────────────────────────────────────────
# Redemption
# ──────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_end_to_end_scenario(manager, store, clock):
    passphrase = await manager.request_otp(ALICE)
    assert (await store.fetch(ALICE)).expires_at == 2800

    clock.now = 1500
    assert await manager.verify_otp(ALICE, passphrase) is VerificationOutcome.SUCCESS
    # Replay before expiry is still accepted
    assert await manager.verify_otp(ALICE, passphrase) is VerificationOutcome.SUCCESS

    clock.now = 2801
    assert await manager.verify_otp(ALICE, passphrase) is VerificationOutcome.EXPIRED


@pytest.mark.asyncio
async def test_expiry_boundary(manager, store, clock, hasher):
    await store.upsert(ALICE, hasher.hash("anchor-bramble-cobalt"), 5000)

    clock.now = 4999
    assert await manager.verify_otp(ALICE, "anchor-bramble-cobalt") is VerificationOutcome.SUCCESS

    clock.now = 5000
    assert await manager.verify_otp(ALICE, "anchor-bramble-cobalt") is VerificationOutcome.EXPIRED
    assert await manager.verify_otp(ALICE, "wrong") is VerificationOutcome.EXPIRED


@pytest.mark.asyncio
async def test_wrong_passphrase_is_invalid(manager):
    await manager.request_otp(ALICE)
    outcome = await manager.verify_otp(ALICE, "definitely-not-it")
    assert outcome is VerificationOutcome.INVALID


@pytest.mark.asyncio
async def test_empty_passphrase_is_client_error(manager, store, hasher):
    with pytest.raises(ClientInputError, match="No passphrase was sent"):
        await manager.verify_otp(ALICE, "")

    await store.upsert(ALICE, hasher.hash("anchor"), 99_999)
    with pytest.raises(ClientInputError, match="No passphrase was sent"):
        await manager.verify_otp(ALICE, "")


@pytest.mark.asyncio
async def test_unknown_identity_is_server_error(manager):
    with pytest.raises(RecordNotFoundError) as exc_info:
        await manager.verify_otp("nobody@example.com", "anchor-bramble-cobalt")
    assert exc_info.value.status_code == 500
