"""FastAPI dependencies — wire collaborators into route handlers.

Tests replace any of these through ``app.dependency_overrides``.
"""

from fastapi import Depends

from passphrase_auth.database.repository import OTPRepository
from passphrase_auth.services.email_service import EmailService, PassphraseDelivery
from passphrase_auth.services.hasher import CredentialHasher
from passphrase_auth.services.otp_manager import Clock, OTPLifecycleManager, unix_now
from passphrase_auth.services.passphrase_generator import PassphraseGenerator
from passphrase_auth.stores.base import OTPStore

# ── Shared instances (created once, reused across requests) ──
_generator = PassphraseGenerator()
_hasher = CredentialHasher()


def get_clock() -> Clock:
    return unix_now


def get_store() -> OTPStore:
    return OTPRepository()


def get_delivery() -> PassphraseDelivery:
    return EmailService()


def get_manager(
    store: OTPStore = Depends(get_store),
    delivery: PassphraseDelivery = Depends(get_delivery),
    clock: Clock = Depends(get_clock),
) -> OTPLifecycleManager:
    return OTPLifecycleManager(
        store=store,
        delivery=delivery,
        generator=_generator,
        hasher=_hasher,
        clock=clock,
    )
