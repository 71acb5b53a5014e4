"""Passphrase login routes.

Endpoints
---------
GET  /             → fresh CSRF token
POST /email        → issue a passphrase and email it      (CSRF-guarded)
POST /passphrase   → redeem a passphrase                  (CSRF-guarded)
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from passphrase_auth.api.csrf import csrf_protection
from passphrase_auth.api.deps import get_clock, get_manager
from passphrase_auth.config import settings
from passphrase_auth.exceptions import InvalidPassphraseError, PassphraseExpiredError
from passphrase_auth.services.otp_manager import (
    Clock,
    OTPLifecycleManager,
    VerificationOutcome,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Request / response models ────────────────────────────

class CSRFTokenResponse(BaseModel):
    csrf: int


class EmailRequest(BaseModel):
    email: str = ""


class PassphraseIssuedResponse(BaseModel):
    passphrase: str


class PassphraseRequest(BaseModel):
    email: str = ""
    passphrase: str = ""


class MessageResponse(BaseModel):
    message: str


# ── Endpoints ────────────────────────────────────────────

@router.get("/", response_model=CSRFTokenResponse)
async def issue_csrf_token(clock: Clock = Depends(get_clock)):
    """Return a token valid for ``CSRF_TTL_SECONDS`` from now (Unix seconds)."""
    return CSRFTokenResponse(csrf=clock() + settings.csrf_ttl_seconds)


@router.post(
    "/email",
    response_model=PassphraseIssuedResponse,
    dependencies=[Depends(csrf_protection)],
)
async def request_passphrase(
    body: EmailRequest, manager: OTPLifecycleManager = Depends(get_manager)
):
    """Issue a passphrase for ``body.email`` and send it there.

    The plaintext is echoed back in the response as well as emailed.
    """
    passphrase = await manager.request_otp(body.email)
    return PassphraseIssuedResponse(passphrase=passphrase)


@router.post(
    "/passphrase",
    response_model=MessageResponse,
    dependencies=[Depends(csrf_protection)],
)
async def submit_passphrase(
    body: PassphraseRequest, manager: OTPLifecycleManager = Depends(get_manager)
):
    """Log in with a previously issued passphrase."""
    outcome = await manager.verify_otp(body.email, body.passphrase)
    if outcome is VerificationOutcome.EXPIRED:
        raise PassphraseExpiredError()
    if outcome is VerificationOutcome.INVALID:
        raise InvalidPassphraseError()
    return MessageResponse(message="Login success")
