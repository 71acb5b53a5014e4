"""Freshness guard — rejects requests whose CSRF token has lapsed.

A token is a Unix timestamp (seconds) meaning "valid until".  It may arrive
in the JSON body as ``_csrf`` or in either the ``csrf-token`` or
``xsrf-token`` header; the request passes if any of them is still in the
future.  Tokens are not stored or consumed, so one can be replayed until
it lapses.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Any

from fastapi import Depends, Request

from passphrase_auth.api.deps import get_clock
from passphrase_auth.exceptions import CSRFTokenExpiredError
from passphrase_auth.services.otp_manager import Clock

logger = logging.getLogger(__name__)

CSRF_BODY_FIELD = "_csrf"
CSRF_HEADERS = ("csrf-token", "xsrf-token")
_INTEGER_TOKEN = re.compile(r"[+-]?[0-9]+")


def parse_token(value: Any) -> int:
    """Interpret *value* as an integer timestamp; anything else is ``0``.

    Only JSON integers and plain decimal strings count: no whitespace,
    underscores, or fractional parts.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER_TOKEN.fullmatch(value):
        return int(value)
    return 0


def is_fresh(tokens: Iterable[Any], now: int) -> bool:
    """Return ``True`` if any token is strictly later than *now*."""
    return any(parse_token(token) > now for token in tokens)


async def collect_tokens(request: Request) -> list[Any]:
    """Gather the body token followed by the two header tokens."""
    body_token = None
    try:
        body = await request.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        body_token = body.get(CSRF_BODY_FIELD)

    return [body_token, *(request.headers.get(name) for name in CSRF_HEADERS)]


async def csrf_protection(request: Request, clock: Clock = Depends(get_clock)) -> None:
    """Route dependency: raise ``CSRFTokenExpiredError`` unless a token is fresh."""
    tokens = await collect_tokens(request)
    if not is_fresh(tokens, clock()):
        logger.warning("Rejected %s %s: CSRF token expired", request.method, request.url.path)
        raise CSRFTokenExpiredError()
