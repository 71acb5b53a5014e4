"""Exception hierarchy for the passphrase authentication flow.

Every error carries the HTTP status it maps to, so the API layer can render
it without knowing where it was raised.
"""

from __future__ import annotations


class PassphraseAuthError(Exception):
    """Base exception for the service."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


# ── Client errors (400) ──────────────────────────────────


class ClientInputError(PassphraseAuthError):
    """Malformed or missing input, or a credential the caller got wrong."""

    status_code = 400


class CSRFTokenExpiredError(ClientInputError):
    """None of the supplied freshness tokens is still in the future."""

    def __init__(self, message: str = "CSRF Token Expired") -> None:
        super().__init__(message)


class PassphraseExpiredError(ClientInputError):
    def __init__(self, message: str = "The passphrase already expired") -> None:
        super().__init__(message)


class InvalidPassphraseError(ClientInputError):
    def __init__(
        self, message: str = "Invalid passphrase. Did you put the wrong passphrase?"
    ) -> None:
        super().__init__(message)


# ── Server errors (500) ──────────────────────────────────


class ServerError(PassphraseAuthError):
    """Failure inside the service or one of its collaborators."""

    status_code = 500


class GenerationError(ServerError):
    """The word list or the randomness source could not produce a passphrase."""


class StoreError(ServerError):
    """The persistence backend failed."""


class RecordNotFoundError(ServerError):
    """No passphrase has been issued for the requested email."""


class DeliveryError(ServerError):
    """The passphrase could not be handed to the mail transport."""
