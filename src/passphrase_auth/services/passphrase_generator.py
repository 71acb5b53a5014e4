"""Passphrase generator — random, human-shareable secrets built from a pattern.

A pattern is a string of tokens:

* ``W``: one word drawn from the dictionary
* ``N``: one random number below 10000

``"WWW"`` therefore yields something like ``gravity-sandpaper-unwound``.
"""

from __future__ import annotations

import logging
import secrets

from xkcdpass import xkcd_password as xp

from passphrase_auth.config import settings
from passphrase_auth.exceptions import GenerationError

logger = logging.getLogger(__name__)

WORD_TOKEN = "W"
NUMBER_TOKEN = "N"
NUMBER_UPPER_BOUND = 10_000

# Word lengths kept short enough to type from an email on a phone.
MIN_WORD_LENGTH = 4
MAX_WORD_LENGTH = 8


class PassphraseGenerator:
    """Generates passphrases from the EFF long word list shipped with xkcdpass.

    The dictionary is loaded lazily on the first call and kept for the
    lifetime of the generator.
    """

    def __init__(
        self,
        pattern: str | None = None,
        separator: str | None = None,
        wordlist: list[str] | None = None,
    ) -> None:
        self._pattern = pattern or settings.passphrase_pattern
        self._separator = settings.passphrase_separator if separator is None else separator
        self._words = wordlist

    def generate(self, pattern: str | None = None) -> str:
        """Return a fresh passphrase for *pattern* (defaults to the configured one).

        Raises ``GenerationError`` if the pattern is unusable or the word list
        or randomness source is unavailable.
        """
        pattern = pattern if pattern is not None else self._pattern
        if not pattern:
            raise GenerationError("Passphrase pattern is empty")

        unknown = sorted(set(pattern) - {WORD_TOKEN, NUMBER_TOKEN})
        if unknown:
            raise GenerationError(
                f"Unknown passphrase pattern token(s): {''.join(unknown)!r}"
            )

        words = self._load_words() if WORD_TOKEN in pattern else []

        try:
            parts = [
                secrets.choice(words)
                if token == WORD_TOKEN
                else str(secrets.randbelow(NUMBER_UPPER_BOUND))
                for token in pattern
            ]
        except (OSError, NotImplementedError) as exc:
            raise GenerationError(f"Randomness source unavailable: {exc}") from exc

        return self._separator.join(parts)

    def _load_words(self) -> list[str]:
        if self._words is None:
            try:
                wordfile = xp.locate_wordfile()
                self._words = xp.generate_wordlist(
                    wordfile=wordfile,
                    min_length=MIN_WORD_LENGTH,
                    max_length=MAX_WORD_LENGTH,
                )
            except (OSError, ValueError) as exc:
                raise GenerationError(f"Word list unavailable: {exc}") from exc
            logger.debug("Loaded %d dictionary words", len(self._words))

        if not self._words:
            raise GenerationError("Word list is empty")
        return self._words
