"""Credential hasher — Argon2id digests for issued passphrases."""

from __future__ import annotations

import hmac

from argon2.low_level import Type, hash_secret_raw

from passphrase_auth.config import settings


class CredentialHasher:
    """Derives and checks fixed-size Argon2id digests.

    The salt is one configured constant shared by every identity, so the
    same plaintext always yields the same digest. Parameters default to
    the configured values (1 pass, 64 MiB, 4 lanes, 32-byte output).
    """

    def __init__(
        self,
        salt: bytes | None = None,
        time_cost: int | None = None,
        memory_cost: int | None = None,
        parallelism: int | None = None,
        hash_len: int | None = None,
    ) -> None:
        self._salt = salt if salt is not None else settings.hash_salt.encode("utf-8")
        self._time_cost = time_cost or settings.argon2_time_cost
        self._memory_cost = memory_cost or settings.argon2_memory_cost_kib
        self._parallelism = parallelism or settings.argon2_parallelism
        self._hash_len = hash_len or settings.argon2_hash_len

    @property
    def digest_size(self) -> int:
        return self._hash_len

    def hash(self, plaintext: str) -> bytes:
        """Return the raw Argon2id digest of *plaintext*."""
        return hash_secret_raw(
            secret=plaintext.encode("utf-8"),
            salt=self._salt,
            time_cost=self._time_cost,
            memory_cost=self._memory_cost,
            parallelism=self._parallelism,
            hash_len=self._hash_len,
            type=Type.ID,
        )

    def verify(self, digest: bytes, plaintext: str) -> bool:
        """Return ``True`` if *plaintext* hashes to *digest*.

        A digest of the wrong length simply fails to match.
        """
        return hmac.compare_digest(self.hash(plaintext), bytes(digest))
