"""
Server-side password hashing.
"""

from __future__ import annotations

import secrets

import bcrypt
from cryptography.hazmat.primitives import constant_time

from passe.common.config import Config
from passe.common.models import PasswordConfig, StoredCredential

_DEFAULTS = Config()


class CredentialStore:
    """Hashes and checks user passwords with bcrypt_pbkdf."""

    def __init__(
        self,
        iterations: int = _DEFAULTS.PASSWORD_ITERATIONS,
        salt_bytes: int = _DEFAULTS.SALT_BYTES,
        hash_bytes: int = _DEFAULTS.HASH_BYTES,
    ):
        self.iterations = iterations
        self.salt_bytes = salt_bytes
        self.hash_bytes = hash_bytes

    @staticmethod
    def _hash(password: str, config: PasswordConfig, key_bytes: int) -> bytes:
        return bcrypt.kdf(
            password=password.encode(),
            salt=config.salt,
            desired_key_bytes=key_bytes,
            rounds=config.iterations,
            ignore_few_rounds=True,
        )

    def create(self, password: str) -> StoredCredential:
        """Hash a new password with a fresh random salt."""
        config = PasswordConfig(
            iterations=self.iterations, salt=secrets.token_bytes(self.salt_bytes)
        )
        return StoredCredential(
            iterations=config.iterations,
            salt=config.salt,
            value=self._hash(password, config, self.hash_bytes),
        )

    def validate(self, credential: StoredCredential, password: str) -> bool:
        """Re-derive with the stored parameters and compare."""
        expected = self._hash(password, credential, len(credential.value))
        return constant_time.bytes_eq(credential.value, expected)
