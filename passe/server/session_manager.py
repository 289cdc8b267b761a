"""
Bearer token management for sync users.
"""

from __future__ import annotations

import base64
import secrets
import time
from typing import Callable

from cryptography.hazmat.primitives import constant_time

from passe.common.config import Config
from passe.common.models import Token, User

_DEFAULTS = Config()


class SessionManager:
    """Issues, expires and validates a user's tokens.

    Tokens live in ``User.tokens``; callers must hold the lock guarding the
    user while calling any method here.
    """

    def __init__(
        self,
        token_ttl: int = _DEFAULTS.TOKEN_TTL,
        token_bytes: int = _DEFAULTS.TOKEN_BYTES,
        clock: Callable[[], float] = time.time,
    ):
        self.token_ttl = token_ttl
        self.token_bytes = token_bytes
        self.clock = clock

    def now(self) -> int:
        return int(self.clock())

    def issue(self, user: User) -> Token:
        """Create a token, append it to the user and return it."""
        value = base64.b64encode(secrets.token_bytes(self.token_bytes)).decode()
        token = Token(value=value, expires=self.now() + self.token_ttl)
        user.tokens.append(token)
        return token

    def expire_stale(self, user: User) -> None:
        """Drop expired tokens from the user in place."""
        now = self.now()
        user.tokens[:] = [tok for tok in user.tokens if tok.expires > now]

    def validate(self, user: User, token_value: str) -> bool:
        """Check a presented token against the user's live tokens."""
        self.expire_stale(user)
        presented = token_value.encode()
        return any(
            constant_time.bytes_eq(tok.value.encode(), presented) for tok in user.tokens
        )
