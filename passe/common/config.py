"""
Configuration settings for the password generator and sync server.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path


class Config:
    """Central configuration class for all system settings."""

    def __init__(self) -> None:
        # Password derivation
        self.MIN_ROUNDS: int = 10  # Rounds always run before validity checks
        self.MAX_ROUNDS: int = 50  # Give up after this many rounds in total

        # Credentials and sessions
        self.PASSWORD_ITERATIONS: int = 10  # bcrypt_pbkdf rounds for new users
        self.SALT_BYTES: int = 16
        self.HASH_BYTES: int = 128
        self.TOKEN_BYTES: int = 64
        self.TOKEN_TTL: int = 60 * 60 * 24 * 7  # 1 week

        # Server settings
        self.SERVER_HOST: str = os.getenv("PASSE_SERVER_HOST", "127.0.0.1")
        self.SERVER_PORT: int = int(os.getenv("PASSE_SERVER_PORT", "8000"))
        self.DATA_DIR: Path = Path(
            os.getenv("PASSE_DATA_DIR", "~/.config/passe-server")
        ).expanduser()

        # Client settings
        self.SERVER_URL: str = os.getenv(
            "PASSE_SERVER", "http://localhost:8000"
        ).rstrip("/")
        self.CONFIG_PATH: Path = Path(
            os.getenv("PASSE_CONFIG", "~/.config/passe/user.json")
        ).expanduser()
        self.REQUEST_TIMEOUT: int = 10

        # Logging
        level = logging.getLevelName(os.getenv("PASSE_LOG_LEVEL", "INFO").upper())
        # getLevelName returns a "Level X" string for unknown names
        self.LOG_LEVEL: int = level if isinstance(level, int) else logging.INFO
