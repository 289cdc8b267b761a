"""
Sync server built on FastAPI.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from passe.common.config import Config
from passe.common.interfaces import IPersistence

from .credentials import CredentialStore
from .domain_store import DomainStore
from .persistence import FsPersistence
from .routes import SyncRoutes
from .services import SyncService
from .session_manager import SessionManager
from .user_database import UserDatabase


class SyncServer:
    """Owns the user database and the FastAPI app serving it."""

    def __init__(
        self,
        config: Config | None = None,
        data_dir: Path | None = None,
        server_host: str | None = None,
        server_port: int | None = None,
        persistence: IPersistence | None = None,
    ):
        self.config = config or Config()
        self.logger = logging.getLogger(__name__)
        self.server_host = server_host or self.config.SERVER_HOST
        self.server_port = server_port or self.config.SERVER_PORT
        self.data_dir = data_dir or self.config.DATA_DIR

        # Initialize components
        self.persistence = persistence or FsPersistence(self.data_dir)
        self.user_database = UserDatabase(
            self.persistence,
            CredentialStore(
                iterations=self.config.PASSWORD_ITERATIONS,
                salt_bytes=self.config.SALT_BYTES,
                hash_bytes=self.config.HASH_BYTES,
            ),
            SessionManager(
                token_ttl=self.config.TOKEN_TTL, token_bytes=self.config.TOKEN_BYTES
            ),
        )
        self.domain_store = DomainStore(self.persistence)
        self.service = SyncService(self.user_database, self.domain_store, self.logger)

        self.app = FastAPI(title="passe", lifespan=self._lifespan)
        SyncRoutes(self.service).setup_routes(self.app)

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI) -> AsyncIterator[None]:
        self.logger.info(
            "Server started on http://%s:%s", self.server_host, self.server_port
        )
        yield
        self.service.shutdown()
