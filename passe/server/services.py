"""Business logic services for the sync server.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from passe.common.models import Authentication

if TYPE_CHECKING:
    import logging

    from passe.common.models import Change, DomainMap, LoginRequest
    from passe.server.domain_store import DomainStore
    from passe.server.user_database import UserDatabase


class SyncService:
    """Handles business logic for the sync server."""

    def __init__(
        self,
        user_database: UserDatabase,
        domain_store: DomainStore,
        logger: logging.Logger,
    ):
        self.user_database = user_database
        self.domain_store = domain_store
        self.logger = logger

    def health(self) -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "timestamp": int(time.time())}

    def register(self, request: LoginRequest) -> Authentication:
        """Handle /register: create the user and log them in."""
        self.user_database.register(request)
        return self.login(request)

    def login(self, request: LoginRequest) -> Authentication:
        """Handle /login endpoint business logic."""
        token = self.user_database.login(request)
        return Authentication(user=request.user, token=token.value)

    def authenticate(self, auth: Authentication) -> str:
        """Validate a bearer credential and return the user name."""
        self.user_database.validate(auth)
        return auth.user

    def domains(self, auth: Authentication) -> DomainMap:
        """Handle GET /db."""
        return self.domain_store.get(self.authenticate(auth))

    def sync(self, auth: Authentication, changes: dict[str, Change]) -> DomainMap:
        """Handle POST /db."""
        return self.domain_store.apply(self.authenticate(auth), changes)

    def shutdown(self) -> None:
        self.logger.info("Flushing user database")
        self.user_database.flush()
