"""
Process-wide user database: credentials and tokens per user.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from passe.common.exceptions import AuthenticationError, ConflictError
from passe.common.models import Authentication, LoginRequest, Token, User

from .credentials import CredentialStore
from .persistence import USERS_FILE, dump_users, load_users
from .session_manager import SessionManager

if TYPE_CHECKING:
    from passe.common.interfaces import IPersistence


class UserDatabase:
    """Registers users, logs them in and validates their tokens.

    Every public method runs under one lock. State is written through the
    persistence collaborator only when it differs from what was last saved.
    """

    def __init__(
        self,
        persistence: IPersistence,
        credential_store: CredentialStore | None = None,
        session_manager: SessionManager | None = None,
    ):
        self.persistence = persistence
        self.credential_store = credential_store or CredentialStore()
        self.session_manager = session_manager or SessionManager()
        self.logger = logging.getLogger(__name__)
        self._lock = threading.Lock()
        self.users: dict[str, User] = load_users(persistence.load(USERS_FILE))
        self._stored_users = self._snapshot()
        self.logger.info("Loaded %d users", len(self.users))

    def _snapshot(self) -> dict[str, User]:
        return {name: user.model_copy(deep=True) for name, user in self.users.items()}

    def _get(self, username: str) -> User:
        user = self.users.get(username)
        if user is None:
            raise AuthenticationError
        return user

    def is_dirty(self) -> bool:
        return self._stored_users != self.users

    def _autosave(self) -> None:
        if self.is_dirty():
            self.persistence.save(USERS_FILE, dump_users(self.users))
            self._stored_users = self._snapshot()

    def register(self, request: LoginRequest) -> None:
        """Create a user; fails if the name is taken."""
        with self._lock:
            if request.user in self.users:
                raise ConflictError
            credential = self.credential_store.create(request.password)
            self.users[request.user] = User(password=credential)
            self.logger.info("Registered user %s", request.user)
            self._autosave()

    def login(self, request: LoginRequest) -> Token:
        """Check the password and issue a new token."""
        with self._lock:
            user = self._get(request.user)
            self.session_manager.expire_stale(user)
            if not self.credential_store.validate(user.password, request.password):
                self.logger.info("Failed login for %s", request.user)
                raise AuthenticationError
            token = self.session_manager.issue(user)
            self._autosave()
            return token

    def validate(self, auth: Authentication) -> None:
        """Raise AuthenticationError unless the token is live for the user."""
        with self._lock:
            user = self._get(auth.user)
            if not self.session_manager.validate(user, auth.token):
                raise AuthenticationError

    def flush(self) -> None:
        """Persist any unsaved state, e.g. tokens swept by validate()."""
        with self._lock:
            self._autosave()
