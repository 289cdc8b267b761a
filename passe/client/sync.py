"""
Synchronization of the client config with the sync server.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import requests
from pydantic import TypeAdapter
from pydantic import ValidationError as ModelValidationError

from passe.common.config import Config
from passe.common.exceptions import (
    AuthenticationError,
    ConflictError,
    TransportError,
)
from passe.common.models import Authentication, DomainConfig, DomainMap, dump_changes

if TYPE_CHECKING:
    from passe.client.config_store import ConfigStore
    from passe.common.interfaces import ICredentialPrompt
    from passe.common.models import LoginRequest

HTTP_UNAUTHORIZED = 401
HTTP_CONFLICT = 409

_domain_map = TypeAdapter(dict[str, DomainConfig])

logger = logging.getLogger(__name__)


class SyncClient:
    """Talks to the sync server on behalf of a ConfigStore.

    A cached credential is tried first. If the server answers 401 the user
    is prompted, logged in, and the request is retried exactly once.
    """

    def __init__(
        self,
        store: ConfigStore,
        prompt: ICredentialPrompt,
        server_url: str | None = None,
        timeout: int | None = None,
    ):
        config = Config()
        self.store = store
        self.prompt = prompt
        self.server_url = (server_url or config.SERVER_URL).rstrip("/")
        self.timeout = timeout or config.REQUEST_TIMEOUT

    def url(self, path: str) -> str:
        return f"{self.server_url}/{path}"

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as err:
            msg = f"Bad response from server: {err}"
            raise TransportError(msg) from err

    def _post(self, path: str, **kwargs: Any) -> requests.Response:
        try:
            return requests.post(self.url(path), timeout=self.timeout, **kwargs)
        except requests.RequestException as err:
            msg = f"Request to {self.url(path)} failed: {err}"
            raise TransportError(msg) from err

    def _credentials_request(self, path: str, request: LoginRequest) -> Authentication:
        response = self._post(path, json=request.model_dump())
        if response.status_code == HTTP_UNAUTHORIZED:
            raise AuthenticationError
        if response.status_code == HTTP_CONFLICT:
            raise ConflictError(f"User {request.user} already exists")
        try:
            return Authentication.model_validate(self._json(response))
        except ModelValidationError as err:
            msg = f"Bad {path} response: {err}"
            raise TransportError(msg) from err

    def login(self, request: LoginRequest) -> Authentication:
        """Exchange a user name and password for a bearer credential."""
        logger.info("Logging in as %s", request.user)
        return self._credentials_request("login", request)

    def register(self, request: LoginRequest) -> Authentication:
        """Create a server account and store the returned credential."""
        logger.info("Registering %s", request.user)
        auth = self._credentials_request("register", request)
        self.store.set_credential(auth)
        return auth

    def _request(self, path: str, auth: Authentication, data: Any | None) -> Any | None:
        """Send one authenticated request; None means the server said 401."""
        headers = {"Authorization": auth.model_dump_json()}
        try:
            if data is None:
                response = requests.get(
                    self.url(path), headers=headers, timeout=self.timeout
                )
            else:
                response = requests.post(
                    self.url(path), headers=headers, json=data, timeout=self.timeout
                )
        except requests.RequestException as err:
            msg = f"Request to {self.url(path)} failed: {err}"
            raise TransportError(msg) from err
        if response.status_code == HTTP_UNAUTHORIZED:
            return None
        return self._json(response)

    def authed_request(self, path: str, data: Any | None = None) -> Any:
        """GET (no data) or POST ``path``, logging in again once on 401."""
        auth = self.store.credential
        if auth is not None:
            result = self._request(path, auth, data)
            if result is not None:
                return result
            logger.info("Stored credential rejected, logging in again")

        existing_user = auth.user if auth is not None else None
        auth = self.login(self.prompt.ask_credentials(existing_user))
        self.store.set_credential(auth)
        result = self._request(path, auth, data)
        if result is None:
            raise AuthenticationError("Unauthorized")
        return result

    @staticmethod
    def _domains(result: Any) -> DomainMap:
        try:
            return _domain_map.validate_python(result)
        except ModelValidationError as err:
            msg = f"Bad domain map from server: {err}"
            raise TransportError(msg) from err

    def fetch(self) -> DomainMap:
        """Fetch the server's domain map without touching local state."""
        return self._domains(self.authed_request("db"))

    def sync(self, *, full: bool = False) -> DomainMap:
        """Send pending (or, if ``full``, all) changes and adopt the result."""
        changes = self.store.change_set(full=full)
        logger.info("Syncing %d changes (full=%s)", len(changes), full)
        merged = self._domains(self.authed_request("db", dump_changes(changes)))
        self.store.post_sync(merged)
        return merged
