"""
Interfaces and protocols for dependency injection.
"""

from __future__ import annotations

from typing import Protocol

from passe.common.models import LoginRequest


class IPersistence(Protocol):
    """Protocol for server-side file storage.

    ``name`` is a bare file name such as ``users.json``.
    """

    def load(self, name: str) -> str | None: ...

    def save(self, name: str, contents: str) -> None: ...


class ICredentialPrompt(Protocol):
    """Protocol for asking the user for sync credentials."""

    def ask_credentials(self, existing_user: str | None) -> LoginRequest: ...


class IClipboard(Protocol):
    """Protocol for delivering a generated password to the user."""

    def deliver(self, password: str) -> None: ...
