"""
Custom exceptions for the password generator and sync server.
"""

from __future__ import annotations


class PasseError(Exception):
    """Base exception carrying the HTTP status it maps to."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        super().__init__(message)
        self.status_code = status_code


class ValidationError(PasseError):
    """No valid password appeared within the round limit."""


class AuthenticationError(PasseError):
    """Rejected credentials or an unknown/expired token."""

    def __init__(self, message: str = "Unauthenticated") -> None:
        super().__init__(message, 401)


class ConflictError(PasseError):
    """Registration against an existing username."""

    def __init__(self, message: str = "Registration error") -> None:
        super().__init__(message, 409)


class TransportError(PasseError):
    """The server could not be reached or sent a bad response."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 502)


class PersistenceError(PasseError):
    """File read, write or parse failure."""
