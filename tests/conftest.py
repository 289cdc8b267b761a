from __future__ import annotations

import pytest
import requests

from passe.common.models import LoginRequest


class MemoryPersistence:
    """In-memory stand-in for FsPersistence that records every save."""

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files: dict[str, str] = dict(files or {})
        self.saves: list[str] = []

    def load(self, name: str) -> str | None:
        return self.files.get(name)

    def save(self, name: str, contents: str) -> None:
        self.files[name] = contents
        self.saves.append(name)


class FakeClock:
    def __init__(self, now: int = 1_700_000_000) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class StaticPrompt:
    """Credential prompt answering with fixed credentials."""

    def __init__(self, user: str, password: str) -> None:
        self.request = LoginRequest(user=user, password=password)
        self.calls: list[str | None] = []

    def ask_credentials(self, existing_user: str | None) -> LoginRequest:
        self.calls.append(existing_user)
        return self.request


class MockResponse:
    def __init__(self, status_code, json_data):
        self.status_code = status_code
        self._json = json_data

    def json(self):
        return self._json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error", response=self)


SERVER_URL = "http://passe.test"


def route_requests(monkeypatch, test_client) -> list[tuple[str, str]]:
    """Send requests.get/post made by the client into a FastAPI TestClient."""
    calls: list[tuple[str, str]] = []

    def forward(method):
        def send(url, **kwargs):
            kwargs.pop("timeout", None)
            path = url.replace(SERVER_URL, "")
            calls.append((method, path))
            response = getattr(test_client, method)(path, **kwargs)
            return MockResponse(response.status_code, response.json())

        return send

    monkeypatch.setattr("requests.get", forward("get"))
    monkeypatch.setattr("requests.post", forward("post"))
    return calls


@pytest.fixture
def memory_persistence() -> MemoryPersistence:
    return MemoryPersistence()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
