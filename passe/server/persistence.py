"""
Data persistence utilities.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from pathlib import Path  # noqa: TC003
from typing import Any

from pydantic import ValidationError as ModelValidationError

from passe.common.exceptions import PersistenceError
from passe.common.models import DomainConfig, DomainMap, User

USERS_FILE = "users.json"

logger = logging.getLogger(__name__)


def domains_file(username: str) -> str:
    """File name holding a user's synced domain map."""
    return f"user-{username}.json"


class FsPersistence:
    """Reads and writes server files inside a data directory."""

    def __init__(self, data_dir: Path):
        self.data_dir = data_dir

    def path(self, name: str) -> Path:
        return self.data_dir / name

    def load(self, name: str) -> str | None:
        """Return file contents, or None if the file does not exist."""
        path = self.path(name)
        try:
            with path.open() as f:
                return f.read()
        except FileNotFoundError:
            return None
        except OSError as err:
            msg = f"Reading {path}: {err}"
            raise PersistenceError(msg) from err

    def save(self, name: str, contents: str) -> None:
        path = self.path(name)
        logger.info("Saving %s", path)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with path.open("w") as f:
                f.write(contents)
        except OSError as err:
            msg = f"Writing {path}: {err}"
            raise PersistenceError(msg) from err


def _serialize_user(user: User) -> dict[str, Any]:
    """Serialize a User to JSON-serializable format."""
    data = user.model_dump()
    for key in ("salt", "value"):
        data["password"][key] = base64.b64encode(data["password"][key]).decode()
    return data


def _deserialize_user(data: dict[str, Any]) -> User:
    """Deserialize a User from JSON format."""
    password = dict(data["password"])
    for key in ("salt", "value"):
        password[key] = base64.b64decode(password[key], validate=True)
    return User.model_validate({**data, "password": password})


def dump_users(users: dict[str, User]) -> str:
    return json.dumps({name: _serialize_user(user) for name, user in users.items()})


def load_users(contents: str | None) -> dict[str, User]:
    """Parse the users file; a missing file means no users."""
    if contents is None:
        return {}
    try:
        data = json.loads(contents)
        return {name: _deserialize_user(user) for name, user in data.items()}
    except (
        json.JSONDecodeError,
        AttributeError,
        KeyError,
        TypeError,
        binascii.Error,
        ModelValidationError,
    ) as err:
        msg = f"Invalid {USERS_FILE}: {err}"
        raise PersistenceError(msg) from err


def dump_domains(domains: DomainMap) -> str:
    return json.dumps(
        {name: config.model_dump(mode="json") for name, config in domains.items()}
    )


def load_domains(contents: str | None, name: str) -> DomainMap:
    if contents is None:
        return {}
    try:
        data = json.loads(contents)
        return {
            domain: DomainConfig.model_validate(config)
            for domain, config in data.items()
        }
    except (json.JSONDecodeError, AttributeError, ModelValidationError) as err:
        msg = f"Invalid {name}: {err}"
        raise PersistenceError(msg) from err
