"""
Client configuration: per-domain settings and unsynced local edits.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError as ModelValidationError

from passe.client.domain.entities import Default, Defaulted, Explicit
from passe.common.exceptions import PersistenceError
from passe.common.models import (
    Authentication,
    Change,
    ConfigFile,
    DeleteChange,
    DomainConfig,
    DomainMap,
    SetChange,
)

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class ConfigStore:
    """Holds the client config file and tracks whether it needs saving.

    ``domains`` is the last map received from the server and is only
    replaced by ``post_sync``; local edits accumulate in ``changes``.
    """

    def __init__(self, path: Path, data: ConfigFile | None = None):
        self.path = path
        self.data = data if data is not None else ConfigFile()
        self.dirty = False

    @classmethod
    def load(cls, path: Path) -> ConfigStore:
        """Load the config file, or start empty if it does not exist."""
        if not path.exists():
            return cls(path)
        try:
            with path.open() as f:
                data = ConfigFile.model_validate_json(f.read())
        except (OSError, ModelValidationError) as err:
            msg = f"Processing {path}: {err}"
            raise PersistenceError(msg) from err
        return cls(path, data)

    def save(self) -> None:
        """Write the config file if anything changed since loading."""
        if not self.dirty:
            return
        logger.info("Storing %s", self.path)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w") as f:
                f.write(self.data.model_dump_json(indent=2))
        except OSError as err:
            msg = f"Writing {self.path}: {err}"
            raise PersistenceError(msg) from err
        self.dirty = False

    @property
    def credential(self) -> Authentication | None:
        return self.data.credential

    def set_credential(self, auth: Authentication) -> None:
        self.data.credential = auth
        self.dirty = True

    @property
    def defaults(self) -> DomainConfig:
        return self.data.defaults

    @property
    def domains(self) -> DomainMap:
        return self.data.domains

    @property
    def changes(self) -> dict[str, Change]:
        return self.data.changes

    def for_domain(self, name: str) -> Defaulted[DomainConfig]:
        """Resolve a domain: pending change, then synced value, then defaults."""
        change = self.data.changes.get(name)
        if isinstance(change, SetChange):
            return Explicit(change.config)
        if isinstance(change, DeleteChange):
            return Default(self.data.defaults)
        stored = self.data.domains.get(name)
        if stored is not None:
            return Explicit(stored)
        return Default(self.data.defaults)

    def domain_list(self) -> list[str]:
        """Names that currently resolve to an explicit config."""
        names = set(self.data.domains) | set(self.data.changes)
        return sorted(
            name for name in names if isinstance(self.for_domain(name), Explicit)
        )

    def stage(self, name: str, config: DomainConfig) -> None:
        self.data.changes[name] = SetChange(config=config)
        self.dirty = True

    def stage_delete(self, name: str) -> None:
        self.data.changes[name] = DeleteChange()
        self.dirty = True

    def full_changes(self) -> dict[str, Change]:
        """Every known domain as a Set, keeping pending deletions."""
        changes: dict[str, Change] = {
            name: change
            for name, change in self.data.changes.items()
            if isinstance(change, DeleteChange)
        }
        for name in self.domain_list():
            resolved = self.for_domain(name)
            changes[name] = SetChange(config=resolved.value)
        return changes

    def change_set(self, *, full: bool = False) -> dict[str, Change]:
        """Changes to send on sync: everything for a full sync, else pending edits."""
        if full:
            return self.full_changes()
        return dict(self.data.changes)

    def post_sync(self, domains: DomainMap) -> None:
        """Adopt the server's map and drop the edits it now includes."""
        self.data.domains = dict(domains)
        self.data.changes = {}
        self.dirty = True
