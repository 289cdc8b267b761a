"""
Per-user canonical domain maps for ``/db``.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from passe.common.models import Change, DeleteChange, DomainMap, SetChange

from .persistence import domains_file, dump_domains, load_domains

if TYPE_CHECKING:
    from passe.common.interfaces import IPersistence

logger = logging.getLogger(__name__)


def merge(domains: DomainMap, changes: dict[str, Change]) -> DomainMap:
    """Apply changes last-write-wins per domain and return the new map."""
    merged = dict(domains)
    for name, change in changes.items():
        if isinstance(change, SetChange):
            merged[name] = change.config
        elif isinstance(change, DeleteChange):
            merged.pop(name, None)
    return merged


class DomainStore:
    """Loads, merges and saves each user's domain map."""

    def __init__(self, persistence: IPersistence):
        self.persistence = persistence
        self._lock = threading.Lock()

    def _load(self, username: str) -> DomainMap:
        name = domains_file(username)
        return load_domains(self.persistence.load(name), name)

    def get(self, username: str) -> DomainMap:
        with self._lock:
            return self._load(username)

    def apply(self, username: str, changes: dict[str, Change]) -> DomainMap:
        """Merge a client's changes and return the canonical map."""
        with self._lock:
            current = self._load(username)
            merged = merge(current, changes)
            if merged != current:
                self.persistence.save(domains_file(username), dump_domains(merged))
            logger.info(
                "Applied %d changes for %s (%d domains)",
                len(changes),
                username,
                len(merged),
            )
            return merged
