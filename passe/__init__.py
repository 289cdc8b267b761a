# passe: deterministic per-domain passwords

from passe.client.config_store import ConfigStore
from passe.client.sync import SyncClient
from passe.common.models import DomainConfig
from passe.common.password import generate

__all__ = [
    "ConfigStore",
    "DomainConfig",
    "SyncClient",
    "generate",
]
