"""
Pydantic models for config files, stored users and request/response validation.
"""

from __future__ import annotations

from typing import Any, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    RootModel,
    field_serializer,
    field_validator,
    model_validator,
)

MAX_LENGTH = 24  # characters in one encoded MD5 digest
USERNAME_PATTERN = r"^[\w.@+-]{1,64}$"

DELETE_TAG = "Delete"
SET_TAG = "Set"


class DomainConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    length: int = Field(default=10, gt=0, le=MAX_LENGTH)
    suffix: str | None = None
    note: str | None = None


class SetChange(BaseModel):
    """Pending edit replacing a domain's config."""

    model_config = ConfigDict(frozen=True)

    config: DomainConfig


class DeleteChange(BaseModel):
    """Pending edit removing a domain."""

    model_config = ConfigDict(frozen=True, extra="forbid")


Change = Union[SetChange, DeleteChange]
DomainMap = dict[str, DomainConfig]


def load_change(raw: Any) -> Change:
    """Parse a change from its tagged JSON form (``"Delete"`` or ``{"Set": ...}``)."""
    if isinstance(raw, (SetChange, DeleteChange)):
        return raw
    if raw == DELETE_TAG:
        return DeleteChange()
    if isinstance(raw, dict) and set(raw) == {SET_TAG}:
        return SetChange(config=DomainConfig.model_validate(raw[SET_TAG]))
    msg = f"Invalid change: {raw!r}"
    raise ValueError(msg)


def dump_change(change: Change) -> Any:
    """Serialize a change to its tagged JSON form."""
    if isinstance(change, DeleteChange):
        return DELETE_TAG
    return {SET_TAG: change.config.model_dump(mode="json")}


def load_changes(value: Any) -> Any:
    if isinstance(value, dict):
        return {name: load_change(raw) for name, raw in value.items()}
    return value


def dump_changes(changes: dict[str, Change]) -> dict[str, Any]:
    return {name: dump_change(change) for name, change in changes.items()}


class ChangeSet(RootModel[dict[str, Change]]):
    """Request body for ``POST /db``."""

    @model_validator(mode="before")
    @classmethod
    def _load(cls, data: Any) -> Any:
        return load_changes(data)


class LoginRequest(BaseModel):
    user: str = Field(pattern=USERNAME_PATTERN)
    password: str = Field(min_length=1)


class Authentication(BaseModel):
    """Bearer credential sent as JSON in the Authorization header."""

    user: str
    token: str


class ConfigFile(BaseModel):
    """Client config file contents."""

    credential: Authentication | None = None
    defaults: DomainConfig = Field(default_factory=DomainConfig)
    domains: DomainMap = Field(default_factory=dict)
    changes: dict[str, Change] = Field(default_factory=dict)

    @field_validator("changes", mode="before")
    @classmethod
    def _load_changes(cls, value: Any) -> Any:
        return load_changes(value)

    @field_serializer("changes")
    def _dump_changes(self, changes: dict[str, Change]) -> dict[str, Any]:
        return dump_changes(changes)


class PasswordConfig(BaseModel):
    iterations: int
    salt: bytes


class StoredCredential(PasswordConfig):
    value: bytes


class Token(BaseModel):
    value: str
    expires: int


class User(BaseModel):
    password: StoredCredential
    tokens: list[Token] = Field(default_factory=list)
