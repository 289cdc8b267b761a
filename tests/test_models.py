import json

import pytest
from pydantic import ValidationError

from passe.common.models import (
    ChangeSet,
    ConfigFile,
    DeleteChange,
    DomainConfig,
    LoginRequest,
    SetChange,
    dump_change,
    load_change,
)


def test_domain_config_defaults() -> None:
    config = DomainConfig()
    assert config.length == 10  # noqa: PLR2004
    assert config.suffix is None
    assert config.note is None


def test_domain_config_is_value() -> None:
    assert DomainConfig(length=12, note="a") == DomainConfig(length=12, note="a")
    with pytest.raises(ValidationError):
        DomainConfig().length = 5  # type: ignore[misc]


@pytest.mark.parametrize("length", [0, -1, 25])
def test_domain_config_length_validation(length: int) -> None:
    with pytest.raises(ValidationError):
        DomainConfig(length=length)


def test_change_json_shape() -> None:
    assert dump_change(DeleteChange()) == "Delete"
    assert dump_change(SetChange(config=DomainConfig(length=12))) == {
        "Set": {"length": 12, "suffix": None, "note": None}
    }


def test_load_change() -> None:
    assert load_change("Delete") == DeleteChange()
    assert load_change({"Set": {"length": 8}}) == SetChange(
        config=DomainConfig(length=8)
    )
    with pytest.raises(ValueError):
        load_change({"Unset": {}})
    with pytest.raises(ValueError):
        load_change("delete")


def test_config_file_parses_tagged_changes() -> None:
    raw = {
        "credential": {"user": "alice", "token": "abc"},
        "defaults": {"length": 14},
        "domains": {"example.org": {"length": 10, "note": "n"}},
        "changes": {
            "example.org": "Delete",
            "new.example": {"Set": {"length": 16, "suffix": "!"}},
        },
    }
    data = ConfigFile.model_validate_json(json.dumps(raw))
    assert data.credential is not None
    assert data.credential.user == "alice"
    assert data.defaults.length == 14  # noqa: PLR2004
    assert data.changes["example.org"] == DeleteChange()
    assert data.changes["new.example"] == SetChange(
        config=DomainConfig(length=16, suffix="!")
    )

    dumped = json.loads(data.model_dump_json())
    assert dumped["changes"] == {
        "example.org": "Delete",
        "new.example": {"Set": {"length": 16, "suffix": "!", "note": None}},
    }


def test_config_file_defaults_when_keys_missing() -> None:
    data = ConfigFile.model_validate_json("{}")
    assert data.credential is None
    assert data.defaults == DomainConfig()
    assert data.domains == {}
    assert data.changes == {}


def test_change_set_rejects_unknown_tag() -> None:
    assert ChangeSet.model_validate({"a": "Delete"}).root == {"a": DeleteChange()}
    with pytest.raises(ValidationError):
        ChangeSet.model_validate({"a": "Remove"})


@pytest.mark.parametrize("user", ["", "../etc", "a/b", "x" * 65])
def test_login_request_rejects_bad_usernames(user: str) -> None:
    with pytest.raises(ValidationError):
        LoginRequest(user=user, password="pw")


def test_login_request_requires_password() -> None:
    request = LoginRequest(user="alice@example.org", password="pw")
    assert request.user == "alice@example.org"
    with pytest.raises(ValidationError):
        LoginRequest(user="alice", password="")
