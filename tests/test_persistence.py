from pathlib import Path

from passe.common.models import User
from passe.server.credentials import CredentialStore
from passe.server.persistence import FsPersistence, dump_users, load_users


def test_fs_persistence_missing_file(tmp_path: Path) -> None:
    assert FsPersistence(tmp_path).load("users.json") is None


def test_fs_persistence_creates_data_dir(tmp_path: Path) -> None:
    persistence = FsPersistence(tmp_path / "nested" / "data")
    persistence.save("users.json", "{}")
    assert (tmp_path / "nested" / "data" / "users.json").read_text() == "{}"
    assert persistence.load("users.json") == "{}"


def test_users_keep_binary_fields() -> None:
    user = User(password=CredentialStore(iterations=1).create("pw"))
    loaded = load_users(dump_users({"alice": user}))
    assert loaded == {"alice": user}
    assert load_users(None) == {}
