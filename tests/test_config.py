import logging
from pathlib import Path
from typing import Any

import pytest

from passe.common.config import Config

ENV_VARS = [
    "PASSE_SERVER_HOST",
    "PASSE_SERVER_PORT",
    "PASSE_DATA_DIR",
    "PASSE_SERVER",
    "PASSE_CONFIG",
    "PASSE_LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch: Any) -> Any:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_config_constants() -> None:
    config = Config()
    assert config.MIN_ROUNDS == 10  # noqa: PLR2004
    assert config.MAX_ROUNDS == 50  # noqa: PLR2004
    assert config.PASSWORD_ITERATIONS == 10  # noqa: PLR2004
    assert config.SALT_BYTES == 16  # noqa: PLR2004
    assert config.HASH_BYTES == 128  # noqa: PLR2004
    assert config.TOKEN_BYTES == 64  # noqa: PLR2004
    assert config.TOKEN_TTL == 7 * 24 * 60 * 60


def test_config_defaults(clean_env: Any) -> None:
    config = Config()
    assert config.SERVER_HOST == "127.0.0.1"
    assert config.SERVER_PORT == 8000  # noqa: PLR2004
    assert config.DATA_DIR == Path.home() / ".config" / "passe-server"
    assert config.SERVER_URL == "http://localhost:8000"
    assert config.CONFIG_PATH == Path.home() / ".config" / "passe" / "user.json"
    assert config.LOG_LEVEL == logging.INFO


def test_config_env_overrides(clean_env: Any, tmp_path: Path) -> None:
    clean_env.setenv("PASSE_SERVER_HOST", "0.0.0.0")
    clean_env.setenv("PASSE_SERVER_PORT", "9001")
    clean_env.setenv("PASSE_DATA_DIR", str(tmp_path / "data"))
    clean_env.setenv("PASSE_SERVER", "https://sync.example.org/")
    clean_env.setenv("PASSE_CONFIG", str(tmp_path / "user.json"))
    clean_env.setenv("PASSE_LOG_LEVEL", "debug")

    config = Config()
    assert config.SERVER_HOST == "0.0.0.0"
    assert config.SERVER_PORT == 9001  # noqa: PLR2004
    assert config.DATA_DIR == tmp_path / "data"
    assert config.SERVER_URL == "https://sync.example.org"
    assert config.CONFIG_PATH == tmp_path / "user.json"
    assert config.LOG_LEVEL == logging.DEBUG


def test_config_unknown_log_level(clean_env: Any) -> None:
    clean_env.setenv("PASSE_LOG_LEVEL", "chatty")
    assert Config().LOG_LEVEL == logging.INFO
