"""Tests for config file loading and environment overrides."""

import importlib

import pytest

import config


@pytest.fixture
def reload_config(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Reload config against a temporary config.yaml, then restore the module."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text('webhook_secret: "from-file"\nport: 8081\n')
    monkeypatch.setenv("CONFIG_PATH", str(config_path))

    def _reload():
        return importlib.reload(config)

    yield _reload
    monkeypatch.undo()
    importlib.reload(config)


def test_secret_read_from_file(reload_config, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("WEBHOOK_SECRET", raising=False)
    assert reload_config().WEBHOOK_SECRET == "from-file"


def test_empty_env_secret_does_not_disable_file_secret(reload_config, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEBHOOK_SECRET", "")
    assert reload_config().WEBHOOK_SECRET == "from-file"


def test_env_secret_overrides_file(reload_config, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEBHOOK_SECRET", "from-env")
    loaded = reload_config()
    assert loaded.WEBHOOK_SECRET == "from-env"
    assert loaded.PORT == 8081


def test_missing_config_file_uses_defaults(reload_config, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("CONFIG_PATH", str(tmp_path / "absent.yaml"))
    monkeypatch.setenv("WEBHOOK_SECRET", "")
    monkeypatch.delenv("PORT", raising=False)
    loaded = reload_config()
    assert loaded.WEBHOOK_SECRET == ""
    assert loaded.PORT == 3000
