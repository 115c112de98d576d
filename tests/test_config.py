"""Tests for AppConfig helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from deskkit import config as config_module
from deskkit.config import AppConfig, DatabaseConfig, DialogConfig, load_config, save_config
from deskkit.database import HandlerOptions
from deskkit.models import ConnectionProfile, SslMode


def test_load_config_returns_defaults_when_missing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module, "CONFIG_FILE", tmp_path / "config.toml")

    result = load_config()

    assert result == AppConfig()


def test_load_config_reads_values(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        """
theme = "light"

[dialog]
initial_directory = "/srv/images"
filter = "Images|*.png;*.jpg|All files|*.*"
filter_index = 2
restore_directory = false
max_attempts = 5

[database]
server = "db.internal"
port = 3307
database = "shop"
username = "app"
password = "secret"
ssl_mode = "required"
"""
    )
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_path)

    result = load_config()

    assert result.theme == "light"
    assert result.dialog.initial_directory == "/srv/images"
    assert result.dialog.filter_index == 2
    assert result.dialog.restore_directory is False
    assert result.dialog.max_attempts == 5
    assert result.database.port == "3307"
    assert result.database.ssl_mode is SslMode.REQUIRED
    assert result.database.is_configured


def test_load_config_handles_toml_errors(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("theme = [unterminated")
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_path)

    assert load_config() == AppConfig()


def test_load_config_handles_invalid_values(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('[dialog]\nfilter = "Images|*.png|Broken"\n')
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_path)

    assert load_config() == AppConfig()


def test_save_config_round_trips(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "nested" / "config.toml"
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_path)
    config = AppConfig(
        theme="light",
        dialog=DialogConfig(initial_directory="C:\\Users\\me", filter='Quoted "files"|*.q'),
        database=DatabaseConfig(
            server="db.internal",
            database="shop",
            username="app",
            password="p@ss;word",
            ssl_mode=SslMode.VERIFY_CA,
            ssl_ca="/etc/ssl/ca.pem",
        ),
    )

    save_config(config)

    content = config_path.read_text()
    assert "[dialog]" in content
    assert "[database]" in content
    assert 'ssl_mode = "VerifyCA"' in content
    assert load_config() == config


def test_database_config_builds_runtime_objects() -> None:
    database = DatabaseConfig(database="shop", username="app", password="secret", ssl_mode="Disabled")

    assert database.to_profile() == ConnectionProfile.from_credentials("app", "secret", "shop")
    assert database.to_options() == HandlerOptions(ssl_mode=SslMode.NONE)


def test_database_config_rejects_unknown_ssl_mode() -> None:
    with pytest.raises(ValueError):
        DatabaseConfig(ssl_mode="sometimes")


def test_with_dialog_updates_copy() -> None:
    config = AppConfig()

    updated = config.with_dialog(initial_directory="/data", filter_index=2)

    assert updated.dialog.initial_directory == "/data"
    assert updated.dialog.filter_index == 2
    assert config.dialog.filter_index == 1


def test_with_database_updates_copy() -> None:
    updated = AppConfig().with_database(database="shop", username="app")

    assert updated.database.is_configured
    assert not AppConfig().database.is_configured


def test_save_config_escapes_control_characters(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "config.toml"
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_path)
    config = AppConfig(
        theme="light",
        database=DatabaseConfig(database="shop", username="app", password="a\nb\tc\r\x01\x7f"),
    )

    save_config(config)

    loaded = load_config()
    assert loaded.theme == "light"
    assert loaded.database.password == "a\nb\tc\r\x01\x7f"
    assert loaded == config
