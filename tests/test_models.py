"""Tests for connection profiles and SSL modes."""

from __future__ import annotations

import pytest

from deskkit.models import ConnectionProfile, SslMode


def test_from_credentials_defaults_to_local_server() -> None:
    profile = ConnectionProfile.from_credentials("app", "secret", "shop")

    assert profile.server == "127.0.0.1"
    assert profile.port == "3306"
    assert profile.database == "shop"
    assert profile.username == "app"
    assert profile.password == "secret"


def test_from_credentials_accepts_server() -> None:
    profile = ConnectionProfile.from_credentials("app", "secret", "shop", "db.internal")

    assert profile.server == "db.internal"
    assert profile.port == "3306"


def test_connection_string_keeps_key_order() -> None:
    profile = ConnectionProfile("db.internal", "3307", "shop", "app", "secret")

    assert profile.connection_string() == (
        "Server=db.internal;Port=3307;SslMode=None;Database=shop;Uid=app;Pwd=secret;"
    )
    assert "SslMode=Required;" in profile.connection_string("required")


def test_connection_string_parses_back() -> None:
    profile, mode = ConnectionProfile.from_connection_string(
        "server=db.internal; Port=3307;SSLMODE=VerifyFull;Database=shop;Uid=app;Pwd=secret;Pooling=false;"
    )

    assert profile == ConnectionProfile("db.internal", "3307", "shop", "app", "secret")
    assert mode is SslMode.VERIFY_FULL


def test_connection_string_parse_defaults_server_and_port() -> None:
    profile, mode = ConnectionProfile.from_connection_string("Database=shop;Uid=app;Pwd=x;")

    assert profile.server == "127.0.0.1"
    assert profile.port == "3306"
    assert mode is SslMode.NONE


def test_connection_string_rejects_malformed_segments() -> None:
    with pytest.raises(ValueError):
        ConnectionProfile.from_connection_string("Server=localhost;garbage;")


def test_repr_hides_password() -> None:
    profile = ConnectionProfile.from_credentials("app", "hunter2", "shop")

    assert "hunter2" not in repr(profile)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("None", SslMode.NONE),
        ("disabled", SslMode.NONE),
        ("REQUIRED", SslMode.REQUIRED),
        ("verifyca", SslMode.VERIFY_CA),
    ],
)
def test_ssl_mode_parse(text: str, expected: SslMode) -> None:
    assert SslMode.parse(text) is expected


def test_ssl_mode_parse_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        SslMode.parse("sometimes")
