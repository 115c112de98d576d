"""Shared dataclasses and enums used across the helper modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

DEFAULT_SERVER = "127.0.0.1"
DEFAULT_PORT = "3306"

_CONNECTION_KEYS = ("server", "port", "sslmode", "database", "uid", "pwd")


class SslMode(str, Enum):
    """SSL negotiation modes accepted in connection strings."""

    NONE = "None"
    PREFERRED = "Preferred"
    REQUIRED = "Required"
    VERIFY_CA = "VerifyCA"
    VERIFY_FULL = "VerifyFull"

    @classmethod
    def parse(cls, value: "SslMode | str") -> SslMode:
        """Resolve a mode name case-insensitively (``Disabled`` means ``None``)."""

        if isinstance(value, SslMode):
            return value
        text = str(value).strip().lower()
        if text == "disabled":
            return cls.NONE
        for mode in cls:
            if mode.value.lower() == text:
                return mode
        raise ValueError(f"Unknown SSL mode: {value!r}")


@dataclass(frozen=True, slots=True)
class ConnectionProfile:
    """Where and as whom to connect to a MySQL server."""

    server: str
    port: str
    database: str
    username: str
    password: str = field(repr=False)

    @classmethod
    def from_credentials(
        cls,
        username: str,
        password: str,
        database: str,
        server: str = DEFAULT_SERVER,
    ) -> ConnectionProfile:
        """Build a profile on the default port, optionally on a local server."""

        return cls(
            server=server,
            port=DEFAULT_PORT,
            database=database,
            username=username,
            password=password,
        )

    @classmethod
    def from_connection_string(cls, text: str) -> tuple[ConnectionProfile, SslMode]:
        """Parse ``Server=..;Port=..;...`` back into a profile and its SSL mode."""

        values: dict[str, str] = {}
        for chunk in text.split(";"):
            if not chunk.strip():
                continue
            key, sep, value = chunk.partition("=")
            if not sep:
                raise ValueError(f"Malformed connection string segment: {chunk!r}")
            key = key.strip().lower()
            if key in _CONNECTION_KEYS:
                values[key] = value.strip()
        profile = cls(
            server=values.get("server") or DEFAULT_SERVER,
            port=values.get("port") or DEFAULT_PORT,
            database=values.get("database", ""),
            username=values.get("uid", ""),
            password=values.get("pwd", ""),
        )
        return profile, SslMode.parse(values.get("sslmode", SslMode.NONE))

    def connection_string(self, ssl_mode: SslMode | str = SslMode.NONE) -> str:
        mode = SslMode.parse(ssl_mode)
        return (
            f"Server={self.server};"
            f"Port={self.port};"
            f"SslMode={mode.value};"
            f"Database={self.database};"
            f"Uid={self.username};"
            f"Pwd={self.password};"
        )


class DialogResult(Enum):
    """Outcome reported by a dialog host when the dialog closes."""

    NONE = "none"
    OK = "ok"
    CANCEL = "cancel"
    ABORT = "abort"
    RETRY = "retry"
    IGNORE = "ignore"


@dataclass(frozen=True, slots=True)
class DialogOutcome:
    """What the user did with a file dialog."""

    result: DialogResult
    path: str | None = None


__all__ = [
    "ConnectionProfile",
    "DEFAULT_PORT",
    "DEFAULT_SERVER",
    "DialogOutcome",
    "DialogResult",
    "SslMode",
]
