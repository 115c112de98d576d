"""App configuration loading helpers."""

from __future__ import annotations

from pathlib import Path

import tomllib

from pydantic import BaseModel, Field, field_validator

from .filters import FileFilter, parse_filter
from .models import DEFAULT_PORT, DEFAULT_SERVER, ConnectionProfile, SslMode

CONFIG_FILE = Path.home() / ".config" / "deskkit" / "config.toml"

DEFAULT_FILTER = "All files (*.*)|*.*"


def _default_initial_directory() -> str:
    """Root of the drive holding the user's home (``C:\\`` on Windows, ``/`` elsewhere)."""

    return Path.home().anchor or "/"


class DialogConfig(BaseModel):
    """Settings read each time a file dialog is opened."""

    initial_directory: str = Field(default_factory=_default_initial_directory)
    filter: str = DEFAULT_FILTER
    filter_index: int = Field(default=1, ge=1)
    restore_directory: bool = True
    max_attempts: int = Field(default=3, ge=1)

    @field_validator("filter")
    @classmethod
    def _check_filter(cls, value: str) -> str:
        parse_filter(value)
        return value

    def filters(self) -> tuple[FileFilter, ...]:
        return parse_filter(self.filter)

    def active_filter(self) -> FileFilter:
        """Filter selected by the 1-based index; the first one when out of range."""

        filters = self.filters()
        if 1 <= self.filter_index <= len(filters):
            return filters[self.filter_index - 1]
        return filters[0]


class DatabaseConfig(BaseModel):
    """MySQL connection settings stored in config.toml."""

    server: str = DEFAULT_SERVER
    port: str = DEFAULT_PORT
    database: str = ""
    username: str = ""
    password: str = Field(default="", repr=False)
    ssl_mode: SslMode = SslMode.NONE
    ssl_ca: str | None = None

    @field_validator("ssl_mode", mode="before")
    @classmethod
    def _parse_ssl_mode(cls, value: object) -> SslMode:
        return SslMode.parse(value)  # type: ignore[arg-type]

    @field_validator("port", mode="before")
    @classmethod
    def _port_as_text(cls, value: object) -> str:
        return str(value)

    @property
    def is_configured(self) -> bool:
        return bool(self.database and self.username)

    def to_profile(self) -> ConnectionProfile:
        return ConnectionProfile(
            server=self.server,
            port=self.port,
            database=self.database,
            username=self.username,
            password=self.password,
        )

    def to_options(self) -> "HandlerOptions":
        from .database import HandlerOptions

        return HandlerOptions(ssl_mode=self.ssl_mode, ssl_ca=self.ssl_ca)


class AppConfig(BaseModel):
    """Shape of the application configuration file."""

    theme: str = "dark"
    dialog: DialogConfig = Field(default_factory=DialogConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)

    def with_dialog(self, **updates: object) -> AppConfig:
        """Return a copy with dialog settings changed."""

        dialog = self.dialog.model_copy(update=updates)
        return self.model_copy(update={"dialog": dialog})

    def with_database(self, **updates: object) -> AppConfig:
        """Return a copy with database settings changed."""

        database = self.database.model_copy(update=updates)
        return self.model_copy(update={"database": database})


def load_config() -> AppConfig:
    """Load configuration from disk; fall back to defaults if missing."""

    try:
        data = _read_config_file()
    except FileNotFoundError:
        return AppConfig()
    except (tomllib.TOMLDecodeError, OSError):
        return AppConfig()

    try:
        return AppConfig(
            theme=data.get("theme", AppConfig.model_fields["theme"].default),
            dialog=DialogConfig(**data.get("dialog", {})),
            database=DatabaseConfig(**data.get("database", {})),
        )
    except ValueError:
        return AppConfig()


def save_config(config: AppConfig) -> None:
    """Persist configuration to disk."""

    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    dialog = config.dialog
    database = config.database
    lines: list[str] = [
        f"theme = {_quote(config.theme)}",
        "",
        "[dialog]",
        f"initial_directory = {_quote(dialog.initial_directory)}",
        f"filter = {_quote(dialog.filter)}",
        f"filter_index = {dialog.filter_index}",
        f"restore_directory = {str(dialog.restore_directory).lower()}",
        f"max_attempts = {dialog.max_attempts}",
        "",
        "[database]",
        f"server = {_quote(database.server)}",
        f"port = {_quote(database.port)}",
        f"database = {_quote(database.database)}",
        f"username = {_quote(database.username)}",
        f"password = {_quote(database.password)}",
        f"ssl_mode = {_quote(database.ssl_mode.value)}",
    ]
    if database.ssl_ca:
        lines.append(f"ssl_ca = {_quote(database.ssl_ca)}")
    CONFIG_FILE.write_text("\n".join(lines) + "\n")


_TOML_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


def _quote(value: str) -> str:
    chars: list[str] = []
    for char in value:
        if char in _TOML_ESCAPES:
            chars.append(_TOML_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            chars.append(f"\\u{ord(char):04X}")
        else:
            chars.append(char)
    return '"' + "".join(chars) + '"'


def _read_config_file() -> dict[str, object]:
    with CONFIG_FILE.open("rb") as handle:
        raw = tomllib.load(handle)
    data: dict[str, object] = {}
    theme = raw.get("theme")
    if isinstance(theme, str):
        data["theme"] = theme
    dialog = raw.get("dialog")
    if isinstance(dialog, dict):
        parsed: dict[str, object] = {}
        for key in ("initial_directory", "filter"):
            value = dialog.get(key)
            if isinstance(value, str):
                parsed[key] = value
        for key in ("filter_index", "max_attempts"):
            value = dialog.get(key)
            if isinstance(value, int) and not isinstance(value, bool):
                parsed[key] = value
        restore = dialog.get("restore_directory")
        if isinstance(restore, bool):
            parsed["restore_directory"] = restore
        data["dialog"] = parsed
    database = raw.get("database")
    if isinstance(database, dict):
        parsed = {}
        for key in ("server", "database", "username", "password", "ssl_mode", "ssl_ca"):
            value = database.get(key)
            if isinstance(value, str):
                parsed[key] = value
        port = database.get("port")
        if isinstance(port, (int, str)) and not isinstance(port, bool):
            parsed["port"] = str(port)
        data["database"] = parsed
    return data


__all__ = [
    "AppConfig",
    "CONFIG_FILE",
    "DEFAULT_FILTER",
    "DatabaseConfig",
    "DialogConfig",
    "load_config",
    "save_config",
]
