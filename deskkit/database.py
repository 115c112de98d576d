"""MySQL command helper: prepare named-parameter commands and run them as non-queries."""

from __future__ import annotations

import logging
import re
import ssl
import threading
from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum

import pymysql

from .models import ConnectionProfile, SslMode

LOG = logging.getLogger(__name__)

_PARAMETER_NAME = re.compile(r"^@?[A-Za-z_][A-Za-z0-9_]*$")
# Quoted strings and identifiers come first so @tokens inside them are skipped.
_TOKEN = re.compile(
    r"'(?:[^'\\]|\\.|'')*'"
    r'|"(?:[^"\\]|\\.|"")*"'
    r"|`(?:[^`]|``)*`"
    r"|(?<![@\w])@([A-Za-z_][A-Za-z0-9_]*)",
    re.DOTALL,
)
_TLS_MODES = (SslMode.REQUIRED, SslMode.VERIFY_CA, SslMode.VERIFY_FULL)

Bindings = Iterable[tuple[str, object]] | Mapping[str, object]


class CommandError(ValueError):
    """Raised when a command cannot be built from the given SQL or bindings."""


class ConnectionState(Enum):
    CLOSED = "closed"
    OPEN = "open"


@dataclass(frozen=True, slots=True)
class HandlerOptions:
    """Connection options beyond the profile itself."""

    ssl_mode: SslMode = SslMode.NONE
    ssl_ca: str | None = None

    def __post_init__(self) -> None:
        mode = SslMode.parse(self.ssl_mode)
        object.__setattr__(self, "ssl_mode", mode)
        if mode in (SslMode.VERIFY_CA, SslMode.VERIFY_FULL) and not self.ssl_ca:
            raise ValueError(f"SSL mode {mode.value} requires a CA bundle (ssl_ca).")


@dataclass(frozen=True, slots=True)
class PreparedCommand:
    """SQL text plus its named parameters, in the order they were bound."""

    sql: str
    parameters: tuple[tuple[str, object], ...] = ()

    @property
    def parameter_map(self) -> dict[str, object]:
        return dict(self.parameters)

    def compile(self) -> tuple[str, dict[str, object] | None]:
        """Render the SQL and arguments in PyMySQL's ``%(name)s`` style.

        Only ``@name`` tokens with a matching binding become placeholders;
        anything else (MySQL user variables, text inside quotes or backticks)
        is sent as written.
        """

        if not self.parameters:
            return self.sql, None
        values = {_bare_name(name): value for name, value in self.parameters}

        def _substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            if name is not None and name in values:
                return f"%({name})s"
            return match.group(0)

        escaped = self.sql.replace("%", "%%")
        return _TOKEN.sub(_substitute, escaped), values


class MySqlHandler:
    """Runs non-query statements against one MySQL database.

    Each ``execute`` call opens its own connection and closes it before
    returning, whether the statement succeeded or raised.
    """

    def __init__(self, profile: ConnectionProfile, options: HandlerOptions | None = None) -> None:
        self._profile = profile
        self._options = options or HandlerOptions()
        self._open_connections = 0
        self._lock = threading.Lock()

    @property
    def profile(self) -> ConnectionProfile:
        return self._profile

    @property
    def options(self) -> HandlerOptions:
        return self._options

    @property
    def connection_string(self) -> str:
        return self._profile.connection_string(self._options.ssl_mode)

    @property
    def state(self) -> ConnectionState:
        with self._lock:
            return ConnectionState.OPEN if self._open_connections else ConnectionState.CLOSED

    def prepare(self, sql: str, bindings: Bindings = ()) -> PreparedCommand:
        """Bind SQL text and ``(name, value)`` pairs into a command."""

        if not sql or not sql.strip():
            raise CommandError("Provide SQL to execute.")
        pairs = bindings.items() if isinstance(bindings, Mapping) else bindings
        parameters: list[tuple[str, object]] = []
        seen: set[str] = set()
        for name, value in pairs:
            if not isinstance(name, str) or not _PARAMETER_NAME.match(name):
                raise CommandError(f"Invalid parameter name: {name!r}")
            bare = _bare_name(name)
            if bare in seen:
                raise CommandError(f"Parameter '{bare}' is bound more than once.")
            seen.add(bare)
            parameters.append((name, value))
        return PreparedCommand(sql=sql, parameters=tuple(parameters))

    def execute(self, statement: str | PreparedCommand) -> int:
        """Run a statement for effect and return the number of affected rows."""

        command = statement if isinstance(statement, PreparedCommand) else self.prepare(statement)
        query, arguments = command.compile()
        with self._connection() as conn:
            with conn.cursor() as cursor:
                affected = cursor.execute(query, arguments)
        LOG.debug(
            "Executed command on %s/%s: %d row(s) affected",
            self._profile.server,
            self._profile.database,
            affected,
        )
        return affected

    @contextmanager
    def _connection(self) -> Iterator[pymysql.connections.Connection]:
        conn = pymysql.connect(**self._connect_kwargs())
        if self._options.ssl_mode in _TLS_MODES and not _uses_tls(conn):
            conn.close()
            raise pymysql.err.OperationalError(
                2026, f"SSL mode {self._options.ssl_mode.value} but the server did not negotiate TLS."
            )
        with self._lock:
            self._open_connections += 1
        try:
            yield conn
        finally:
            with self._lock:
                self._open_connections -= 1
            conn.close()

    def _connect_kwargs(self) -> dict[str, object]:
        profile = self._profile
        kwargs: dict[str, object] = {
            "host": profile.server,
            "port": int(profile.port),
            "user": profile.username,
            "password": profile.password,
            "database": profile.database or None,
            "autocommit": True,
        }
        kwargs.update(_ssl_kwargs(self._options))
        return kwargs


def _ssl_kwargs(options: HandlerOptions) -> dict[str, object]:
    mode = options.ssl_mode
    if mode is SslMode.NONE:
        return {"ssl_disabled": True}
    if mode in (SslMode.PREFERRED, SslMode.REQUIRED):
        # PyMySQL only upgrades when the server advertises TLS; Required is checked after connecting.
        return {"ssl": {"check_hostname": False}}
    ssl_options: dict[str, object] = {"ca": options.ssl_ca}
    if mode is SslMode.VERIFY_CA:
        ssl_options["check_hostname"] = False
    return {"ssl": ssl_options}


def _uses_tls(conn: pymysql.connections.Connection) -> bool:
    return isinstance(getattr(conn, "_sock", None), ssl.SSLSocket)


def _bare_name(name: str) -> str:
    return name[1:] if name.startswith("@") else name


__all__ = [
    "CommandError",
    "ConnectionState",
    "HandlerOptions",
    "MySqlHandler",
    "PreparedCommand",
]
