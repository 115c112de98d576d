"""Command pad that runs non-query SQL through the MySQL helper."""

from __future__ import annotations

import asyncio
import logging

import pymysql
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import Button, Input, Static

from deskkit.database import MySqlHandler

LOG = logging.getLogger(__name__)


class CommandPad(Container):
    """Input + execute button; reports affected rows or the driver error."""

    DEFAULT_CSS = """
    CommandPad {
        layout: vertical;
        border: round $primary 40%;
        padding: 1 2;
        height: auto;
        background: $surface;
    }

    CommandPad .panel-title {
        text-style: bold;
    }

    CommandPad Input {
        border: heavy $primary;
    }

    CommandPad:focus-within {
        border: round $primary;
        background: $surface-lighten-1;
    }

    CommandPad .command-actions {
        height: auto;
        margin-top: 1;
        align-horizontal: left;
    }

    CommandPad .command-actions > * {
        margin-right: 1;
    }
    """

    def __init__(self, handler: MySqlHandler | None) -> None:
        super().__init__(id="command-pad")
        self._handler = handler
        self._input: Input | None = None
        self._status_panel: Static | None = None
        self.last_status = ""

    def compose(self) -> ComposeResult:
        yield Static("Command Pad", classes="panel-title")
        yield Input(
            placeholder="Non-query SQL, e.g. UPDATE accounts SET active = 0 WHERE id = 1;",
            id="command-input",
        )
        yield Horizontal(
            Button("Execute", id="run-command", variant="primary"),
            Static("", id="command-status"),
            classes="command-actions",
        )

    def on_mount(self) -> None:
        self._input = self.query_one("#command-input", Input)
        self._status_panel = self.query_one("#command-status", Static)
        if self._handler is None:
            self._set_status("Configure [database] in config.toml to run commands.", severity="warning")

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "run-command":
            event.stop()
            await self.run_command(self._input.value if self._input else "")

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        await self.run_command(event.value)

    async def run_command(self, sql: str) -> int | None:
        """Execute ``sql`` off the UI thread; return the affected rows on success."""

        if self._handler is None:
            self._set_status("No database configured.", severity="warning")
            return None
        if not sql.strip():
            self._set_status("Enter SQL to run.", severity="warning")
            return None
        self._set_status("Executing…", severity="information")
        try:
            rows = await asyncio.to_thread(self._handler.execute, sql)
        except (ValueError, pymysql.MySQLError) as exc:
            LOG.debug("Command failed", exc_info=True)
            self._set_status(f"Error: {exc}", severity="error")
            return None
        self._set_status(f"{rows} row(s) affected", severity="success")
        return rows

    def _set_status(self, message: str, *, severity: str) -> None:
        prefix = {
            "information": "ℹ",
            "warning": "⚠",
            "error": "✖",
            "success": "✔",
        }.get(severity, "•")
        self.last_status = f"{prefix} {message}"
        if self._status_panel:
            self._status_panel.update(self.last_status)


__all__ = ["CommandPad"]
