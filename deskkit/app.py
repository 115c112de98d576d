"""Textual application entry point for deskkit."""

from __future__ import annotations

import logging

from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import Button, Footer, Header

from .config import AppConfig, load_config
from .database import MySqlHandler
from .dialogs import FileDialogHandler
from .widgets import CommandPad, FilePanel, StatusBar, TextualDialogHost

LOG = logging.getLogger(__name__)


def _load_app_config() -> AppConfig:
    """Load configuration with a small wrapper for future overrides."""

    return load_config()


def _build_handler(config: AppConfig) -> MySqlHandler | None:
    database = config.database
    if not database.is_configured:
        return None
    try:
        return MySqlHandler(database.to_profile(), database.to_options())
    except ValueError:
        LOG.exception("Invalid database settings; command pad disabled")
        return None


class DeskkitApp(App[None]):
    """Single screen that exercises the file dialog, image and MySQL helpers."""

    CSS = """
    Screen {
        layout: vertical;
    }
    #main-column {
        layout: vertical;
        padding: 1 2;
        height: 1fr;
    }
    """

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+o", "open_file", "Open file"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self._config = _load_app_config()
        self._dialogs = FileDialogHandler(self._config.dialog, TextualDialogHost(self))
        self._handler = _build_handler(self._config)
        self._file_panel: FilePanel | None = None

    def compose(self) -> ComposeResult:
        """Compose the root layout."""

        yield Header(show_clock=True)
        self._file_panel = FilePanel()
        yield Container(self._file_panel, CommandPad(self._handler), id="main-column")
        yield StatusBar(self._handler)
        yield Footer()

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def dialogs(self) -> FileDialogHandler:
        """Expose the dialog helper for tests."""

        return self._dialogs

    @property
    def handler(self) -> MySqlHandler | None:
        return self._handler

    def action_open_file(self) -> None:
        self.run_worker(self._select_file(), exclusive=True, group="file-dialog")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "open-file":
            event.stop()
            self.action_open_file()

    async def _select_file(self) -> None:
        path = await self._dialogs.open_file_selector_async()
        if self._file_panel is not None:
            self._file_panel.show_selection(path)
        if path is None:
            self.notify("No file selected.", severity="information")


def main() -> None:
    """Invoke the Textual application."""

    DeskkitApp().run()


if __name__ == "__main__":
    main()
