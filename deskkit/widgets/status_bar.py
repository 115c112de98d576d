"""Status bar widget that mirrors the database helper's target and state."""

from __future__ import annotations

from textual.widgets import Static

from deskkit.database import MySqlHandler


class StatusBar(Static):
    """Compact status strip rendered above Textual's footer."""

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        padding: 0 1;
        background: $surface-darken-3;
        color: $text;
    }
    """

    def __init__(self, handler: MySqlHandler | None, *, poll_interval: float = 0.5) -> None:
        super().__init__("", id="status-bar")
        self._handler = handler
        self._poll_interval = poll_interval

    def on_mount(self) -> None:
        self.refresh_state()
        if self._handler is not None:
            self.set_interval(self._poll_interval, self.refresh_state)

    def describe(self) -> str:
        if self._handler is None:
            return "Database: not configured"
        profile = self._handler.profile
        parts = [
            f"Server: {profile.server}:{profile.port}",
            f"Database: {profile.database}",
            f"User: {profile.username}",
            f"SSL: {self._handler.options.ssl_mode.value}",
            f"Connection: {self._handler.state.value}",
        ]
        return " | ".join(parts)

    def refresh_state(self) -> None:
        self.update(self.describe())


__all__ = ["StatusBar"]
