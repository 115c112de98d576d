"""Panel that shows the file picked through the dialog helper."""

from __future__ import annotations

from pathlib import Path

from PIL import Image, UnidentifiedImageError
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import Button, Static

from deskkit.images import bytes_to_image, describe_image


class FilePanel(Container):
    """Open-file button plus a summary of the current selection."""

    DEFAULT_CSS = """
    FilePanel {
        layout: vertical;
        border: round $primary 40%;
        padding: 1 2;
        height: auto;
        margin-bottom: 1;
    }

    FilePanel .panel-title {
        text-style: bold;
    }

    FilePanel .file-actions {
        height: auto;
    }

    #file-info {
        color: $text-muted;
    }
    """

    def __init__(self) -> None:
        super().__init__(id="file-panel")
        self.selected_path: str | None = None
        self.last_info = "No file selected."

    def compose(self) -> ComposeResult:
        yield Static("Files", classes="panel-title")
        yield Horizontal(
            Button("Open file…", id="open-file"),
            Static("", id="file-path"),
            classes="file-actions",
        )
        yield Static(self.last_info, id="file-info")

    def show_selection(self, path: str | None) -> None:
        """Render the selected path and, for images, their decoded format and size."""

        self.selected_path = path
        if path is None:
            self.last_info = "No file selected."
        else:
            self.last_info = self._describe(Path(path))
        if self.is_mounted:
            self.query_one("#file-path", Static).update(path or "")
            self.query_one("#file-info", Static).update(self.last_info)

    @staticmethod
    def _describe(path: Path) -> str:
        try:
            data = path.read_bytes()
        except OSError as exc:
            return f"Cannot read file: {exc}"
        try:
            image = bytes_to_image(data)
        except UnidentifiedImageError:
            return f"Not an image ({len(data)} bytes)"
        except (OSError, Image.DecompressionBombError) as exc:
            return f"Cannot decode image: {exc}"
        return f"Image: {describe_image(image)}"


__all__ = ["FilePanel"]
