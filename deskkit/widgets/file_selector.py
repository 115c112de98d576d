"""Modal file picker used as the dialog host inside the Textual app."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DirectoryTree, Static

from deskkit.config import DialogConfig
from deskkit.filters import FileFilter
from deskkit.models import DialogOutcome, DialogResult


class FilteredDirectoryTree(DirectoryTree):
    """Directory tree that hides files rejected by the active filter."""

    def __init__(self, path: str | Path, *, file_filter: FileFilter, **kwargs: object) -> None:
        super().__init__(path, **kwargs)  # type: ignore[arg-type]
        self._file_filter = file_filter

    def filter_paths(self, paths: Iterable[Path]) -> Iterable[Path]:
        return [path for path in paths if path.is_dir() or self._file_filter.matches(path.name)]


class FileSelectorScreen(ModalScreen[DialogOutcome]):
    """Pick one file below the configured initial directory."""

    DEFAULT_CSS = """
    FileSelectorScreen {
        align: center middle;
    }

    #file-selector {
        width: 80%;
        height: 80%;
        border: round $primary;
        background: $surface;
        padding: 1 2;
    }

    #file-selector .panel-title {
        text-style: bold;
    }

    #file-filter, #file-missing {
        color: $text-muted;
    }

    #file-tree {
        height: 1fr;
    }

    #file-selector .dialog-actions {
        height: auto;
        margin-top: 1;
    }

    #file-selector .dialog-actions > * {
        margin-right: 1;
    }
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, config: DialogConfig) -> None:
        super().__init__()
        self._config = config
        self._root = Path(config.initial_directory).expanduser()
        self._file_filter = config.active_filter()

    @property
    def root_available(self) -> bool:
        return self._root.is_dir()

    def compose(self) -> ComposeResult:
        children: list = [
            Static("Select a file", classes="panel-title"),
            Static(f"Filter: {self._file_filter.description}", id="file-filter"),
        ]
        actions: list = []
        if self.root_available:
            children.append(FilteredDirectoryTree(self._root, file_filter=self._file_filter, id="file-tree"))
        else:
            children.append(Static(f"Folder not found: {self._root}", id="file-missing"))
            actions.append(Button("Retry", id="dialog-retry", variant="warning"))
        actions.append(Button("Cancel", id="dialog-cancel"))
        children.append(Horizontal(*actions, classes="dialog-actions"))
        yield Vertical(*children, id="file-selector")

    def choose(self, path: str | Path) -> None:
        """Close the dialog with ``path`` as the selection."""

        self.dismiss(DialogOutcome(DialogResult.OK, str(path)))

    def on_directory_tree_file_selected(self, event: DirectoryTree.FileSelected) -> None:
        event.stop()
        self.choose(event.path)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "dialog-cancel":
            event.stop()
            self.action_cancel()
        elif event.button.id == "dialog-retry":
            event.stop()
            self.dismiss(DialogOutcome(DialogResult.RETRY))

    def action_cancel(self) -> None:
        self.dismiss(DialogOutcome(DialogResult.CANCEL))


class TextualDialogHost:
    """Async dialog host that shows :class:`FileSelectorScreen` on an app.

    Must be awaited from a worker, as required by ``App.push_screen_wait``.
    """

    def __init__(self, app: App) -> None:
        self._app = app

    async def show(self, config: DialogConfig) -> DialogOutcome:
        outcome = await self._app.push_screen_wait(FileSelectorScreen(config))
        return outcome or DialogOutcome(DialogResult.NONE)


__all__ = ["FileSelectorScreen", "FilteredDirectoryTree", "TextualDialogHost"]
