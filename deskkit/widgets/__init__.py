"""Widget library for the Textual UI."""

from __future__ import annotations

from .command_pad import CommandPad
from .file_panel import FilePanel
from .file_selector import FileSelectorScreen, FilteredDirectoryTree, TextualDialogHost
from .status_bar import StatusBar

__all__ = [
    "CommandPad",
    "FilePanel",
    "FileSelectorScreen",
    "FilteredDirectoryTree",
    "StatusBar",
    "TextualDialogHost",
]
