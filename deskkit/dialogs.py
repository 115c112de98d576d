"""Reusable "select file" dialog with a bounded retry loop."""

from __future__ import annotations

import inspect
import logging
import os
from typing import Protocol, runtime_checkable

from .config import DialogConfig
from .models import DialogOutcome, DialogResult

LOG = logging.getLogger(__name__)


@runtime_checkable
class DialogHost(Protocol):
    """Something that can show a blocking file dialog."""

    def show(self, config: DialogConfig) -> DialogOutcome:
        """Show the dialog modally and report how it was closed."""


@runtime_checkable
class AsyncDialogHost(Protocol):
    """Dialog host for event-loop driven UIs."""

    async def show(self, config: DialogConfig) -> DialogOutcome:
        """Show the dialog and await how it was closed."""


class TkDialogHost:
    """Native open-file dialog through ``tkinter.filedialog``."""

    def show(self, config: DialogConfig) -> DialogOutcome:
        from tkinter import Tk, filedialog

        root = Tk()
        root.withdraw()
        cwd = os.getcwd()
        try:
            selected = filedialog.askopenfilename(
                parent=root,
                initialdir=config.initial_directory,
                filetypes=tk_filetypes(config),
            )
        finally:
            if config.restore_directory:
                os.chdir(cwd)
            root.destroy()
        if isinstance(selected, str) and selected:
            return DialogOutcome(DialogResult.OK, selected)
        return DialogOutcome(DialogResult.CANCEL)


def tk_filetypes(config: DialogConfig) -> list[tuple[str, str]]:
    """Translate the dialog filter into Tk file types, active filter first."""

    active = config.active_filter()
    ordered = [active] + [entry for entry in config.filters() if entry != active]
    filetypes: list[tuple[str, str]] = []
    for entry in ordered:
        pattern = "*" if entry.matches_all else " ".join(entry.patterns)
        filetypes.append((entry.description, pattern))
    return filetypes


class FileDialogHandler:
    """Opens a file dialog with the configured settings.

    A ``RETRY`` result re-opens the dialog until ``config.max_attempts``
    showings have been made.
    """

    def __init__(
        self,
        config: DialogConfig | None = None,
        host: DialogHost | AsyncDialogHost | None = None,
    ) -> None:
        self.config = config or DialogConfig()
        self._host = host or TkDialogHost()

    @property
    def host(self) -> DialogHost | AsyncDialogHost:
        return self._host

    def open_file_selector(self) -> str | None:
        """Return the selected path, or None when nothing was selected.

        Needs a blocking :class:`DialogHost`; async hosts go through
        :meth:`open_file_selector_async`.
        """

        if inspect.iscoroutinefunction(self._host.show):
            raise TypeError("Async dialog hosts need open_file_selector_async().")
        for attempt in range(1, self.config.max_attempts + 1):
            outcome = self._host.show(self.config)  # type: ignore[union-attr]
            if outcome.result is not DialogResult.RETRY:
                return _selected_path(outcome)
            LOG.debug("File dialog asked to retry (attempt %d)", attempt)
        return self._give_up()

    async def open_file_selector_async(self) -> str | None:
        """Async variant of :meth:`open_file_selector`; accepts either kind of host."""

        for attempt in range(1, self.config.max_attempts + 1):
            outcome = self._host.show(self.config)
            if inspect.isawaitable(outcome):
                outcome = await outcome
            if outcome.result is not DialogResult.RETRY:
                return _selected_path(outcome)
            LOG.debug("File dialog asked to retry (attempt %d)", attempt)
        return self._give_up()

    def _give_up(self) -> None:
        LOG.warning("File dialog still asking to retry after %d attempts", self.config.max_attempts)
        return None


def _selected_path(outcome: DialogOutcome) -> str | None:
    if outcome.result is DialogResult.OK and outcome.path:
        return outcome.path
    return None


__all__ = [
    "AsyncDialogHost",
    "DialogHost",
    "FileDialogHandler",
    "TkDialogHost",
    "tk_filetypes",
]
