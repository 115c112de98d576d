"""Tests for the Textual file selector screen."""

from __future__ import annotations

from pathlib import Path

import pytest
from textual.app import App
from textual.widgets import Button

from deskkit.config import DialogConfig
from deskkit.models import DialogOutcome, DialogResult
from deskkit.widgets import FileSelectorScreen, FilteredDirectoryTree


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class _HostApp(App[None]):
    def __init__(self, config: DialogConfig) -> None:
        super().__init__()
        self._dialog_config = config
        self.outcomes: list[DialogOutcome | None] = []

    def on_mount(self) -> None:
        self.push_screen(FileSelectorScreen(self._dialog_config), self.outcomes.append)


@pytest.mark.anyio
async def test_cancel_dismisses_with_cancel(tmp_path: Path) -> None:
    app = _HostApp(DialogConfig(initial_directory=str(tmp_path)))

    async with app.run_test() as pilot:
        await pilot.pause()
        assert isinstance(app.screen, FileSelectorScreen)
        app.screen.action_cancel()
        await pilot.pause()

    assert app.outcomes == [DialogOutcome(DialogResult.CANCEL)]


@pytest.mark.anyio
async def test_choose_dismisses_with_path(tmp_path: Path) -> None:
    target = tmp_path / "photo.png"
    target.write_bytes(b"png")
    app = _HostApp(DialogConfig(initial_directory=str(tmp_path)))

    async with app.run_test() as pilot:
        await pilot.pause()
        screen = app.screen
        assert isinstance(screen, FileSelectorScreen)
        assert screen.query_one("#file-tree", FilteredDirectoryTree)
        screen.choose(target)
        await pilot.pause()

    assert app.outcomes == [DialogOutcome(DialogResult.OK, str(target))]


@pytest.mark.anyio
async def test_missing_directory_offers_retry(tmp_path: Path) -> None:
    app = _HostApp(DialogConfig(initial_directory=str(tmp_path / "missing")))

    async with app.run_test() as pilot:
        await pilot.pause()
        screen = app.screen
        assert isinstance(screen, FileSelectorScreen)
        assert not screen.root_available
        screen.query_one("#dialog-retry", Button).press()
        await pilot.pause()

    assert app.outcomes == [DialogOutcome(DialogResult.RETRY)]


@pytest.mark.anyio
async def test_tree_hides_files_outside_filter(tmp_path: Path) -> None:
    (tmp_path / "keep.png").write_bytes(b"")
    (tmp_path / "drop.txt").write_bytes(b"")
    (tmp_path / "nested").mkdir()
    app = _HostApp(DialogConfig(initial_directory=str(tmp_path), filter="Images|*.png"))

    async with app.run_test() as pilot:
        await pilot.pause()
        tree = app.screen.query_one("#file-tree", FilteredDirectoryTree)
        kept = {path.name for path in tree.filter_paths(tmp_path.iterdir())}
        app.screen.action_cancel()
        await pilot.pause()

    assert kept == {"keep.png", "nested"}
