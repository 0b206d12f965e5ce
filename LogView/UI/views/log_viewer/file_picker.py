"""
File Picker Module - Modal open / save dialogs

Handles:
- OpenLogScreen: directory tree plus path input for choosing a log file
- SaveLogScreen: path input prefilled with the default save location
- TextualFilePicker: blocking FilePicker for use from worker threads
"""
from pathlib import Path
from threading import Event
from typing import Optional

from textual import on
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DirectoryTree, Input, Label


class _PathScreen(ModalScreen[Optional[Path]]):
    """Shared layout: title, optional tree, path input, OK / Cancel"""

    TITLE_TEXT = ""
    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, initial_path: Path, **kwargs):
        super().__init__(**kwargs)
        self.initial_path = Path(initial_path)

    def compose(self) -> ComposeResult:
        with Vertical(id="file-picker-dialog"):
            yield Label(f"[bold]{self.TITLE_TEXT}[/bold]", classes="panel-title")
            yield from self.compose_browser()
            yield Input(value=str(self.initial_path), id="file-picker-path")
            with Horizontal(id="file-picker-buttons"):
                yield Button("OK", id="file-picker-ok", variant="primary")
                yield Button("Cancel", id="file-picker-cancel", variant="default")

    def compose_browser(self) -> ComposeResult:
        return iter(())

    def chosen_path(self) -> Optional[Path]:
        value = self.query_one("#file-picker-path", Input).value.strip()
        return Path(value).expanduser() if value else None

    def accept(self) -> None:
        self.dismiss(self.chosen_path())

    @on(Button.Pressed, "#file-picker-ok")
    def handle_ok(self) -> None:
        self.accept()

    @on(Input.Submitted, "#file-picker-path")
    def handle_submit(self) -> None:
        self.accept()

    @on(Button.Pressed, "#file-picker-cancel")
    def handle_cancel(self) -> None:
        self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class OpenLogScreen(_PathScreen):
    """Choose an existing log file"""

    TITLE_TEXT = "Open an existing Log"

    def compose_browser(self) -> ComposeResult:
        yield DirectoryTree(self.initial_path, id="file-picker-tree")

    def accept(self) -> None:
        path = self.chosen_path()
        if path is None or not path.is_file():
            self.notify("Choose a log file", severity="warning")
            return
        self.dismiss(path)

    @on(DirectoryTree.FileSelected)
    def handle_file_selected(self, event: DirectoryTree.FileSelected) -> None:
        self.query_one("#file-picker-path", Input).value = str(event.path)


class SaveLogScreen(_PathScreen):
    """Choose where to save the filtered log"""

    TITLE_TEXT = "Save the Log"

    def accept(self) -> None:
        path = self.chosen_path()
        if path is None or path.is_dir():
            self.notify("Enter a file name", severity="warning")
            return
        self.dismiss(path)


class TextualFilePicker:
    """
    FilePicker that shows modal screens and blocks until they close

    Must be called from a worker thread, never from the app's own thread.
    """

    def __init__(self, app: App):
        self.app = app

    def pick_file_to_open(self, starting_directory: Path) -> Optional[Path]:
        return self._ask(OpenLogScreen(starting_directory))

    def pick_file_to_save(self, starting_directory: Path, default_name: str) -> Optional[Path]:
        return self._ask(SaveLogScreen(Path(starting_directory) / default_name))

    def _ask(self, screen: _PathScreen) -> Optional[Path]:
        done = Event()
        result = {}

        def on_dismiss(path: Optional[Path]) -> None:
            result["path"] = path
            done.set()

        self.app.call_from_thread(self.app.push_screen, screen, on_dismiss)

        # The app may exit while the dialog is open
        while not done.wait(0.5):
            if not self.app.is_running:
                return None
        return result.get("path")
