"""
LogView Main Application - Log panel hosted in a Textual app
"""
from typing import Optional

from textual.app import App, ComposeResult
from textual.widgets import Footer, Header

from LogView.config import AppConfig, load_config
from LogView.database.settings_store import SettingsStore, SqliteSettingsStore
from LogView.UI.views.log_viewer import (
    Clear,
    Load,
    LogViewerView,
    Open,
    Save,
    SetShowTimestamps,
    ToggleAutoRefresh,
    ToggleGotoLast,
)


class LogViewApp(App):
    """Terminal log viewer"""

    TITLE = "LogView"
    CSS_PATH = "logview.tcss"

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("r", "refresh", "Refresh"),
        ("o", "open", "Open"),
        ("a", "auto_refresh", "Auto Refresh"),
        ("c", "clear", "Clear"),
        ("s", "save", "Save"),
        ("t", "timestamps", "Timestamps"),
        ("g", "goto_last", "Go to Last"),
    ]

    def __init__(self, config: AppConfig, settings_store: SettingsStore, **kwargs):
        super().__init__(**kwargs)
        self.config = config
        self.settings_store = settings_store
        self.sub_title = config.app_name

    def compose(self) -> ComposeResult:
        """Compose the main UI layout"""
        yield Header(show_clock=True)
        yield LogViewerView(self.config, self.settings_store, id="log-viewer-view")
        yield Footer()

    @property
    def log_view(self) -> LogViewerView:
        return self.query_one("#log-viewer-view", LogViewerView)

    def action_refresh(self) -> None:
        self.log_view.post_action(Load())

    def action_open(self) -> None:
        self.log_view.post_action(Open())

    def action_auto_refresh(self) -> None:
        self.log_view.post_action(ToggleAutoRefresh())

    def action_clear(self) -> None:
        self.log_view.post_action(Clear())

    def action_save(self) -> None:
        self.log_view.post_action(Save())

    def action_timestamps(self) -> None:
        view = self.log_view
        view.post_action(SetShowTimestamps(not view.controller.settings.show_timestamps))

    def action_goto_last(self) -> None:
        self.log_view.post_action(ToggleGotoLast())


def run_app(config: Optional[AppConfig] = None) -> None:
    """Entry point to run the LogView application"""
    config = config or load_config()
    with SqliteSettingsStore(config.settings_db) as settings_store:
        app = LogViewApp(config, settings_store)
        app.run()


if __name__ == "__main__":
    run_app()
