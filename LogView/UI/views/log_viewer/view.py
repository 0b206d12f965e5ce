"""
Log Viewer View Module - Main UI orchestration

Handles:
- Main view composition (header, log lines, footer)
- Turning widget events into controller actions
- A single background dispatch worker so file dialogs can block it
- Rendering state snapshots posted back from worker threads
"""
import logging
from queue import Empty, Queue
from typing import Dict, Optional

from textual import on, work
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.message import Message
from textual.widgets import Button, Checkbox, Input, Select
from textual.worker import get_current_worker

from LogView.config import AppConfig
from LogView.database.settings_store import SettingsStore

from .components import LogFooterPanel, LogHeaderPanel
from .controller import (
    Appear,
    Clear,
    Load,
    LogController,
    Open,
    LogViewState,
    Save,
    SetFilterKind,
    SetFilterText,
    SetFontSize,
    SetLevel,
    SetShowTimestamps,
    ToggleAutoRefresh,
    ToggleGotoLast,
)
from .file_picker import TextualFilePicker
from .log_parser import LogFilter, LogLevel
from .log_table import LogLinesPanel
from .settings import LogViewSettings


class LogViewerView(Vertical):
    """
    Log panel: filtered, colored lines of one log file with auto-refresh
    """

    class StateChanged(Message):
        """Posted from worker threads with a new controller state"""

        def __init__(self, state: LogViewState) -> None:
            super().__init__()
            self.state = state

    def __init__(
        self,
        config: AppConfig,
        settings_store: SettingsStore,
        controller: Optional[LogController] = None,
        **kwargs,
    ):
        """
        Initialize the log viewer

        Args:
            config: Application configuration
            settings_store: Where the panel's preferences are kept
            controller: Pre-built controller (default: built on mount)
        """
        super().__init__(**kwargs)
        self.logger = logging.getLogger("LogView.viewer")
        self.config = config
        self.settings_store = settings_store
        self.controller = controller

        self._actions: Queue = Queue()
        self._unsubscribe = None
        self._last_error: Optional[str] = None
        self._last_saved = None
        # Header values last sent to the controller, by widget id
        self._requested: Dict[str, object] = {}

    def compose(self) -> ComposeResult:
        """Compose the log viewer layout"""
        settings = LogViewSettings.load(self.settings_store)
        self._remember_header(settings)
        yield LogHeaderPanel(settings, id="log-header-panel")
        yield LogLinesPanel(id="log-lines")
        yield LogFooterPanel(id="log-footer-panel")

    def on_mount(self) -> None:
        """Build the controller and load the initial file"""
        if self.controller is None:
            self.controller = LogController(
                self.settings_store,
                TextualFilePicker(self.app),
                log_folder=self.config.log_folder,
                file_path=self.config.default_log_file,
                save_folder=self.config.save_folder,
                save_name=self.config.save_name,
                refresh_interval=self.config.refresh_interval,
            )

        self._unsubscribe = self.controller.subscribe(self._post_state)
        self._sync_controls(self.controller.state)
        self._dispatch_actions()
        self.post_action(Appear())

    def on_unmount(self) -> None:
        """Stop auto-refresh and the dispatch worker"""
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None
        if self.controller:
            self.controller.close()
        self.workers.cancel_group(self, "log-dispatch")

    def post_action(self, action) -> None:
        """Queue an action for the dispatch worker"""
        self._actions.put(action)

    @work(thread=True, exclusive=True, group="log-dispatch")
    def _dispatch_actions(self) -> None:
        """Send queued actions to the controller, one at a time"""
        worker = get_current_worker()
        while not worker.is_cancelled:
            try:
                action = self._actions.get(timeout=0.2)
            except Empty:
                continue

            try:
                self.controller.send(action)
            except Exception as e:
                self.logger.exception("Action %r failed", action)
                self.post_message(self.StateChanged(self.controller.state))
                self.app.call_from_thread(self.notify, f"Error: {e}", severity="error")

    def _post_state(self, state: LogViewState) -> None:
        """Controller listener; may run on any thread"""
        self.post_message(self.StateChanged(state))

    def on_log_viewer_view_state_changed(self, event: StateChanged) -> None:
        """Render a state snapshot (main thread)"""
        self._render_state(event.state)

    def _render_state(self, state: LogViewState) -> None:
        settings = self.controller.settings

        lines_panel = self.query_one("#log-lines", LogLinesPanel)
        lines_panel.show_lines(state.filtered_lines, goto_last=settings.goto_last)
        self._sync_controls(state)

        if state.error and state.error != self._last_error:
            self.notify(state.error, severity="error")
        self._last_error = state.error

        if state.last_saved and state.last_saved != self._last_saved:
            self.notify(f"Saved log to {state.last_saved}", severity="information")
        self._last_saved = state.last_saved

    def _sync_controls(self, state: LogViewState) -> None:
        settings = self.controller.settings
        self._remember_header(settings)
        self.query_one("#log-header-panel", LogHeaderPanel).sync(settings)
        self.query_one("#log-footer-panel", LogFooterPanel).sync(settings, state.auto_refresh_active)
        self.border_title = str(state.file_path) if state.file_path else "No log file"

    def _remember_header(self, settings: LogViewSettings) -> None:
        self._requested = {
            "show-timestamps-checkbox": settings.show_timestamps,
            "log-level-select": settings.level.value,
            "log-filter-select": settings.filter_kind.value,
            "log-filter-input": settings.filter_text,
        }

    def _request(self, widget_id: str, value, action) -> None:
        """Post an action for a header value unless it was already requested"""
        if self._requested.get(widget_id) == value:
            return
        self._requested[widget_id] = value
        self.post_action(action)

    # Event Handlers

    @on(Checkbox.Changed, "#show-timestamps-checkbox")
    def handle_show_timestamps(self, event: Checkbox.Changed) -> None:
        self._request("show-timestamps-checkbox", event.value, SetShowTimestamps(event.value))

    @on(Select.Changed, "#log-level-select")
    def handle_level_changed(self, event: Select.Changed) -> None:
        if isinstance(event.value, str):
            self._request("log-level-select", event.value, SetLevel(LogLevel(event.value)))

    @on(Select.Changed, "#log-filter-select")
    def handle_filter_kind_changed(self, event: Select.Changed) -> None:
        if isinstance(event.value, str):
            self._request("log-filter-select", event.value, SetFilterKind(LogFilter(event.value)))

    @on(Input.Changed, "#log-filter-input")
    def handle_filter_text_changed(self, event: Input.Changed) -> None:
        self._request("log-filter-input", event.value, SetFilterText(event.value))

    @on(Button.Pressed, "#clear-filter-btn")
    def handle_clear_filter(self) -> None:
        filter_input = self.query_one("#log-filter-input", Input)
        with filter_input.prevent(Input.Changed):
            filter_input.value = ""
        self._request("log-filter-input", "", SetFilterText(""))

    @on(Button.Pressed, "#font-smaller-btn")
    def handle_font_smaller(self) -> None:
        self.post_action(SetFontSize(self.controller.settings.font_size - 1))

    @on(Button.Pressed, "#font-larger-btn")
    def handle_font_larger(self) -> None:
        self.post_action(SetFontSize(self.controller.settings.font_size + 1))

    @on(Button.Pressed, "#goto-last-btn")
    def handle_goto_last(self) -> None:
        self.post_action(ToggleGotoLast())

    @on(Button.Pressed, "#refresh-btn")
    def handle_refresh(self) -> None:
        self.post_action(Load())

    @on(Checkbox.Changed, "#auto-refresh-checkbox")
    def handle_auto_refresh_changed(self, event: Checkbox.Changed) -> None:
        self.post_action(ToggleAutoRefresh())

    @on(Button.Pressed, "#load-btn")
    def handle_load(self) -> None:
        self.post_action(Load())

    @on(Button.Pressed, "#open-btn")
    def handle_open(self) -> None:
        self.post_action(Open())

    @on(Button.Pressed, "#save-btn")
    def handle_save(self) -> None:
        self.post_action(Save())

    @on(Button.Pressed, "#clear-btn")
    def handle_clear(self) -> None:
        self.post_action(Clear())
