"""
Log Controller Module - Action handling and state transitions

Handles:
- Actions sent by the view and by the auto-refresh scheduler
- Immutable state snapshots (raw lines, filtered lines, refresh flag)
- Reading and writing settings through the injected SettingsStore
- Load / save through the injected FilePicker
- Error capture for failed loads and saves

Actions are processed strictly one at a time. ``send`` may be called from
any thread; calls are serialized by a lock, and a send issued while an
action is being handled on the same thread is queued behind it.
"""
import logging
from collections import deque
from dataclasses import dataclass, replace
from pathlib import Path
from threading import RLock
from typing import Callable, Deque, Dict, List, Optional, Protocol, Tuple

from LogView.database.settings_store import SettingsStore
from LogView.errors import FileReadError, FileWriteError

from .auto_refresh import AutoRefreshScheduler
from .log_filter import filter_log
from .log_parser import LogFilter, LogLevel, LogLine
from .log_reader import read_log_file, write_log_file
from . import settings as keys
from .settings import LogViewSettings, clamp_font_size

logger = logging.getLogger(__name__)

DEFAULT_SAVE_NAME = "Saved.log"


# Actions

@dataclass(frozen=True)
class Appear:
    pass


@dataclass(frozen=True)
class ToggleAutoRefresh:
    pass


@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class Load:
    pass


@dataclass(frozen=True)
class Open:
    """Ask for a log file and switch to it, even when one is already set"""


@dataclass(frozen=True)
class SetFilterKind:
    kind: LogFilter


@dataclass(frozen=True)
class SetFilterText:
    text: str


@dataclass(frozen=True)
class SetLevel:
    level: LogLevel


@dataclass(frozen=True)
class SetShowTimestamps:
    show: bool


@dataclass(frozen=True)
class SetFontSize:
    size: float


@dataclass(frozen=True)
class ToggleGotoLast:
    pass


@dataclass(frozen=True)
class Save:
    pass


@dataclass(frozen=True)
class RefreshTick:
    """Sent by the scheduler; acts as Load while its run is still active"""
    generation: int


@dataclass(frozen=True)
class LogViewState:
    """Snapshot of the log panel"""
    file_path: Optional[Path] = None
    raw_lines: Tuple[LogLine, ...] = ()
    filtered_lines: Tuple[LogLine, ...] = ()
    auto_refresh_active: bool = False
    error: Optional[str] = None
    last_saved: Optional[Path] = None


class FilePicker(Protocol):
    """Lets the user choose a file; None means the user cancelled"""

    def pick_file_to_open(self, starting_directory: Path) -> Optional[Path]:
        ...

    def pick_file_to_save(self, starting_directory: Path, default_name: str) -> Optional[Path]:
        ...


class LogController:
    """
    Owns the log panel state and applies actions to it

    Collaborators are injected: the settings store holds the user's
    preferences, the file picker asks the user for files, and the scheduler
    drives auto-refresh by sending RefreshTick actions back through ``send``.
    """

    def __init__(
        self,
        settings_store: SettingsStore,
        file_picker: FilePicker,
        log_folder: Path,
        file_path: Optional[Path] = None,
        save_folder: Optional[Path] = None,
        save_name: str = DEFAULT_SAVE_NAME,
        refresh_interval: float = 1.0,
    ):
        """
        Initialize the controller

        Args:
            settings_store: Persisted preferences
            file_picker: Open / save file chooser
            log_folder: Folder the open picker starts in
            file_path: Initial log file (None until the user picks one)
            save_folder: Folder the save picker starts in (default: log_folder)
            save_name: File name offered by the save picker
            refresh_interval: Seconds between auto-refresh reloads
        """
        self.settings_store = settings_store
        self.file_picker = file_picker
        self.log_folder = Path(log_folder)
        self.save_folder = Path(save_folder) if save_folder else self.log_folder
        self.save_name = save_name

        self.scheduler = AutoRefreshScheduler(self._on_tick, interval=refresh_interval)

        self._state = LogViewState(file_path=Path(file_path) if file_path else None)
        self._listeners: List[Callable[[LogViewState], None]] = []
        self._mailbox: Deque[object] = deque()
        self._lock = RLock()
        self._dispatching = False

        self._handlers: Dict[type, Callable] = {
            Appear: self._appear,
            ToggleAutoRefresh: self._toggle_auto_refresh,
            Clear: self._clear,
            Load: self._load,
            Open: self._open,
            RefreshTick: self._refresh_tick,
            SetFilterKind: self._set_filter_kind,
            SetFilterText: self._set_filter_text,
            SetLevel: self._set_level,
            SetShowTimestamps: self._set_show_timestamps,
            SetFontSize: self._set_font_size,
            ToggleGotoLast: self._toggle_goto_last,
            Save: self._save,
        }

    @property
    def state(self) -> LogViewState:
        return self._state

    @property
    def settings(self) -> LogViewSettings:
        """Current settings, read from the store"""
        return LogViewSettings.load(self.settings_store)

    def subscribe(self, listener: Callable[[LogViewState], None]) -> Callable[[], None]:
        """
        Register a listener called with the state after every action

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def send(self, action) -> LogViewState:
        """
        Apply an action

        Returns:
            The state after the action (and anything queued behind it) has
            been applied; when called from inside a listener the action is
            only queued and the current state is returned.
        """
        if type(action) not in self._handlers:
            raise TypeError(f"Unknown action: {action!r}")

        with self._lock:
            self._mailbox.append(action)
            if self._dispatching:
                return self._state

            self._dispatching = True
            try:
                while self._mailbox:
                    self._apply(self._mailbox.popleft())
            finally:
                self._dispatching = False
            return self._state

    def close(self) -> None:
        """Stop auto-refresh without changing the persisted preference"""
        self.scheduler.stop()

    def _apply(self, action) -> None:
        handler = self._handlers[type(action)]
        self._state = handler(self._state, action)

        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("State listener failed for %r", action)

    def _on_tick(self, generation: int) -> None:
        self.send(RefreshTick(generation))

    def _filter(self, lines) -> Tuple[LogLine, ...]:
        settings = self.settings
        return tuple(filter_log(
            lines,
            settings.level,
            settings.filter_kind,
            settings.filter_text,
            settings.show_timestamps,
        ))

    def _reload(self, state: LogViewState) -> LogViewState:
        """Re-read the file; on failure keep the previous lines"""
        try:
            lines = read_log_file(state.file_path)
        except FileReadError as e:
            logger.error(str(e))
            return replace(state, error=str(e))

        return replace(
            state,
            raw_lines=tuple(lines),
            filtered_lines=self._filter(lines),
            error=None,
        )

    def _refilter(self, state: LogViewState) -> LogViewState:
        return replace(state, filtered_lines=self._filter(state.raw_lines))

    # Action handlers

    def _appear(self, state: LogViewState, action: Appear) -> LogViewState:
        if self.settings.auto_refresh and not state.auto_refresh_active:
            # Resume the persisted preference
            self.scheduler.start()
            state = replace(state, auto_refresh_active=True)
        return self._reload(state)

    def _toggle_auto_refresh(self, state: LogViewState, action: ToggleAutoRefresh) -> LogViewState:
        active = not state.auto_refresh_active
        self.settings_store.set(keys.AUTO_REFRESH, active)

        if active:
            self.scheduler.start()
        else:
            self.scheduler.stop()
        return replace(state, auto_refresh_active=active)

    def _clear(self, state: LogViewState, action: Clear) -> LogViewState:
        return replace(state, filtered_lines=())

    def _load(self, state: LogViewState, action: Load) -> LogViewState:
        if state.file_path is not None:
            return self._reload(state)

        file_path = self.file_picker.pick_file_to_open(self.log_folder)
        if file_path is None:
            return replace(state, filtered_lines=())
        return self._switch_file(state, file_path)

    def _open(self, state: LogViewState, action: Open) -> LogViewState:
        folder = self.log_folder
        if state.file_path is not None and state.file_path.parent.is_dir():
            folder = state.file_path.parent
        file_path = self.file_picker.pick_file_to_open(folder)
        if file_path is None:
            return state
        return self._switch_file(state, file_path)

    def _switch_file(self, state: LogViewState, file_path) -> LogViewState:
        logger.info("Selected log file %s", file_path)
        return self._reload(replace(state, file_path=Path(file_path)))

    def _refresh_tick(self, state: LogViewState, action: RefreshTick) -> LogViewState:
        if not state.auto_refresh_active or not self.scheduler.is_current(action.generation):
            logger.debug("Dropping stale refresh tick (run %d)", action.generation)
            return state
        return self._load(state, Load())

    def _set_filter_kind(self, state: LogViewState, action: SetFilterKind) -> LogViewState:
        self.settings_store.set(keys.LOG_FILTER, LogFilter(action.kind).value)
        return self._refilter(state)

    def _set_filter_text(self, state: LogViewState, action: SetFilterText) -> LogViewState:
        self.settings_store.set(keys.LOG_FILTER_TEXT, action.text)
        return self._refilter(state)

    def _set_level(self, state: LogViewState, action: SetLevel) -> LogViewState:
        self.settings_store.set(keys.LOG_LEVEL, LogLevel(action.level).value)
        return self._refilter(state)

    def _set_show_timestamps(self, state: LogViewState, action: SetShowTimestamps) -> LogViewState:
        self.settings_store.set(keys.SHOW_TIMESTAMPS, bool(action.show))
        return self._refilter(state)

    def _set_font_size(self, state: LogViewState, action: SetFontSize) -> LogViewState:
        self.settings_store.set(keys.FONT_SIZE, clamp_font_size(action.size))
        return state

    def _toggle_goto_last(self, state: LogViewState, action: ToggleGotoLast) -> LogViewState:
        self.settings_store.set(keys.GOTO_LAST, not self.settings.goto_last)
        return state

    def _save(self, state: LogViewState, action: Save) -> LogViewState:
        target = self.file_picker.pick_file_to_save(self.save_folder, self.save_name)
        if target is None:
            return state

        try:
            write_log_file(target, state.filtered_lines)
        except FileWriteError as e:
            logger.error(str(e))
            return replace(state, error=str(e))

        logger.info("Saved %d lines to %s", len(state.filtered_lines), target)
        return replace(state, error=None, last_saved=Path(target))
