"""
Log Viewer Package - Filtered, colorized view of a single log file

This package provides the log panel with:
- Whole-file loading with severity-tag colors
- Level threshold, text filter and timestamp stripping
- Periodic auto-reload with immediate cancellation
- Saving the filtered view to a new file

Package Structure:
- view: Main view orchestration (LogViewerView)
- components: Header and footer panels (LogHeaderPanel, LogFooterPanel)
- log_table: Colored line display (LogLinesPanel)
- file_picker: Modal open / save dialogs (TextualFilePicker)
- controller: Actions and state transitions (LogController, LogViewState)
- auto_refresh: Periodic reload scheduling (AutoRefreshScheduler)
- log_filter: Filter pipeline (filter_log)
- log_reader: File loading and saving (read_log_file, write_log_file)
- log_parser: Data models (LogLine, LogColor, LogLevel, LogFilter)
- settings: Typed preferences (LogViewSettings)
"""

# Import main view for external use
from .view import LogViewerView

from .components import LogHeaderPanel, LogFooterPanel
from .log_table import LogLinesPanel
from .file_picker import TextualFilePicker, OpenLogScreen, SaveLogScreen
from .controller import (
    LogController,
    LogViewState,
    FilePicker,
    Appear,
    ToggleAutoRefresh,
    Clear,
    Load,
    Open,
    SetFilterKind,
    SetFilterText,
    SetLevel,
    SetShowTimestamps,
    SetFontSize,
    ToggleGotoLast,
    Save,
    RefreshTick,
)
from .auto_refresh import AutoRefreshScheduler, SchedulerState
from .log_filter import filter_log
from .log_reader import read_log_file, write_log_file
from .log_parser import LogLine, LogColor, LogLevel, LogFilter
from .settings import LogViewSettings

__all__ = [
    # Main view
    'LogViewerView',

    # UI components
    'LogHeaderPanel',
    'LogFooterPanel',
    'LogLinesPanel',
    'TextualFilePicker',
    'OpenLogScreen',
    'SaveLogScreen',

    # Core components
    'LogController',
    'LogViewState',
    'FilePicker',
    'AutoRefreshScheduler',
    'SchedulerState',
    'filter_log',
    'read_log_file',
    'write_log_file',
    'LogViewSettings',

    # Actions
    'Appear',
    'ToggleAutoRefresh',
    'Clear',
    'Load',
    'Open',
    'SetFilterKind',
    'SetFilterText',
    'SetLevel',
    'SetShowTimestamps',
    'SetFontSize',
    'ToggleGotoLast',
    'Save',
    'RefreshTick',

    # Data models
    'LogLine',
    'LogColor',
    'LogLevel',
    'LogFilter',
]
