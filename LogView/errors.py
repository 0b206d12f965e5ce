"""
LogView exceptions
"""
from pathlib import Path


class LogViewError(Exception):
    """Base class for LogView errors"""


class ConfigError(LogViewError):
    """Invalid configuration value"""


class FileReadError(LogViewError):
    """A log file could not be read or decoded"""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Unable to read log file {self.path}: {reason}")


class FileWriteError(LogViewError):
    """The filtered log could not be written"""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Unable to save log to {self.path}: {reason}")
