"""
Log Parser Module - Log line types and severity tagging

Handles:
- LogLine records built from raw file lines
- Color tagging derived from bracketed severity tags
- Level thresholds (LogLevel) and filter kinds (LogFilter)
"""
import uuid
from dataclasses import dataclass, field
from enum import Enum


class LogColor(Enum):
    """Display color assigned to a log line"""
    GRAY = "gray"
    PRIMARY = "primary"
    ORANGE = "orange"
    RED = "red"

    @property
    def style(self) -> str:
        """Get the rich style used to render this color"""
        styles = {
            LogColor.GRAY: "grey50",
            LogColor.PRIMARY: "default",
            LogColor.ORANGE: "dark_orange",
            LogColor.RED: "red",
        }
        return styles.get(self, "default")


class LogLevel(Enum):
    """Level threshold, ordered debug < info < warning < error"""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def tag(self) -> str:
        """Bracketed tag the upstream logger writes for this level"""
        return f"[{self.value.capitalize()}]"

    @property
    def rank(self) -> int:
        return list(LogLevel).index(self)

    def at_or_above(self):
        """Levels kept when this level is the threshold"""
        return [level for level in LogLevel if level.rank >= self.rank]

    def __lt__(self, other):
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.rank < other.rank


class LogFilter(Enum):
    """How the filter text is matched against line text"""
    NONE = "none"
    INCLUDES = "includes"
    EXCLUDES = "excludes"
    PREFIX = "prefix"


# Checked in this order; the first tag found decides the color
COLOR_TAGS = [
    (LogLevel.DEBUG.tag, LogColor.GRAY),
    (LogLevel.INFO.tag, LogColor.PRIMARY),
    (LogLevel.WARNING.tag, LogColor.ORANGE),
    (LogLevel.ERROR.tag, LogColor.RED),
]


@dataclass(frozen=True)
class LogLine:
    """One line of the log file with its derived color"""
    text: str
    color: LogColor = LogColor.PRIMARY
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __str__(self) -> str:
        return self.text


def line_color(text: str) -> LogColor:
    """
    Determine the color of a log line from its severity tag

    Args:
        text: The raw line text

    Returns:
        The color of the first matching tag, PRIMARY when none match
    """
    for tag, color in COLOR_TAGS:
        if tag in text:
            return color
    return LogColor.PRIMARY


def parse_line(text: str) -> LogLine:
    """Build a LogLine from one raw line"""
    return LogLine(text=text, color=line_color(text))


def parse_text(content: str) -> list:
    """
    Split file content into LogLine objects

    Lines are separated by "\\n"; the single empty segment produced by a
    trailing newline is dropped.

    Args:
        content: Full text of the log file

    Returns:
        List of LogLine objects in file order
    """
    segments = content.split("\n")
    if segments and segments[-1] == "":
        segments.pop()
    return [parse_line(segment) for segment in segments]

