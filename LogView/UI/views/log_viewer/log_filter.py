"""
Log Filter Module - Level, text and timestamp filtering

The filtered view is always rebuilt from the raw lines:
1. Level stage: keep lines tagged with the threshold level or a stricter one
   (debug keeps everything, untagged lines included)
2. Filter stage: includes / excludes / prefix substring matching
3. Timestamp stage: optionally drop everything before the first "["
"""
from dataclasses import replace
from typing import List, Sequence

from .log_parser import LogFilter, LogLevel, LogLine

# Delimiter the upstream logger writes before a named sub-context
PREFIX_DELIMITER = " > "


def filter_by_level(lines: Sequence[LogLine], level: LogLevel) -> List[LogLine]:
    """Keep lines at or above the level threshold"""
    if level == LogLevel.DEBUG:
        return list(lines)

    tags = [kept.tag for kept in level.at_or_above()]
    return [line for line in lines if any(tag in line.text for tag in tags)]


def filter_by_text(lines: Sequence[LogLine], kind: LogFilter, text: str) -> List[LogLine]:
    """
    Apply the filter kind to the lines

    Matching is a literal substring test, so an empty text is contained in
    every line: includes keeps all lines and excludes keeps none.
    """
    if kind == LogFilter.INCLUDES:
        return [line for line in lines if text in line.text]
    if kind == LogFilter.EXCLUDES:
        return [line for line in lines if text not in line.text]
    if kind == LogFilter.PREFIX:
        needle = PREFIX_DELIMITER + text
        return [line for line in lines if needle in line.text]
    return list(lines)


def strip_timestamp(line: LogLine) -> LogLine:
    """Return a copy of the line starting at its first "[" """
    index = line.text.find("[")
    if index <= 0:
        return line
    return replace(line, text=line.text[index:])


def filter_log(
    lines: Sequence[LogLine],
    level: LogLevel,
    kind: LogFilter,
    text: str,
    show_timestamps: bool,
) -> List[LogLine]:
    """
    Build the filtered view of a log

    Args:
        lines: Raw lines, never modified
        level: Level threshold
        kind: Filter kind applied after the level stage
        text: Filter text
        show_timestamps: When False, text before the first "[" is dropped

    Returns:
        New list of LogLine objects
    """
    filtered = filter_by_level(lines, level)
    filtered = filter_by_text(filtered, kind, text)

    if not show_timestamps:
        filtered = [strip_timestamp(line) for line in filtered]

    return filtered
