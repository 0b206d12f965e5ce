"""
Unit tests for the log filter pipeline
"""
import itertools

import pytest

from LogView.UI.views.log_viewer.log_filter import (
    filter_by_level,
    filter_by_text,
    filter_log,
    strip_timestamp,
)
from LogView.UI.views.log_viewer.log_parser import LogFilter, LogLevel, parse_text


@pytest.fixture
def lines():
    return parse_text(
        "09:00 [Debug] warmup\n"
        "09:01 [Info] Radio > Radio connected\n"
        "09:02 [Warning] x > Panadapter slow\n"
        "09:03 [Error] Radio failed\n"
        "untagged line\n"
    )


def texts(lines):
    return [line.text for line in lines]


class TestLevelStage:
    """Level threshold filtering"""

    def test_debug_keeps_everything(self, lines):
        assert filter_by_level(lines, LogLevel.DEBUG) == lines

    def test_info_keeps_info_and_above(self, lines):
        assert texts(filter_by_level(lines, LogLevel.INFO)) == [
            "09:01 [Info] Radio > Radio connected",
            "09:02 [Warning] x > Panadapter slow",
            "09:03 [Error] Radio failed",
        ]

    def test_warning_keeps_warning_and_error(self, lines):
        assert texts(filter_by_level(lines, LogLevel.WARNING)) == [
            "09:02 [Warning] x > Panadapter slow",
            "09:03 [Error] Radio failed",
        ]

    def test_error_keeps_only_errors(self, lines):
        assert texts(filter_by_level(lines, LogLevel.ERROR)) == ["09:03 [Error] Radio failed"]

    def test_levels_are_monotonic(self, lines):
        kept = {level: {line.id for line in filter_by_level(lines, level)} for level in LogLevel}

        assert kept[LogLevel.ERROR] <= kept[LogLevel.WARNING]
        assert kept[LogLevel.WARNING] <= kept[LogLevel.INFO]
        assert kept[LogLevel.INFO] <= kept[LogLevel.DEBUG]

    def test_level_ordering(self):
        assert LogLevel.DEBUG < LogLevel.INFO < LogLevel.WARNING < LogLevel.ERROR


class TestFilterStage:
    """Filter kind matching"""

    def test_none_is_noop(self, lines):
        assert filter_by_text(lines, LogFilter.NONE, "anything") == lines

    def test_includes(self, lines):
        assert texts(filter_by_text(lines, LogFilter.INCLUDES, "Radio")) == [
            "09:01 [Info] Radio > Radio connected",
            "09:03 [Error] Radio failed",
        ]

    def test_excludes(self, lines):
        assert texts(filter_by_text(lines, LogFilter.EXCLUDES, "Radio")) == [
            "09:00 [Debug] warmup",
            "09:02 [Warning] x > Panadapter slow",
            "untagged line",
        ]

    def test_includes_empty_text_keeps_all(self, lines):
        assert filter_by_text(lines, LogFilter.INCLUDES, "") == lines

    def test_excludes_empty_text_keeps_none(self, lines):
        assert filter_by_text(lines, LogFilter.EXCLUDES, "") == []

    def test_prefix_requires_delimiter(self):
        candidates = parse_text("x > Radio connected\nx >Radio connected\n")
        assert texts(filter_by_text(candidates, LogFilter.PREFIX, "Radio")) == ["x > Radio connected"]

    def test_matching_is_case_sensitive(self, lines):
        assert filter_by_text(lines, LogFilter.INCLUDES, "radio") == []


class TestTimestampStage:
    """Timestamp stripping"""

    def test_strips_text_before_first_bracket(self):
        line = parse_text("2024-01-01 [Error] boom [x]\n")[0]
        stripped = strip_timestamp(line)

        assert stripped.text == "[Error] boom [x]"
        assert stripped.id == line.id
        assert stripped.color == line.color

    def test_no_bracket_is_unchanged(self):
        line = parse_text("no brackets at all\n")[0]
        assert strip_timestamp(line) is line

    def test_leading_bracket_is_unchanged(self):
        line = parse_text("[Info] already bare\n")[0]
        assert strip_timestamp(line).text == "[Info] already bare"

    def test_original_line_not_mutated(self):
        line = parse_text("10:00 [Info] start\n")[0]
        strip_timestamp(line)
        assert line.text == "10:00 [Info] start"


class TestFilterLog:
    """Full pipeline"""

    SCENARIO = "2024-01-01 [Info] start\n2024-01-01 [Error] boom\n"

    def test_warning_threshold_with_timestamps(self):
        result = filter_log(parse_text(self.SCENARIO), LogLevel.WARNING, LogFilter.NONE, "", True)
        assert texts(result) == ["2024-01-01 [Error] boom"]

    def test_warning_threshold_without_timestamps(self):
        result = filter_log(parse_text(self.SCENARIO), LogLevel.WARNING, LogFilter.NONE, "", False)
        assert texts(result) == ["[Error] boom"]

    def test_stages_apply_in_order(self, lines):
        result = filter_log(lines, LogLevel.INFO, LogFilter.PREFIX, "Radio", False)
        assert texts(result) == ["[Info] Radio > Radio connected"]

    def test_raw_lines_untouched_for_all_settings(self, lines):
        snapshot = [(line.id, line.text, line.color) for line in lines]

        for level, kind, show in itertools.product(LogLevel, LogFilter, [True, False]):
            filter_log(lines, level, kind, "Radio", show)

        assert [(line.id, line.text, line.color) for line in lines] == snapshot

    def test_result_is_subsequence_of_input(self, lines):
        ids = [line.id for line in lines]
        for level, kind in itertools.product(LogLevel, LogFilter):
            result_ids = [line.id for line in filter_log(lines, level, kind, "x", True)]
            positions = [ids.index(line_id) for line_id in result_ids]
            assert positions == sorted(positions)

    def test_returns_new_list(self, lines):
        result = filter_log(lines, LogLevel.DEBUG, LogFilter.NONE, "", True)
        assert result == lines
        assert result is not lines
