"""
Unit tests for log line parsing, file loading and saving
"""
import os
import stat
from dataclasses import FrozenInstanceError

import pytest
from unittest.mock import patch

from LogView.errors import FileReadError, FileWriteError
from LogView.UI.views.log_viewer.log_parser import (
    LogColor,
    LogLevel,
    LogLine,
    line_color,
    parse_text,
)
from LogView.UI.views.log_viewer.log_reader import read_log_file, write_log_file


SAMPLE_LOG = (
    "2024-01-01 10:00:00 [Debug] cache warmed\n"
    "2024-01-01 10:00:01 [Info] start\n"
    "2024-01-01 10:00:02 [Warning] slow response\n"
    "2024-01-01 10:00:03 [Error] boom\n"
    "plain line without a tag\n"
)


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "App.log"
    path.write_text(SAMPLE_LOG, encoding="utf-8")
    return path


class TestLineColor:
    """Color tagging from bracketed severity tags"""

    @pytest.mark.parametrize("text, color", [
        ("x [Debug] y", LogColor.GRAY),
        ("x [Info] y", LogColor.PRIMARY),
        ("x [Warning] y", LogColor.ORANGE),
        ("x [Error] y", LogColor.RED),
        ("no tag here", LogColor.PRIMARY),
        ("lowercase [error] is not a tag", LogColor.PRIMARY),
    ])
    def test_color_from_tag(self, text, color):
        assert line_color(text) == color

    def test_first_tag_in_check_order_wins(self):
        """Debug is checked before Error, regardless of position in the text"""
        assert line_color("[Error] while handling [Debug] check") == LogColor.GRAY
        assert line_color("[Error] after [Warning]") == LogColor.ORANGE

    def test_level_tags(self):
        assert [level.tag for level in LogLevel] == ["[Debug]", "[Info]", "[Warning]", "[Error]"]


class TestParseText:
    """Splitting file content into lines"""

    def test_trailing_newline_is_dropped(self):
        lines = parse_text("a\nb\n")
        assert [line.text for line in lines] == ["a", "b"]

    def test_last_line_without_newline_is_kept(self):
        lines = parse_text("a\nb")
        assert [line.text for line in lines] == ["a", "b"]

    def test_only_one_trailing_segment_is_dropped(self):
        lines = parse_text("a\n\n")
        assert [line.text for line in lines] == ["a", ""]

    def test_empty_content(self):
        assert parse_text("") == []

    def test_each_line_gets_unique_id(self):
        lines = parse_text("same\nsame\n")
        assert lines[0].text == lines[1].text
        assert lines[0].id != lines[1].id

    def test_lines_are_immutable(self):
        line = LogLine(text="x")
        with pytest.raises(FrozenInstanceError):
            line.text = "y"


class TestReadLogFile:
    """Whole-file loading"""

    def test_no_file_returns_empty(self):
        assert read_log_file(None) == []

    def test_reads_and_tags_lines(self, sample_file):
        lines = read_log_file(sample_file)

        assert len(lines) == 5
        assert lines[0].text == "2024-01-01 10:00:00 [Debug] cache warmed"
        assert [line.color for line in lines] == [
            LogColor.GRAY,
            LogColor.PRIMARY,
            LogColor.ORANGE,
            LogColor.RED,
            LogColor.PRIMARY,
        ]

    def test_missing_file_raises(self, tmp_path):
        missing = tmp_path / "missing.log"
        with pytest.raises(FileReadError) as exc_info:
            read_log_file(missing)

        assert exc_info.value.path == missing
        assert "not found" in str(exc_info.value)

    def test_invalid_encoding_raises(self, tmp_path):
        path = tmp_path / "binary.log"
        path.write_bytes(b"ok line\n\xff\xfe broken\n")

        with pytest.raises(FileReadError) as exc_info:
            read_log_file(path)

        assert "encoding" in exc_info.value.reason

    def test_lone_carriage_return_is_not_a_line_break(self, tmp_path):
        path = tmp_path / "progress.log"
        path.write_bytes(b"t [Info] progress 10%\rprogress 20%\n")

        lines = read_log_file(path)

        assert [line.text for line in lines] == ["t [Info] progress 10%\rprogress 20%"]

    def test_crlf_is_kept_in_line_text(self, tmp_path):
        path = tmp_path / "windows.log"
        path.write_bytes(b"a [Info] x\r\nb [Error] y\r\n")

        lines = read_log_file(path)

        assert [line.text for line in lines] == ["a [Info] x\r", "b [Error] y\r"]
        assert lines[1].color == LogColor.RED

    def test_directory_raises(self, tmp_path):
        with pytest.raises(FileReadError):
            read_log_file(tmp_path)

    def test_permission_error_raises(self, sample_file):
        with patch("pathlib.Path.read_bytes", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(FileReadError) as exc_info:
                read_log_file(sample_file)

        assert exc_info.value.reason == "permission denied"


class TestWriteLogFile:
    """Saving lines to disk"""

    def test_writes_newline_joined_text(self, tmp_path):
        target = tmp_path / "Saved.log"
        write_log_file(target, [LogLine(text="one"), LogLine(text="two")])

        assert target.read_text(encoding="utf-8") == "one\ntwo"

    def test_overwrites_existing_file(self, tmp_path):
        target = tmp_path / "Saved.log"
        target.write_text("old content that is longer", encoding="utf-8")

        write_log_file(target, [LogLine(text="new")])

        assert target.read_text(encoding="utf-8") == "new"

    def test_no_temporary_files_left(self, tmp_path):
        target = tmp_path / "Saved.log"
        write_log_file(target, [LogLine(text="x")])

        assert os.listdir(tmp_path) == ["Saved.log"]

    def test_missing_directory_raises(self, tmp_path):
        target = tmp_path / "no-such-dir" / "Saved.log"

        with pytest.raises(FileWriteError) as exc_info:
            write_log_file(target, [LogLine(text="x")])

        assert exc_info.value.path == target
        assert not target.exists()

    def test_failed_replace_keeps_original(self, tmp_path):
        target = tmp_path / "Saved.log"
        target.write_text("original", encoding="utf-8")

        with patch("os.replace", side_effect=OSError(28, "No space left on device")):
            with pytest.raises(FileWriteError):
                write_log_file(target, [LogLine(text="new")])

        assert target.read_text(encoding="utf-8") == "original"
        assert os.listdir(tmp_path) == ["Saved.log"]

    def test_round_trip(self, sample_file, tmp_path):
        target = tmp_path / "copy.log"
        write_log_file(target, read_log_file(sample_file))

        reloaded = read_log_file(target)
        assert [line.text for line in reloaded] == [line.text for line in read_log_file(sample_file)]
        assert target.read_text(encoding="utf-8") + "\n" == SAMPLE_LOG

    def test_round_trip_keeps_crlf_bytes(self, tmp_path):
        source = tmp_path / "windows.log"
        source.write_bytes(b"a [Info] x\r\nb [Error] y\r\n")
        target = tmp_path / "copy.log"

        write_log_file(target, read_log_file(source))

        assert target.read_bytes() + b"\n" == source.read_bytes()


@pytest.mark.skipif(os.name != "posix", reason="POSIX file modes")
class TestSavedFileMode:
    """Saved files get normal permissions, not the temp file's 0600"""

    @pytest.fixture
    def umask_022(self):
        previous = os.umask(0o022)
        yield
        os.umask(previous)

    def test_new_file_follows_umask(self, tmp_path, umask_022):
        target = tmp_path / "Saved.log"
        write_log_file(target, [LogLine(text="x")])

        assert stat.S_IMODE(target.stat().st_mode) == 0o644

    def test_overwrite_keeps_existing_mode(self, tmp_path, umask_022):
        target = tmp_path / "Saved.log"
        target.write_text("old", encoding="utf-8")
        os.chmod(target, 0o640)

        write_log_file(target, [LogLine(text="new")])

        assert stat.S_IMODE(target.stat().st_mode) == 0o640
        assert target.read_text(encoding="utf-8") == "new"
