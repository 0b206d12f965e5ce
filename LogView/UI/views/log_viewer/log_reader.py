"""
Log File Reader Module - Whole-file loading and saving

Handles:
- Reading a log file in full and splitting it into LogLine objects
- Strict decoding (a decode failure aborts the load)
- Line breaks are "\n" only; "\r" is kept as part of the line text
- Atomic writes of the filtered view
"""
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional

from LogView.errors import FileReadError, FileWriteError

from .log_parser import LogLine, parse_text

logger = logging.getLogger(__name__)


def read_log_file(file_path: Optional[Path]) -> List[LogLine]:
    """
    Read an entire log file

    Args:
        file_path: Path to the log file, or None when no file is selected

    Returns:
        List of LogLine objects; empty when file_path is None

    Raises:
        FileReadError: The file is missing, unreadable or not valid text
    """
    if file_path is None:
        return []

    path = Path(file_path)
    try:
        content = path.read_bytes().decode("utf-8")
    except FileNotFoundError:
        raise FileReadError(path, "file not found")
    except PermissionError:
        raise FileReadError(path, "permission denied")
    except IsADirectoryError:
        raise FileReadError(path, "is a directory")
    except UnicodeDecodeError as e:
        raise FileReadError(path, f"invalid encoding ({e.reason} at byte {e.start})")
    except OSError as e:
        raise FileReadError(path, e.strerror or str(e))

    lines = parse_text(content)
    logger.debug("Read %d lines from %s", len(lines), path)
    return lines


def _file_mode(path: Path) -> int:
    """Mode of the file being replaced, or the umask default for a new file"""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_log_file(file_path: Path, lines: Iterable[LogLine]) -> None:
    """
    Write lines to a file, newline-joined, replacing it atomically

    The text goes to a temporary file in the target directory which is then
    moved over the target, so a failed write never leaves a partial file.

    Args:
        file_path: Target file
        lines: Lines to write

    Raises:
        FileWriteError: The file could not be written
    """
    path = Path(file_path)
    text = "\n".join(line.text for line in lines)

    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.chmod(tmp_name, _file_mode(path))
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise FileWriteError(path, e.strerror or str(e))
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)

    logger.debug("Wrote %d bytes to %s", len(text), path)
