"""
Settings Store Module - Persisted key-value preferences

Provides:
- SettingsStore protocol (get / set by key name)
- SqliteSettingsStore backed by a single sqlite table
- MemorySettingsStore for tests and throwaway sessions
"""
import json
import logging
import sqlite3
import threading
from pathlib import Path
from typing import Any, Dict, Protocol

logger = logging.getLogger(__name__)


class SettingsStore(Protocol):
    """Key-value preferences that survive restarts"""

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...


class MemorySettingsStore:
    """Dictionary backed settings store"""

    def __init__(self, initial: Dict[str, Any] = None):
        self._values: Dict[str, Any] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._values[key] = value


class SqliteSettingsStore:
    """
    Settings store persisted in a sqlite database

    Values are stored JSON encoded in a single ``settings`` table. The
    connection is shared between the UI thread and the auto-refresh thread,
    so every statement runs under a lock.
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.__conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
        self.__lock = threading.Lock()
        self.create_tables()

    def __enter__(self):
        """
        Lets you write:     with SqliteSettingsStore(path) as store:
        """
        return self

    def __exit__(self, exc_type, exc, tb):
        """
        Commit when the block succeeded, roll back otherwise, always close
        """
        with self.__lock:
            if exc_type is None:
                self.__conn.commit()
            else:
                self.__conn.rollback()
            self.__conn.close()
        return False

    def close(self) -> None:
        with self.__lock:
            self.__conn.commit()
            self.__conn.close()

    def create_tables(self) -> None:
        with self.__lock:
            self.__conn.execute('''
            CREATE TABLE IF NOT EXISTS settings(
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
            ''')
            self.__conn.commit()

    def get(self, key: str, default: Any = None) -> Any:
        with self.__lock:
            row = self.__conn.execute(
                "SELECT value FROM settings WHERE key = ?", (key,)
            ).fetchone()

        if row is None:
            return default

        try:
            return json.loads(row[0])
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable value for setting %s", key)
            return default

    def set(self, key: str, value: Any) -> None:
        encoded = json.dumps(value)
        with self.__lock:
            self.__conn.execute(
                "INSERT INTO settings (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, encoded),
            )
            self.__conn.commit()
