"""
LogView persistence
"""

from .settings_store import MemorySettingsStore, SettingsStore, SqliteSettingsStore

__all__ = [
    'SettingsStore',
    'MemorySettingsStore',
    'SqliteSettingsStore',
]
