"""
Log Viewer Settings Module - Typed access to the panel's persisted keys

The panel does not own its preferences; it reads and writes them through a
SettingsStore passed in by the caller.
"""
import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from LogView.database.settings_store import SettingsStore

from .log_parser import LogFilter, LogLevel

logger = logging.getLogger(__name__)

# Store keys
SHOW_TIMESTAMPS = "showTimestamps"
LOG_LEVEL = "logLevel"
LOG_FILTER = "logFilter"
LOG_FILTER_TEXT = "logFilterText"
FONT_SIZE = "fontSize"
AUTO_REFRESH = "autoRefresh"
GOTO_LAST = "gotoLast"

FONT_SIZE_MIN = 8
FONT_SIZE_MAX = 14


class LogViewSettings(BaseModel):
    """Typed snapshot of the log panel's persisted settings"""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    show_timestamps: bool = Field(False, alias=SHOW_TIMESTAMPS)
    level: LogLevel = Field(LogLevel.DEBUG, alias=LOG_LEVEL)
    filter_kind: LogFilter = Field(LogFilter.NONE, alias=LOG_FILTER)
    filter_text: str = Field("", alias=LOG_FILTER_TEXT)
    font_size: float = Field(12, ge=FONT_SIZE_MIN, le=FONT_SIZE_MAX, alias=FONT_SIZE)
    auto_refresh: bool = Field(False, alias=AUTO_REFRESH)
    goto_last: bool = Field(False, alias=GOTO_LAST)

    @classmethod
    def load(cls, store: SettingsStore) -> "LogViewSettings":
        """
        Read every key from the store

        A stored value that does not validate is replaced by the field
        default.
        """
        values = {}
        for field_info in cls.model_fields.values():
            value = store.get(field_info.alias, None)
            if value is not None:
                values[field_info.alias] = value

        try:
            return cls.model_validate(values)
        except ValidationError as e:
            for error in e.errors():
                key = error["loc"][0] if error["loc"] else None
                if key in values:
                    logger.warning("Invalid value %r for setting %s, using default", values[key], key)
                    del values[key]
            return cls.model_validate(values)


def clamp_font_size(value: float) -> float:
    """Keep a font size within the stepper range"""
    return max(FONT_SIZE_MIN, min(FONT_SIZE_MAX, value))
