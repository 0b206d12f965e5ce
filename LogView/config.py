"""
LogView configuration

Values come from the environment, optionally seeded from a .env file.
"""
import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

from LogView.errors import ConfigError

DEFAULT_APP_NAME = "LogView"
DEFAULT_SAVE_NAME = "Saved.log"
DEFAULT_REFRESH_INTERVAL = 1.0


def _default_home() -> Path:
    return Path.home() / ".logview"


def _default_save_folder() -> Path:
    desktop = Path.home() / "Desktop"
    return desktop if desktop.is_dir() else Path.home()


class AppConfig(BaseModel):
    """Resolved application settings"""
    app_name: str = DEFAULT_APP_NAME
    log_folder: Path
    log_file: Optional[Path] = None
    save_folder: Path
    save_name: str = DEFAULT_SAVE_NAME
    settings_db: Path
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    app_log_dir: Path

    @field_validator("refresh_interval")
    @classmethod
    def _positive_interval(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value

    @field_validator("app_name", "save_name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @property
    def default_log_file(self) -> Path:
        """The file opened at startup: the explicit file or <folder>/<app name>.log"""
        if self.log_file is not None:
            return self.log_file
        return self.log_folder / f"{self.app_name}.log"


def load_config(environ: Optional[Mapping[str, str]] = None, dotenv: bool = True) -> AppConfig:
    """
    Build the configuration from environment variables

    Args:
        environ: Variables to read (default: os.environ)
        dotenv: Load a .env file into os.environ first

    Raises:
        ConfigError: A variable holds an invalid value
    """
    if dotenv:
        load_dotenv()
    env = os.environ if environ is None else environ

    home = _default_home()
    values = {
        "app_name": env.get("LOGVIEW_APP_NAME", DEFAULT_APP_NAME),
        "log_folder": env.get("LOGVIEW_LOG_FOLDER") or Path.cwd(),
        "log_file": env.get("LOGVIEW_LOG_FILE") or None,
        "save_folder": env.get("LOGVIEW_SAVE_FOLDER") or _default_save_folder(),
        "save_name": env.get("LOGVIEW_SAVE_NAME", DEFAULT_SAVE_NAME),
        "settings_db": env.get("LOGVIEW_SETTINGS_DB") or home / "settings.db",
        "refresh_interval": env.get("LOGVIEW_REFRESH_INTERVAL", DEFAULT_REFRESH_INTERVAL),
        "app_log_dir": env.get("LOGVIEW_APP_LOG_DIR") or home / "app_log",
    }

    try:
        config = AppConfig(**values)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigError(f"Invalid LogView configuration: {problems}")

    return config.model_copy(update={
        "log_folder": config.log_folder.expanduser(),
        "log_file": config.log_file.expanduser() if config.log_file else None,
        "save_folder": config.save_folder.expanduser(),
        "settings_db": config.settings_db.expanduser(),
        "app_log_dir": config.app_log_dir.expanduser(),
    })
