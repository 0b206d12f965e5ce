#!/usr/bin/env python3
"""
LogView - Main Entry Point
Run the log viewer terminal UI
"""
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from LogView.config import load_config
from LogView.errors import ConfigError
from LogView.UI import run_app


def setup_logging(log_dir: Path, level: int = logging.DEBUG) -> logging.Logger:
    """
    Send LogView's own diagnostics to <log_dir>/log_viewer.log

    Handlers are only attached once, so calling this again is harmless.
    """
    logger = logging.getLogger("LogView")
    logger.setLevel(level)

    if not logger.handlers:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / "log_viewer.log")
        file_handler.setLevel(level)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def main() -> None:
    try:
        config = load_config()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    logger = setup_logging(config.app_log_dir)
    logger.info("Starting LogView on %s", config.default_log_file)

    try:
        run_app(config)
    except KeyboardInterrupt:
        print("\nLogView terminated by user")
    except Exception as e:
        logger.exception("LogView crashed")
        print(f"\nError running LogView: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
