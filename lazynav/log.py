"""Logging setup.

The terminal belongs to the UI, so records only ever go to a file, and only
when debugging was requested.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Any

from platformdirs import user_log_dir

from .runtime.config import APP_NAME

LOG_FILENAME = "lazynav.log"


def log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def setup_logs(debug: bool = False, path: Path | None = None) -> Path | None:
    """Configure the ``lazynav`` logger; return the log file when one is used."""
    handlers: dict[str, dict[str, Any]] = {"null": {"class": "logging.NullHandler"}}
    handler_names = ["null"]
    if debug:
        path = path or log_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.FileHandler",
            "filename": str(path),
            "encoding": "utf-8",
            "formatter": "file_format",
            "level": "DEBUG",
        }
        handler_names = ["file"]

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "file_format": {
                    "format": "{asctime}.{msecs:03.0f} {levelname:<7} [{name}.{funcName}:{lineno}] {message}",
                    "style": "{",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": handlers,
            "loggers": {
                APP_NAME: {
                    "level": "DEBUG" if debug else "WARNING",
                    "handlers": handler_names,
                    "propagate": False,
                },
            },
        }
    )
    return path if debug else None


__all__ = ["LOG_FILENAME", "log_path", "setup_logs"]
