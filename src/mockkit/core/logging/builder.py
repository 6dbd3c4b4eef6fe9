# src/mockkit/core/logging/builder.py
"""
Logging builder: create and apply a dictConfig logging configuration.

This module:
 - builds a dictConfig-compatible mapping from Settings (make_dict_config)
 - applies it (setup_logging), creating LOG_DIR first when file logging is on

Configuration knobs (on your Settings object):
 - LOG_LEVEL, LOG_FORMAT, LOG_TO_STDOUT, LOG_DIR, LOG_MAX_BYTES, LOG_BACKUP_COUNT, ENV
 - MOCK_LOG_LEVEL: level of the "mockkit" logger. The engine logs every setup and
   dispatch at DEBUG, which is noisy in a big suite; WARNING keeps it quiet by default.

Both functions only read attributes, so any duck-typed object with the same
names (SimpleNamespace in tests) works as well as a Settings instance.
"""

from __future__ import annotations

from pathlib import Path
import logging
import logging.config

from mockkit.utils.project import get_project_name

from .formatters import JsonFormatter, ColorFormatter
from .filters import TestIdFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)

# Settings type (avoid calling get_settings() here to prevent import-time side effects)
from mockkit.config.settings import Settings

ENGINE_LOGGER = "mockkit"


def _file_logging_enabled(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping using the provided settings.

    The returned mapping includes:
      - formatters: "standard" (color or plain) and "json"
      - filters: "test_id"
      - handlers: console, plus file/error_file OR error_console depending on LOG_TO_STDOUT
      - loggers: root and the engine logger ("mockkit")
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(test_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(),
        },
    }

    filters = {
        "test_id": {"()": TestIdFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}

    if _file_logging_enabled(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            # the engine logger only sets a level; records propagate to the root handlers
            ENGINE_LOGGER: {
                "level": getattr(settings, "MOCK_LOG_LEVEL", "WARNING"),
                "propagate": True,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Initialize logging using settings.

    Steps:
      1. Ensure LOG_DIR exists when writing files.
      2. Apply dictConfig(make_dict_config(settings)).
      3. Register a TestIdFilter on the root logger as a safety net, so
         handlers added later (pytest's caplog handler) still see `test_id`.
    """
    if _file_logging_enabled(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    root = logging.getLogger()
    if not any(isinstance(f, TestIdFilter) for f in root.filters):
        root.addFilter(TestIdFilter())
