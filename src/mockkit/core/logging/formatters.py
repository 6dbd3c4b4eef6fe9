# src/mockkit/core/logging/formatters.py

"""
Custom logging formatters.

  - JsonFormatter: one JSON object per line, including every `extra` field the
    engine attaches (operation, mock, expected, actual, ...). Suited to CI log
    collection or grepping through a long test session.

  - ColorFormatter: compact, ANSI-colored lines for a developer terminal.

The builder (dictConfig) picks one based on `Settings.LOG_FORMAT`.

Note: mock call arguments end up in `extra` as their repr(). Do not feed real
secrets through mocks if logs are shipped anywhere.
"""

import json
import logging
from typing import Any
from logging import LogRecord
from mockkit.utils.project import get_project_version

PROJECT_VERSION = get_project_version()

# Attributes every LogRecord carries; they are either mapped explicitly below
# or not interesting enough to repeat as extras.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime", "test_id"}


class JsonFormatter(logging.Formatter):
    """
    Structured JSON formatter.

    Responsibilities:
      - Emit timestamp, level, logger, message, source location and the
        observability fields (service, env, version, test_id).
      - Include exception/stack information when present.
      - Copy `extra` attributes, stringifying anything json can't serialize.

    Construction:
      - env: environment name (e.g. "testing"); optional.
      - service: logical name to include in every line.
      - datefmt: passed through to logging.Formatter.formatTime.

    This method must never raise: values are checked one by one and
    `default=str` is the final safety net.
    """

    def __init__(self, *, env: str | None = None, service: str = "mockkit", datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service

    def format(self, record: LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "test_id": getattr(record, "test_id", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)

        for k, v in record.__dict__.items():
            if k in _RESERVED_ATTRS or k in log_record or k.startswith("_"):
                continue
            try:
                json.dumps(v)
                log_record[k] = v
            except (TypeError, ValueError):
                log_record[k] = str(v)

        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """
    Development-friendly colored formatter.

    Produces: TIMESTAMP | LEVEL | LOGGER | TEST_ID | MESSAGE [key=value ...]
    with the level name colorized. Engine extras (operation, mock, ...) are
    appended as key=value pairs so a plain terminal still shows the context.
    """

    COLOR_CODES = {
        "DEBUG": "\033[1;36;47m",   # bold cyan on white
        "INFO": "\033[32m",         # green
        "WARNING": "\033[33m",      # yellow
        "ERROR": "\033[31m",        # red
        "CRITICAL": "\033[1;41m",   # bold on red background
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        # reset right after the level so the color does not bleed into the message
        reset = self.COLOR_CODES["RESET"]
        timestamp = self.formatTime(record, self.datefmt)

        base = (
            f"{timestamp} | {color}{record.levelname:<8}{reset} | "
            f"{record.name:<24} | "
            f"{getattr(record, 'test_id', '-'):<10} | "
            f"{record.getMessage()}"
        )

        extras = {
            k: v
            for k, v in record.__dict__.items()
            if k not in _RESERVED_ATTRS and not k.startswith("_")
        }
        if extras:
            base += " " + " ".join(f"{k}={v}" for k, v in extras.items())

        if record.exc_info:
            base = base + "\n" + self.formatException(record.exc_info)

        return base
