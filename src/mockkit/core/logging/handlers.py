# src/mockkit/core/logging/handlers.py
"""
Handler factories for logging.dictConfig.

Each function returns a handler *configuration dict* (not a handler instance),
so they are pure and easy to assert on in tests. The builder registers them
under the names "console", "file", "error_file" and "error_console".
"""

from mockkit.config.settings import Settings
from pathlib import Path


def get_console_handler(settings: Settings) -> dict:
    """
    Stream handler for every record at or above LOG_LEVEL.

    Uses the "json" formatter when LOG_FORMAT is "json", otherwise "standard".
    Writes to stderr (StreamHandler default) so pytest's capture keeps it
    apart from print() output.
    """
    return {
        "class": "logging.StreamHandler",
        "formatter": "json" if settings.LOG_FORMAT == "json" else "standard",
        "level": settings.LOG_LEVEL,
        "filters": ["test_id"],
    }


def get_file_handler(settings: Settings) -> dict:
    file_path = str(Path(settings.LOG_DIR) / "mockkit.log")
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "json" if settings.LOG_FORMAT == "json" else "standard",
        "level": settings.LOG_LEVEL,
        "filename": file_path,
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": ["test_id"],
    }


# Errors go to their own file so failed verifications are easy to find after a long run.
def get_error_file_handler(settings: Settings) -> dict:
    error_file_path = str(Path(settings.LOG_DIR) / "errors.log")
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "json",
        "level": "ERROR",
        "filename": error_file_path,
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": ["test_id"],
    }


def get_error_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": "json",
        "level": "ERROR",
        "filters": ["test_id"],
    }
