import logging


def normalize_choice(value: str | None) -> str | None:
    """
    Strip and lowercase a choice value (e.g. " Strict " -> "strict").
    Non-string values are returned unchanged so the field type check can reject them.
    """
    if not isinstance(value, str):
        return value
    return value.strip().lower()


def normalize_level(value: str | int | None) -> str | int | None:
    """
    Turn a logging level into its canonical uppercase name.

    - "debug" / " Debug " -> "DEBUG"
    - 20 -> "INFO" (numeric levels known to `logging`)
    - unknown numbers are returned as-is and fail validation later
    """
    if value is None:
        return None
    if isinstance(value, int):
        name = logging.getLevelName(value)
        # getLevelName returns "Level N" for unknown numbers
        return name if not name.startswith("Level ") else value
    return value.strip().upper()
