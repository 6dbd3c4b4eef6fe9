"""
Exception capture helpers.

`pytest.raises` is the right tool when a test expects a specific exception.
These helpers cover the other case: the test doesn't care whether something
raises, but wants to inspect the exception if it does.

    error = record_exception(parse, "not a number")
    assert error is None or isinstance(error, ValueError)
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


def record_exception(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Exception | None:
    """
    Call `func(*args, **kwargs)` and return the exception it raised, or None.

    Only `Exception` subclasses are captured; KeyboardInterrupt/SystemExit
    still propagate.
    """
    try:
        func(*args, **kwargs)
    except Exception as exc:
        logger.debug("record.exception", extra={"callable": getattr(func, "__name__", repr(func)), "error": repr(exc)})
        return exc
    return None


async def record_exception_async(func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> Exception | None:
    """
    Await `func(*args, **kwargs)` and return the exception it raised, or None.

    Catches both an exception raised while creating the awaitable and one
    raised while awaiting it.
    """
    try:
        await func(*args, **kwargs)
    except Exception as exc:
        logger.debug("record.exception", extra={"callable": getattr(func, "__name__", repr(func)), "error": repr(exc)})
        return exc
    return None


__all__ = ["record_exception", "record_exception_async"]
