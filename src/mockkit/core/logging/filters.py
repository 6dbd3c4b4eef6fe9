# src/mockkit/core/logging/filters.py
"""
Logging filters

Test ID filter and helpers for logging.

A single pytest session runs hundreds of tests and every mock logs its setups,
dispatches and verifications. To tell which test produced a given log line, the
running test's node id is stored in a context variable and stamped onto every
`LogRecord` as `record.test_id`.

How it is intended to be used
------------------------------
1. dictConfig declares the filter and attaches it to handlers:
     "filters": {"test_id": {"()": TestIdFilter}},
     "handlers": {"console": {..., "filters": ["test_id"]}}

2. The pytest plugin (mockkit.testing.plugin) calls `set_test_id(nodeid)` before
   each test and `reset_test_id(token)` after it.

3. Formatters can reference `%(test_id)s` safely: records logged outside a test get "-".

Testing
-------
- no id set -> record.test_id == "-"
- after set_test_id("abc") -> record.test_id == "abc"
- an explicit `extra={"test_id": ...}` wins over the context variable
"""

import logging
from logging import LogRecord
import contextvars

# contextvar for the running test id. Default None means "not inside a test".
_test_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "test_id", default=None
)


def set_test_id(test_id: str | None) -> contextvars.Token:
    """
    Set the test id in the current context and return the token to allow reset.
    """
    return _test_id_ctx.set(test_id)


def reset_test_id(token: contextvars.Token) -> None:
    """
    Restore the value that was current before the matching set_test_id() call.
    """
    _test_id_ctx.reset(token)


def get_test_id() -> str | None:
    """
    Return the current context's test id, or None outside a test.
    """
    return _test_id_ctx.get()


class TestIdFilter(logging.Filter):
    """
    Logging filter that guarantees every LogRecord has a `test_id` attribute.

    Order of precedence:
      - record.test_id (if provided through `extra`)
      - the context variable set by the pytest plugin
      - the sentinel "-"

    Always returns True: the filter annotates, it never drops records.
    """

    # keep pytest from collecting this class because of its Test* name
    __test__ = False

    def filter(self, record: LogRecord) -> bool:
        record.test_id = getattr(record, "test_id", None) or get_test_id() or "-"
        return True
