"""
Core pytest configuration for the entire test suite.

This module provides only what ALL tests need: the logging configuration for
the session and the mockkit pytest fixtures.

Domain-specific fixtures are located in:
- tests/test_fixtures/model_fixtures.py    (Student/Teacher/Money records)
- tests/test_fixtures/mock_fixtures.py     (contracts and pre-built mocks)

They are imported at the bottom of this file so every test module can use them
without importing anything itself.
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import logging

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Set the level for noisy third-party loggers at import time, before the fixture
# modules import Faker. Keep this block above the mockkit/fixture imports.
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "asyncio",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest

from mockkit.config import get_settings
from mockkit.core.logging.builder import setup_logging

logger = logging.getLogger(__name__)


# The `autouse=True` part means that this fixture will be automatically used by pytest
# without explicitly including it in your test function parameters.
@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install mockkit logging for the entire test session.

    What this does:
      - Calls `setup_logging(get_settings())` so the formatters, handlers and the
        test_id filter are active for every test.
      - Does not touch pytest's own capture handlers: `caplog` attaches its handler
        to the root logger for each test phase, after this fixture has run.

    The engine logger ("mockkit") stays at MOCK_LOG_LEVEL (WARNING by default).
    Tests asserting on engine events raise it locally:
        caplog.set_level(logging.DEBUG, logger="mockkit")
    """
    setup_logging(get_settings())
    logger.debug("test session logging configured")
    yield


@pytest.fixture
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    """
    Drop the cached Settings before and after a test that changes MOCK_* / LOG_*
    environment variables, so no other test sees the modified values.
    """
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


# mockkit pytest plugin fixtures. When the package is installed the pytest11 entry
# point registers them too; importing them here keeps the suite runnable from a
# plain checkout (pythonpath = src).
from mockkit.testing.plugin import mock_factory, mock_test_id  # noqa: E402,F401

# Model / mock fixtures
from mockkit.tests.test_fixtures.model_fixtures import (  # noqa: E402,F401
    fake,
    students,
    john,
    jane,
    random_student,
    teacher,
)
from mockkit.tests.test_fixtures.mock_fixtures import (  # noqa: E402,F401
    student_service_mock,
    strict_student_service_mock,
    value_contract,
    value_mock,
)
