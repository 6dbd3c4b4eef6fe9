import pytest

from mockkit.config import get_settings
from mockkit.core.logging.builder import setup_logging


@pytest.fixture
def restore_logging():
    """
    Reinstall the session logging configuration after a test that calls
    setup_logging() with its own settings (file handlers in tmp_path, capsys streams).
    """
    yield
    setup_logging(get_settings())
