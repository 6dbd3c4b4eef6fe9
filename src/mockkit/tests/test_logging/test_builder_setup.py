# src/mockkit/tests/test_logging/test_builder_setup.py
import json
import logging
from types import SimpleNamespace

from mockkit.core.logging.builder import ENGINE_LOGGER, make_dict_config, setup_logging
from mockkit.core.logging.filters import TestIdFilter
from mockkit.mocking import Mock
from mockkit.services import StudentServiceContract


# Create a minimal Settings-like object for testing
class DummySettings:
    LOG_FORMAT = "json"
    LOG_LEVEL = "INFO"
    LOG_TO_STDOUT = False
    LOG_DIR = None  # will be set in test
    LOG_MAX_BYTES = 1000
    LOG_BACKUP_COUNT = 1
    ENV = "development"
    MOCK_LOG_LEVEL = "DEBUG"


def test_make_dict_config_contains_file_handlers(tmp_path):
    settings = DummySettings()
    settings.LOG_DIR = tmp_path
    cfg = make_dict_config(settings)

    assert "console" in cfg["handlers"]
    # writing to LOG_DIR: file handlers instead of the error console
    assert "file" in cfg["handlers"]
    assert "error_file" in cfg["handlers"]
    assert "error_console" not in cfg["handlers"]
    assert cfg["handlers"]["file"]["filename"].endswith("mockkit.log")
    assert "json" in cfg["formatters"]
    assert cfg["loggers"][ENGINE_LOGGER]["level"] == "DEBUG"


def test_make_dict_config_stdout_only():
    settings = SimpleNamespace(
        LOG_FORMAT="text",
        LOG_LEVEL="WARNING",
        LOG_TO_STDOUT=True,
        LOG_DIR=None,
        LOG_MAX_BYTES=1000,
        LOG_BACKUP_COUNT=1,
        ENV="testing",
    )
    cfg = make_dict_config(settings)

    assert set(cfg["handlers"]) == {"console", "error_console"}
    assert cfg["handlers"]["console"]["formatter"] == "standard"
    assert all(h["filters"] == ["test_id"] for h in cfg["handlers"].values())
    # MOCK_LOG_LEVEL missing -> engine logger stays quiet
    assert cfg["loggers"][ENGINE_LOGGER]["level"] == "WARNING"


def test_setup_logging_creates_log_dir(tmp_path, restore_logging):
    settings = DummySettings()
    settings.LOG_DIR = tmp_path / "logs"
    # ensure DIR does not exist
    assert not settings.LOG_DIR.exists()
    setup_logging(settings)
    # setup should create log dir
    assert settings.LOG_DIR.exists()
    root = logging.getLogger()
    assert root.handlers
    assert sum(isinstance(f, TestIdFilter) for f in root.filters) == 1


def test_engine_events_reach_the_log_file(tmp_path, restore_logging, request):
    settings = DummySettings()
    settings.LOG_DIR = tmp_path
    settings.LOG_LEVEL = "DEBUG"
    setup_logging(settings)

    mock = Mock(StudentServiceContract, name="students")
    mock.object.get_student(1)
    for handler in logging.getLogger().handlers:
        handler.flush()

    lines = [json.loads(line) for line in (tmp_path / "mockkit.log").read_text(encoding="utf-8").splitlines()]
    dispatched = [rec for rec in lines if rec["message"] == "mock.dispatch.unmatched"]

    assert dispatched
    assert dispatched[0]["mock_name"] == "students"
    assert dispatched[0]["operation"] == "get_student"
    assert dispatched[0]["test_id"] == request.node.nodeid
