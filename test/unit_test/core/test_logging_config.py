"""Unit tests for logging configuration module.

Tests verify that setup_logging follows LoggingConfig for the console level,
line format, and the optional opsagent.log file.
"""

import logging
from pathlib import Path

import pytest

from opsagent.core.logging_config import LOG_FORMATS, MODULE_LOG_LEVELS, get_logger, setup_logging
from opsagent.server.core.config import LoggingConfig, Settings


def _console_handler() -> logging.Handler:
    root_logger = logging.getLogger()
    handler = next(
        (h for h in root_logger.handlers if type(h) is logging.StreamHandler),
        None,
    )
    assert handler is not None
    return handler


def _file_handlers() -> list:
    return [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]


@pytest.fixture(autouse=True)
def _restore_root_handlers():
    """Keep pytest's own capture handlers attached after each test."""
    root_logger = logging.getLogger()
    saved_handlers = root_logger.handlers[:]
    saved_level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in saved_handlers:
            handler.close()
        root_logger.removeHandler(handler)
    for handler in saved_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(saved_level)


class TestSetupLoggingLogLevels:
    """Test setup_logging with different log levels."""

    @pytest.mark.parametrize(
        "log_level,expected_level",
        [
            ("DEBUG", logging.DEBUG),
            ("WARNING", logging.WARNING),
            ("CRITICAL", logging.CRITICAL),
            ("info", logging.INFO),
        ],
    )
    def test_config_level_applies_to_console(self, log_level, expected_level):
        setup_logging(LoggingConfig(level=log_level))
        assert _console_handler().level == expected_level

    def test_log_level_argument_overrides_config(self):
        setup_logging(LoggingConfig(level="ERROR"), log_level="debug")
        assert _console_handler().level == logging.DEBUG

    def test_setup_logging_replaces_existing_handlers(self):
        setup_logging()
        setup_logging()

        stream_handlers = [h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler]
        assert len(stream_handlers) == 1


class TestSetupLoggingFormats:
    """Test setup_logging with each configured format."""

    @pytest.mark.parametrize("log_format", ["simple", "detailed"])
    def test_format_selected_from_config(self, log_format):
        setup_logging(LoggingConfig(format=log_format))
        assert _console_handler().formatter._fmt == LOG_FORMATS[log_format]

    def test_settings_feed_logging_config(self, monkeypatch, tmp_path: Path):
        monkeypatch.chdir(tmp_path)
        settings = Settings(OPSAGENT_LOG_LEVEL="WARNING", OPSAGENT_LOG_FORMAT="simple")

        setup_logging(settings.logging)

        assert _console_handler().level == logging.WARNING
        assert _console_handler().formatter._fmt == LOG_FORMATS["simple"]


class TestModuleLogLevels:
    """Test per-module log levels are applied."""

    def test_module_levels_applied(self):
        setup_logging()

        for module_name, module_level in MODULE_LOG_LEVELS.items():
            assert logging.getLogger(module_name).level == logging.getLevelName(module_level)

    def test_operator_log_mirror_is_quiet_by_default(self):
        assert MODULE_LOG_LEVELS["opsagent.agent_core.log_sink"] == "INFO"


class TestFileLogging:
    """Test optional file logging."""

    def test_no_file_handler_without_log_dir(self):
        assert setup_logging(LoggingConfig()) is None
        assert _file_handlers() == []

    def test_file_logging_writes_to_log_dir(self, tmp_path: Path):
        log_dir = tmp_path / "logs"

        log_file = setup_logging(LoggingConfig(file_dir=str(log_dir), level="ERROR"))

        assert log_file == log_dir / "opsagent.log"
        assert log_file.exists()
        handlers = _file_handlers()
        assert len(handlers) == 1
        assert handlers[0].level == logging.DEBUG

    def test_operator_lines_reach_log_file(self, tmp_path: Path):
        log_file = setup_logging(LoggingConfig(file_dir=str(tmp_path)))

        get_logger("opsagent.agent_core.log_sink").info("> Plan generated: 2 steps identified.")
        for handler in _file_handlers():
            handler.flush()

        assert "> Plan generated: 2 steps identified." in log_file.read_text()


class TestGetLogger:
    """Test get_logger."""

    def test_get_logger_returns_named_logger(self):
        logger = get_logger("opsagent.agent_core.runtime.engine")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "opsagent.agent_core.runtime.engine"
        assert get_logger("opsagent.agent_core.runtime.engine") is logger
