"""Tests for Sprout logging setup."""
import logging

import pytest
from rich.logging import RichHandler

from sprout.core.logger import ROOT_LOGGER, configure_logging, get_logger


@pytest.fixture
def package_logger():
    """The sprout logger, restored to INFO with no file handlers afterwards."""
    root = get_logger(ROOT_LOGGER)
    yield root
    configure_logging(verbose=False, log_file=None)


class TestGetLogger:
    """Console handler wiring."""

    def test_module_loggers_share_one_console_handler(self, package_logger):
        module_logger = get_logger("sprout.scaffold.example")
        get_logger("sprout.services.example")

        assert module_logger.handlers == []
        assert module_logger.propagate is True
        rich_handlers = [h for h in package_logger.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
        assert package_logger.level == logging.INFO


class TestConfigureLogging:
    """Levels and the optional log file."""

    def test_verbose_enables_debug(self, package_logger):
        configure_logging(verbose=True)

        assert package_logger.level == logging.DEBUG
        assert get_logger("sprout.scaffold.example").isEnabledFor(logging.DEBUG)

    def test_without_log_file_returns_none(self, package_logger):
        assert configure_logging() is None
        assert not any(isinstance(h, logging.FileHandler) for h in package_logger.handlers)

    def test_writes_module_records_to_file(self, temp_dir, package_logger):
        log_file = temp_dir / "logs" / "sprout.log"

        assert configure_logging(verbose=True, log_file=str(log_file)) == log_file
        get_logger("sprout.scaffold.example").debug("wrote package.json")

        content = log_file.read_text(encoding="utf-8")
        assert "Logging to" in content
        assert "sprout.scaffold.example | DEBUG | wrote package.json" in content

    def test_info_level_skips_debug_records(self, temp_dir, package_logger):
        log_file = temp_dir / "sprout.log"

        configure_logging(log_file=str(log_file))
        get_logger("sprout.scaffold.example").debug("hidden")
        get_logger("sprout.scaffold.example").info("shown")

        content = log_file.read_text(encoding="utf-8")
        assert "hidden" not in content
        assert "sprout.scaffold.example | INFO | shown" in content

    def test_reconfiguring_replaces_file_handler(self, temp_dir, package_logger):
        configure_logging(log_file=str(temp_dir / "first.log"))
        configure_logging(log_file=str(temp_dir / "second.log"))
        get_logger("sprout.scaffold.example").info("after switch")

        file_handlers = [h for h in package_logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert "after switch" not in (temp_dir / "first.log").read_text(encoding="utf-8")
        assert "after switch" in (temp_dir / "second.log").read_text(encoding="utf-8")
