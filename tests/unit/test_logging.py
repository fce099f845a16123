"""Unit tests for core/logging.py."""

import logging

from core.logging import NOISY_LOGGERS, get_logger, setup_logging


class TestSetupLogging:
    def test_default_format(self):
        setup_logging()
        root = logging.getLogger()
        assert root.level == logging.INFO

    def test_custom_level(self):
        setup_logging(level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG

    def test_custom_format_string(self):
        setup_logging(format_string="%(message)s")
        root = logging.getLogger()
        assert root.handlers

    def test_file_handler_created(self, tmp_path):
        log_file = tmp_path / "test.log"
        setup_logging(log_file=log_file)
        root = logging.getLogger()
        file_handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) >= 1
        assert log_file.exists()

    def test_file_handler_creates_parent_dirs(self, tmp_path):
        log_file = tmp_path / "nested" / "deep" / "test.log"
        setup_logging(log_file=log_file)
        assert log_file.parent.exists()

    def test_http_client_loggers_quieted(self):
        setup_logging(level="INFO")
        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING


class TestGetLogger:
    def test_returns_logger_with_name(self):
        logger = get_logger("test.module")
        assert logger.name == "test.module"
        assert isinstance(logger, logging.Logger)

    def test_returns_same_logger_for_same_name(self):
        assert get_logger("same_name") is get_logger("same_name")
