"""Tests for the logging utilities module."""

import logging
import sys
import tempfile
import time
import unittest
from pathlib import Path
from unittest.mock import patch

from bootstrap_connector.logging_utils import ConsoleFormatter, FileFormatter, setup_logging

EXPECTED_HANDLERS_WITH_FILE = 2


def _record(msg: str = "Test", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(name="test", level=level, pathname="test.py", lineno=1, msg=msg, args=(), exc_info=None)


class TestConsoleFormatter(unittest.TestCase):
    """Test suite for ConsoleFormatter class."""

    def test_console_formatter_includes_version(self) -> None:
        """1. Version: Every line carries the connector version."""
        formatter = ConsoleFormatter("1.0.0")
        assert formatter.datefmt == "%Y-%m-%dT%H:%M:%S"
        assert formatter.converter == time.gmtime
        assert "Bootstrap Connector - 1.0.0" in formatter.format(_record())

    def test_console_formatter_format_time_with_microseconds(self) -> None:
        """2. Time Format: Formats time with 6-digit microseconds and 'Z' suffix."""
        formatter = ConsoleFormatter("1.0.0")
        record = _record()
        record.created = 1234567890.123456

        formatted_time = formatter.formatTime(record, formatter.datefmt)

        assert formatted_time.endswith("Z")
        assert formatted_time.split(".")[-1].rstrip("Z") == "123456"
        assert formatted_time.startswith("2009-02-13T23:31:30")


class TestFileFormatter(unittest.TestCase):
    """Test suite for FileFormatter class."""

    def test_file_formatter_detailed_format(self) -> None:
        """1. Detailed Format: Includes logger name, function name, line number and level."""
        formatter = FileFormatter()
        record = logging.LogRecord(name="bootstrap_connector.factory", level=logging.DEBUG, pathname="factory.py", lineno=42, msg="Detailed", args=(), exc_info=None)
        record.funcName = "activate"
        formatted = formatter.format(record)
        assert "bootstrap_connector.factory" in formatted
        assert "activate" in formatted
        assert "42" in formatted
        assert "DEBUG" in formatted

    def test_file_formatter_format_time_without_datefmt(self) -> None:
        """2. Time Format: Falls back to the default time format with microseconds."""
        formatter = FileFormatter()
        record = _record()
        record.created = 9876543210.654321
        assert formatter.formatTime(record).endswith(".654321Z")


class TestSetupLogging(unittest.TestCase):
    """Test suite for setup_logging function."""

    def setUp(self) -> None:
        """Save the root logger state."""
        self.root_logger = logging.getLogger()
        self.original_handlers = self.root_logger.handlers[:]
        self.original_level = self.root_logger.level

    def tearDown(self) -> None:
        """Restore the root logger state."""
        for handler in self.root_logger.handlers:
            if handler not in self.original_handlers:
                handler.close()
        self.root_logger.handlers = self.original_handlers
        self.root_logger.setLevel(self.original_level)

    def test_setup_logging_info_mode(self) -> None:
        """1. Info Mode: One stdout console handler at INFO."""
        setup_logging("1.0.0")
        assert self.root_logger.level == logging.INFO
        assert len(self.root_logger.handlers) == 1
        handler = self.root_logger.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stdout
        assert isinstance(handler.formatter, ConsoleFormatter)

    def test_setup_logging_clears_existing_handlers(self) -> None:
        """2. Idempotence: Previously installed handlers are replaced."""
        self.root_logger.addHandler(logging.NullHandler())
        setup_logging("1.0.0")
        assert not any(isinstance(h, logging.NullHandler) for h in self.root_logger.handlers)

    def test_setup_logging_debug_without_file(self) -> None:
        """3. Debug Mode: Console goes to DEBUG; no file handler without a log file."""
        setup_logging("1.0.0", debug=True)
        assert self.root_logger.level == logging.DEBUG
        assert len(self.root_logger.handlers) == 1
        assert self.root_logger.handlers[0].level == logging.DEBUG

    def test_setup_logging_debug_with_file(self) -> None:
        """4. Debug File: A file handler writes detailed logs to the log file."""
        with tempfile.TemporaryDirectory() as tmp:
            log_file = Path(tmp) / "logs" / "debug.log"
            setup_logging("1.0.0", debug=True, log_file=log_file)
            assert len(self.root_logger.handlers) == EXPECTED_HANDLERS_WITH_FILE
            file_handler = self.root_logger.handlers[1]
            assert isinstance(file_handler, logging.FileHandler)
            assert isinstance(file_handler.formatter, FileFormatter)
            logging.getLogger("bootstrap_connector.test").debug("written to file")
            file_handler.flush()
            assert "written to file" in log_file.read_text(encoding="utf-8")
            file_handler.close()

    def test_setup_logging_file_failure_keeps_console(self) -> None:
        """5. File Failure: Console logging continues if the log file cannot be created."""
        with tempfile.TemporaryDirectory() as tmp, patch("bootstrap_connector.logging_utils.FileHandler", side_effect=OSError("read-only")):
            setup_logging("1.0.0", debug=True, log_file=Path(tmp) / "debug.log")
        assert len(self.root_logger.handlers) == 1
