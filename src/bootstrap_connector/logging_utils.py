"""Logging setup for hosts that run the Bootstrap connector."""

import logging
import sys
import time
from logging import FileHandler
from pathlib import Path


class _UtcMicrosecondFormatter(logging.Formatter):
    """A formatter that renders timestamps in UTC with 6-digit microseconds."""

    def __init__(self, fmt: str) -> None:
        super().__init__(fmt=fmt, datefmt="%Y-%m-%dT%H:%M:%S")
        self.converter = time.gmtime

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format the time with 6-digit microseconds and a 'Z' for UTC."""
        ct = self.converter(record.created)
        s = time.strftime(datefmt, ct) if datefmt else time.strftime(self.default_time_format, ct)
        microseconds = int((record.created - int(record.created)) * 1_000_000)
        return f"{s}.{microseconds:06d}Z"


class ConsoleFormatter(_UtcMicrosecondFormatter):
    """A formatter for console output with clean, user-friendly lines."""

    def __init__(self, version: str) -> None:
        """
        Initialize the formatter with the connector version.

        Args:
            version: The connector version, shown on every line.

        """
        super().__init__(f"%(asctime)s | Bootstrap Connector - {version} | %(message)s")


class FileFormatter(_UtcMicrosecondFormatter):
    """A detailed formatter for debug log files."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s | %(name)-20s | %(funcName)-20s:%(lineno)-4d | %(levelname)-8s | %(message)s")


def setup_logging(version: str, *, debug: bool = False, log_file: Path | None = None) -> None:
    """
    Configure the root logger.

    1.  Console: level INFO by default, DEBUG if debug=True.
    2.  File: when debug=True and `log_file` is given, every DEBUG line is
        also written there with the detailed format.

    Args:
        version: The connector version, included in console logs.
        debug: If True, lowers the console level to DEBUG and enables file logging.
        log_file: Where to write the debug log.

    """
    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    level = logging.DEBUG if debug else logging.INFO
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(ConsoleFormatter(version))
    root_logger.addHandler(console_handler)

    if debug and log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = FileHandler(log_file, mode="w", encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(FileFormatter())
            root_logger.addHandler(file_handler)
            logging.getLogger().info("Debug mode enabled. Detailed logs will be written to %s", log_file)
        except OSError:
            # Console logging still works without the file.
            logging.getLogger().exception("Failed to create debug log file. Continuing with console logging only.")
