"""
Logging helpers for html5_loader.

The package itself only creates module loggers under ``html5_loader``;
handlers are attached by applications through ``setup_logging``.
"""

import logging
import os
import sys
import time
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterator, Optional, Union

LOGGER_NAME = "html5_loader"

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"

_RESET = '\033[0m'
_LEVEL_COLORS = {
    logging.DEBUG: '\033[34m',
    logging.INFO: '\033[32m',
    logging.WARNING: '\033[33m',
    logging.ERROR: '\033[31m',
    logging.CRITICAL: '\033[1;31m',
}


def to_level(level: Union[str, int], default: int = logging.INFO) -> int:
    """
    Resolve a level name such as ``"debug"`` or a numeric level.

    Args:
        level: Level name or number
        default: Level used when the name is unknown

    Returns:
        int: The numeric logging level
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else default


class LogFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None, colored: bool = True):
        super().__init__(fmt, datefmt)
        self.colored = colored and sys.platform != 'win32'

    def formatMessage(self, record: logging.LogRecord) -> str:
        if not self.colored or record.levelno not in _LEVEL_COLORS:
            return super().formatMessage(record)

        plain = record.levelname
        record.levelname = f"{_LEVEL_COLORS[record.levelno]}{plain}{_RESET}"
        try:
            return super().formatMessage(record)
        finally:
            record.levelname = plain


def setup_logging(log_file: Optional[str] = None,
                  console_level: Union[str, int] = "INFO",
                  file_level: Union[str, int] = "DEBUG",
                  component: Optional[str] = None,
                  colored: bool = True) -> logging.Logger:
    """
    Attach console and optional file handlers to the package logger.

    Calling it again replaces the handlers installed by a previous call.

    Args:
        log_file: Path of a log file, or None to log to the console only
        console_level: Level for the console handler
        file_level: Level for the file handler
        component: Optional child logger to return, e.g. ``"loader"``
        colored: Whether console level names are colored

    Returns:
        logging.Logger: The package logger, or the component's child logger
    """
    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    levels = [to_level(console_level)]

    console = logging.StreamHandler()
    console.setLevel(levels[0])
    console.setFormatter(LogFormatter(CONSOLE_FORMAT, '%H:%M:%S', colored=colored))
    package_logger.addHandler(console)

    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        levels.append(to_level(file_level, logging.DEBUG))
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(levels[-1])
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, '%Y-%m-%d %H:%M:%S'))
        package_logger.addHandler(file_handler)

    package_logger.setLevel(min(levels))

    if component:
        return package_logger.getChild(component)
    return package_logger


def get_default_log_file() -> str:
    """Path of today's log file under ``~/.html5_loader/logs``."""
    stamp = datetime.now().strftime("%Y-%m-%d")
    return os.path.join(os.path.expanduser("~"), ".html5_loader", "logs", f"html5_loader_{stamp}.log")


def log_exception(logger: logging.Logger, exception: BaseException,
                  message: str = "An exception occurred") -> None:
    """Log an exception at ERROR level together with its traceback."""
    logger.error(f"{message}: {exception}",
                 exc_info=(type(exception), exception, exception.__traceback__))


class PerformanceLogger:
    """
    Times named operations and logs how long they took.

    Use ``start``/``end`` around an operation, or the ``measure`` context
    manager.
    """

    def __init__(self, logger: logging.Logger, component: str):
        self.logger = logger
        self.component = component
        self._started: Dict[str, float] = {}

    def start(self, name: str) -> None:
        self._started[name] = time.perf_counter()

    def end(self, name: str, level: Union[str, int] = "DEBUG") -> float:
        """
        Stop timing an operation.

        Args:
            name: Operation name passed to ``start``
            level: Level of the log record

        Returns:
            float: Elapsed seconds, 0.0 if the operation was never started
        """
        started = self._started.pop(name, None)
        if started is None:
            self.logger.warning(f"{self.component} {name} was never started")
            return 0.0

        elapsed = time.perf_counter() - started
        self.logger.log(to_level(level, logging.DEBUG), f"{self.component} {name} took {elapsed:.4f}s")
        return elapsed

    @contextmanager
    def measure(self, name: str, level: Union[str, int] = "DEBUG") -> Iterator[None]:
        self.start(name)
        try:
            yield
        finally:
            self.end(name, level)
