# logger_utils.py - logging messages and performance metrics for the engine.
#
# Thin facade over the stdlib `logging` module. Library modules call Log.info(...)
# etc; nothing is printed until an application calls Log.configure().

from __future__ import annotations

import logging
import time
from typing import Optional

LOGGER_NAME = "predictive_text"

_logger = logging.getLogger(LOGGER_NAME)
_logger.addHandler(logging.NullHandler())


class _ColorFormatter(logging.Formatter):
    """Formatter that wraps the level name in ANSI colors for terminals."""

    COLORS = {
        "DEBUG": "\033[90m",  # gray
        "INFO": "\033[94m",  # blue
        "WARNING": "\033[93m",  # yellow
        "ERROR": "\033[91m",  # red
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        color = self.COLORS.get(record.levelname)
        return f"{color}{line}{self.RESET}" if color else line


class Log:
    """Project-wide logger for messages and timing metrics."""

    FORMAT = "[%(asctime)s] %(levelname)-7s | %(message)s"
    DATEFMT = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def configure(
        cls,
        level: str = "INFO",
        path: Optional[str] = None,
        use_color: bool = True,
    ) -> logging.Logger:
        """
        Install console (and optional file) handlers on the package logger.
        Safe to call more than once: previously installed handlers are replaced.
        """
        for h in list(_logger.handlers):
            if not isinstance(h, logging.NullHandler):
                _logger.removeHandler(h)
                h.close()

        console = logging.StreamHandler()
        fmt_cls = _ColorFormatter if use_color else logging.Formatter
        console.setFormatter(fmt_cls(cls.FORMAT, cls.DATEFMT))
        _logger.addHandler(console)

        if path:
            fh = logging.FileHandler(path, encoding="utf-8")
            fh.setFormatter(logging.Formatter(cls.FORMAT, cls.DATEFMT))
            _logger.addHandler(fh)

        _logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
        return _logger

    @staticmethod
    def get() -> logging.Logger:
        return _logger

    # Public logging methods
    @staticmethod
    def debug(msg: str) -> None:
        _logger.debug(msg)

    @staticmethod
    def info(msg: str) -> None:
        _logger.info(msg)

    @staticmethod
    def warning(msg: str) -> None:
        _logger.warning(msg)

    @staticmethod
    def error(msg: str) -> None:
        _logger.error(msg)

    @staticmethod
    def metric(tag: str, value, unit: str = "") -> None:
        """
        Record a metric (timing, counts, sizes).
        Example: [12:45:02] train done: 0.123s
        """
        _logger.info("%s: %s%s", tag, value, unit)

    @staticmethod
    def time_block(label: str) -> "_Timer":
        """
        Helper for measuring execution time of a code block.
            with Log.time_block("train"):
                build()
        """
        return _Timer(label)


class _Timer:
    """Context manager used internally to measure time for a code block."""

    def __init__(self, label: str) -> None:
        self.label = label
        self.start = 0.0
        self.elapsed = 0.0

    def __enter__(self) -> "_Timer":
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.elapsed = time.perf_counter() - self.start
        if exc_type is None:
            Log.metric(f"{self.label} done", round(self.elapsed, 3), "s")
        else:
            Log.metric(f"{self.label} failed after", round(self.elapsed, 3), "s")
