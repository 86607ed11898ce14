"""Severity levels with a total order."""

import logging
from enum import IntEnum


class Level(IntEnum):
    TRACE = 0
    DEBUG = 1
    INFO = 2
    NOTICE = 3
    WARNING = 4
    ERROR = 5
    CRITICAL = 6

    @property
    def label(self) -> str:
        """Canonical name written to log files, e.g. ``"error"``."""
        return self.name.lower()

    def __str__(self) -> str:
        return self.label

    @classmethod
    def parse(cls, name: str) -> "Level":
        """Look up a level by name, case-insensitively. ``warn`` is accepted."""
        key = name.strip().upper()
        if key == "WARN":
            key = "WARNING"
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown log level: {name!r}") from None

    def to_logging(self) -> int:
        return _TO_LOGGING[self]

    @classmethod
    def from_logging(cls, levelno: int) -> "Level":
        """Map a stdlib ``logging`` level number onto the closest level at or below it."""
        if levelno >= logging.CRITICAL:
            return cls.CRITICAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARNING
        if levelno > logging.INFO:
            return cls.NOTICE
        if levelno >= logging.INFO:
            return cls.INFO
        if levelno >= logging.DEBUG:
            return cls.DEBUG
        return cls.TRACE


_TO_LOGGING = {
    Level.TRACE: 5,
    Level.DEBUG: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.NOTICE: 25,
    Level.WARNING: logging.WARNING,
    Level.ERROR: logging.ERROR,
    Level.CRITICAL: logging.CRITICAL,
}
