"""Size-bounded, append-only log file sink."""

from filelog.bounded_file import DEFAULT_MAX_ENTRIES, BoundedAppendFile
from filelog.errors import (
    CreateError,
    DecodeError,
    FileLoggingError,
    LogIOError,
    OpenError,
)
from filelog.formatter import format_json, format_text, get_formatter
from filelog.handler import SinkHandler, get_logger
from filelog.levels import Level
from filelog.models import LogRecord
from filelog.reader import LogFile, parse, read_all
from filelog.sink import FileLogging, LogRecordSink, open_sink

__all__ = [
    "DEFAULT_MAX_ENTRIES",
    "BoundedAppendFile",
    "CreateError",
    "DecodeError",
    "FileLogging",
    "FileLoggingError",
    "Level",
    "LogFile",
    "LogIOError",
    "LogRecord",
    "LogRecordSink",
    "OpenError",
    "SinkHandler",
    "format_json",
    "format_text",
    "get_formatter",
    "get_logger",
    "open_sink",
    "parse",
    "read_all",
]
