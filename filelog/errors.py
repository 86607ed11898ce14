"""Error taxonomy for the bounded log file."""


class FileLoggingError(Exception):
    """Base class for all filelog errors."""


class CreateError(FileLoggingError):
    """Raised when the backing file cannot be created."""


class OpenError(FileLoggingError):
    """Raised when an existing backing file cannot be opened for writing."""


class LogIOError(FileLoggingError):
    """Raised when append, truncate or clear fails on an open file."""


class DecodeError(FileLoggingError):
    """Raised when a JSON-lines entry cannot be decoded."""
