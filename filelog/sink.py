"""Per-label sinks multiplexed into one shared bounded file."""

import logging
from datetime import datetime
from typing import Callable, Mapping

from filelog.bounded_file import DEFAULT_MAX_ENTRIES, BoundedAppendFile
from filelog.formatter import format_text, get_formatter
from filelog.levels import Level
from filelog.models import LogRecord, merge_metadata

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone()


class LogRecordSink:
    """Formats records for one label and appends them to a shared file.

    ``log`` never raises. A record that cannot be formatted or written is
    counted in ``dropped`` and reported at DEBUG level.
    """

    def __init__(
        self,
        label: str,
        stream: BoundedAppendFile,
        formatter: Callable[[LogRecord], str] = format_text,
        level: Level = Level.INFO,
        metadata: Mapping[str, str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.label = label
        self.level = level
        self._stream = stream
        self._formatter = formatter
        self._metadata = merge_metadata({}, metadata)
        self._clock = clock or _local_now
        self.dropped = 0

    @property
    def stream(self) -> BoundedAppendFile:
        return self._stream

    @property
    def metadata(self) -> dict[str, str]:
        return dict(self._metadata)

    def __getitem__(self, key: str) -> str | None:
        return self._metadata.get(key)

    def __setitem__(self, key: str, value):
        self._metadata = merge_metadata(self._metadata, {key: value})

    def __delitem__(self, key: str):
        self._metadata = {k: v for k, v in self._metadata.items() if k != key}

    def log(self, level: Level, message: str,
            metadata: Mapping[str, str] | None = None) -> bool:
        """Append one record. Returns True if it was written."""
        if level < self.level:
            return False
        try:
            record = LogRecord(
                timestamp=self._clock(),
                level=level,
                label=self.label,
                message=str(message),
                metadata=merge_metadata(self._metadata, metadata),
            )
            data = self._formatter(record).encode(self._stream.encoding)
            self._stream.append(data)
        except Exception as exc:
            self.dropped += 1
            logger.debug("Dropped record for %s: %s", self.label, exc)
            return False
        return True


class FileLogging:
    """Sink factory keyed by label over one bounded file.

    Every sink handed out shares ``stream``, so several named loggers can
    write into the same physical file.
    """

    def __init__(self, path: str, max_entries: int = DEFAULT_MAX_ENTRIES,
                 output_format: str = "text", encoding: str = "utf-8"):
        self._formatter = get_formatter(output_format)
        self.output_format = output_format
        self.stream = BoundedAppendFile(path, max_entries=max_entries, encoding=encoding)

    def handler(self, label: str, level: Level = Level.INFO) -> LogRecordSink:
        return LogRecordSink(label, self.stream, formatter=self._formatter, level=level)

    __call__ = handler

    def close(self):
        self.stream.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def open_sink(path: str, max_entries: int = DEFAULT_MAX_ENTRIES,
              output_format: str = "text") -> FileLogging:
    """Open ``path`` as a bounded log file and return a sink factory for it.

    Raises CreateError or OpenError if the file cannot be set up.
    """
    return FileLogging(path, max_entries=max_entries, output_format=output_format)
