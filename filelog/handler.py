"""Bridge from the stdlib ``logging`` package to a log record sink."""

import logging

from filelog import bounded_file, config, reader, sink as sink_module
from filelog.bounded_file import DEFAULT_MAX_ENTRIES
from filelog.levels import Level
from filelog.sink import FileLogging, LogRecordSink

# loggers the package reports its own failures through
_INTERNAL_LOGGERS = frozenset({
    bounded_file.logger.name,
    config.logger.name,
    reader.logger.name,
    sink_module.logger.name,
})


class SinkHandler(logging.Handler):
    """``logging.Handler`` that forwards records to a ``LogRecordSink``.

    Call-site metadata is taken from ``extra={"metadata": {...}}``. With
    ``owns_stream`` set, closing the handler also closes the sink's file.
    """

    def __init__(self, sink: LogRecordSink, owns_stream: bool = False):
        super().__init__()
        self.sink = sink
        self.owns_stream = owns_stream

    def emit(self, record: logging.LogRecord):
        if record.name in _INTERNAL_LOGGERS:
            return
        try:
            message = record.getMessage()
        except Exception:
            self.handleError(record)
            return
        metadata = getattr(record, "metadata", None)
        if not isinstance(metadata, dict):
            metadata = None
        self.sink.log(Level.from_logging(record.levelno), message, metadata)

    def close(self):
        if self.owns_stream:
            self.sink.stream.close()
        super().close()


def get_logger(label: str, path: str, max_entries: int = DEFAULT_MAX_ENTRIES,
               output_format: str = "text", level: Level = Level.INFO) -> logging.Logger:
    """Return ``logging.getLogger(label)`` writing into a new bounded file at ``path``.

    A ``SinkHandler`` left on the logger by an earlier call is removed and
    its file closed, so each record is written once.
    """
    log = logging.getLogger(label)
    for existing in list(log.handlers):
        if isinstance(existing, SinkHandler):
            log.removeHandler(existing)
            existing.close()

    factory = FileLogging(path, max_entries=max_entries, output_format=output_format)
    log.setLevel(level.to_logging())
    log.addHandler(SinkHandler(factory.handler(label, level=level), owns_stream=True))
    return log
