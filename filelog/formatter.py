"""Record formatters — plain text lines and JSON lines."""

import json
from typing import Callable

from filelog.models import LogRecord, render_metadata

TEXT_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def _local_timestamp(record: LogRecord) -> str:
    """Local wall-clock time with numeric UTC offset, second precision."""
    return record.timestamp.astimezone().strftime(TEXT_TIMESTAMP_FORMAT)


def format_text(record: LogRecord) -> str:
    """Render ``TIMESTAMP LEVEL LABEL :[ metadata] MESSAGE`` plus newline.

    With no metadata the line reads ``... label : message``.
    """
    metadata = render_metadata(record.metadata)
    segment = f" {metadata}" if metadata else ""
    return (
        f"{_local_timestamp(record)} {record.level.label} {record.label} :"
        f"{segment} {record.message}\n"
    )


def fold_message(record: LogRecord) -> str:
    """Message text with rendered metadata prefixed, as stored in JSON lines."""
    metadata = render_metadata(record.metadata)
    if metadata:
        return f"{metadata} {record.message}"
    return record.message


def format_json(record: LogRecord) -> str:
    """Render one compact JSON object per line: date, level, category, message."""
    return json.dumps({
        "date": record.timestamp.isoformat(),
        "level": record.level.label,
        "category": record.label,
        "message": fold_message(record),
    }, ensure_ascii=False, separators=(",", ":")) + "\n"


FORMATTERS: dict[str, Callable[[LogRecord], str]] = {
    "text": format_text,
    "json": format_json,
}


def get_formatter(output_format: str = "text") -> Callable[[LogRecord], str]:
    """Factory that returns the formatter for ``"text"`` or ``"json"``."""
    try:
        return FORMATTERS[output_format]
    except KeyError:
        raise ValueError(f"Unknown output format: {output_format!r}") from None
