"""Read JSON-lines log files back into records."""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime

from filelog.errors import DecodeError
from filelog.levels import Level
from filelog.models import LogRecord

logger = logging.getLogger(__name__)

_FIELDS = ("date", "level", "category", "message")


def decode_line(line: str) -> LogRecord:
    """Decode one JSON-lines entry.

    Raises:
        DecodeError: If the line is not a complete, well-typed record.
    """
    try:
        data = json.loads(line)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
    for name in _FIELDS:
        if not isinstance(data.get(name), str):
            raise DecodeError(f"Missing or non-string field: {name}")
    try:
        level = Level.parse(data["level"])
        timestamp = datetime.fromisoformat(data["date"])
    except ValueError as exc:
        raise DecodeError(str(exc)) from exc
    return LogRecord(
        timestamp=timestamp,
        level=level,
        label=data["category"],
        message=data["message"],
    )


def parse(path: str) -> list[LogRecord]:
    """Decode every well-formed line of ``path``, oldest first.

    Lines that fail to decode are skipped, which covers the empty segment
    after the final newline and a last line cut short by a crash.
    """
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        text = f.read()

    records = []
    skipped = 0
    for segment in text.split("\n"):
        if not segment:
            continue
        try:
            records.append(decode_line(segment))
        except DecodeError as exc:
            skipped += 1
            logger.debug("Skipping undecodable line in %s: %s", path, exc)
    if skipped:
        logger.debug("Skipped %d line(s) in %s", skipped, path)
    return records


@dataclass
class LogFile:
    records: list[LogRecord] = field(default_factory=list)

    @classmethod
    def from_path(cls, path: str) -> "LogFile":
        return cls(records=parse(path))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)


def read_all(path: str) -> list[LogRecord]:
    return parse(path)
