"""Log record model and metadata helpers."""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Mapping

from filelog.levels import Level


@dataclass(frozen=True)
class LogRecord:
    """One log event. ``metadata`` is stored as a read-only mapping."""

    timestamp: datetime
    level: Level
    label: str
    message: str
    metadata: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __hash__(self):
        return hash((self.timestamp, self.level, self.label, self.message,
                     frozenset(self.metadata.items())))


def merge_metadata(
    persistent: Mapping[str, str], call_site: Mapping[str, str] | None
) -> dict[str, str]:
    """Return a new dict with call-site keys laid over the persistent ones."""
    merged = dict(persistent)
    if call_site:
        for key, value in call_site.items():
            merged[str(key)] = str(value)
    return merged


def render_metadata(metadata: Mapping[str, str]) -> str | None:
    """Render ``key=value`` pairs joined by spaces, or None when empty."""
    if not metadata:
        return None
    return " ".join(f"{key}={value}" for key, value in metadata.items())
