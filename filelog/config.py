"""Configuration loading from an optional YAML file and environment variables."""

import logging
import os
from dataclasses import dataclass, fields

import yaml

from filelog.formatter import FORMATTERS
from filelog.levels import Level

logger = logging.getLogger(__name__)

_ENV_VARS = {
    "log_path": "LOG_PATH",
    "max_entries": "MAX_ENTRIES",
    "log_format": "LOG_FORMAT",
    "level": "LOG_LEVEL",
    "encoding": "LOG_ENCODING",
    "truncate_every": "TRUNCATE_EVERY",
    "write_interval": "WRITE_INTERVAL",
}


@dataclass(frozen=True)
class Config:
    log_path: str = "./logs/application.log"
    max_entries: int = 2000
    log_format: str = "text"
    level: str = "info"
    encoding: str = "utf-8"
    truncate_every: int = 500
    write_interval: float = 0.05

    def __post_init__(self):
        if self.max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {self.max_entries}")
        if self.truncate_every < 1:
            raise ValueError(f"truncate_every must be positive, got {self.truncate_every}")
        if self.log_format not in FORMATTERS:
            raise ValueError(f"Unknown log format: {self.log_format!r}")
        Level.parse(self.level)

    @property
    def threshold(self) -> Level:
        return Level.parse(self.level)


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        logger.info("Loaded YAML config from %s", path)
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


def load_config(yaml_data: dict | None = None) -> Config:
    """Build Config from defaults, then YAML data, then environment variables."""
    values = {}
    for f in fields(Config):
        raw = os.environ.get(_ENV_VARS[f.name])
        if raw is None and yaml_data:
            raw = yaml_data.get(f.name)
        if raw is None:
            continue
        values[f.name] = _coerce(f.name, raw)
    return Config(**values)


def _coerce(name: str, raw):
    if name in ("max_entries", "truncate_every"):
        return int(raw)
    if name == "write_interval":
        return float(raw)
    return str(raw)
