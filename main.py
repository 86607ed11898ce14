"""Demo writer — multiplexes several labels into one bounded log file."""

import logging
import os
import random
import signal
import sys
import time
import uuid

from filelog.config import Config, load_config, load_yaml_config
from filelog.levels import Level
from filelog.sink import FileLogging

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [filelog] %(levelname)s %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

_running = True


def _signal_handler(sig, _frame):
    global _running
    logger.info("Shutdown signal received (signal %d), stopping...", sig)
    _running = False


LEVELS = [Level.INFO, Level.INFO, Level.INFO, Level.DEBUG, Level.NOTICE,
          Level.WARNING, Level.ERROR]
SERVICES = ["auth-api", "order-svc", "payment-gw", "user-svc", "catalog-api"]
MESSAGES = {
    Level.DEBUG: [
        "Entering request handler",
        "Parsed request body",
    ],
    Level.INFO: [
        "Request processed successfully",
        "Health check passed",
        "Cache hit for user session",
    ],
    Level.NOTICE: [
        "Configuration reloaded",
        "New peer joined",
    ],
    Level.WARNING: [
        "Slow query detected (>500ms)",
        "Connection pool nearing capacity",
    ],
    Level.ERROR: [
        "Failed to connect to database",
        "Timeout waiting for upstream response",
    ],
}


def generate_entry() -> tuple[Level, str, dict]:
    level = random.choice(LEVELS)
    return level, random.choice(MESSAGES[level]), {"request_id": uuid.uuid4().hex[:8]}


def run(config: Config, max_writes: int | None = None) -> int:
    """Write demo records until stopped. Returns the number written."""
    parent = os.path.dirname(config.log_path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    written = 0
    with FileLogging(config.log_path, max_entries=config.max_entries,
                     output_format=config.log_format,
                     encoding=config.encoding) as factory:
        sinks = [factory(name) for name in SERVICES]
        for sink in sinks:
            sink.level = config.threshold
            sink["service"] = sink.label

        while _running and (max_writes is None or written < max_writes):
            level, message, metadata = generate_entry()
            if random.choice(sinks).log(level, message, metadata):
                written += 1
                if written % config.truncate_every == 0:
                    dropped = factory.stream.truncate_to_last()
                    if dropped:
                        logger.info("Trimmed %d bytes (%d entries written so far)",
                                    dropped, written)
            if config.write_interval:
                time.sleep(config.write_interval)

        dropped_total = sum(sink.dropped for sink in sinks)
        if dropped_total:
            logger.warning("%d record(s) could not be written", dropped_total)
    return written


def main():
    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)

    config = load_config(load_yaml_config(os.environ.get("CONFIG_PATH")))
    logger.info("Starting bounded log writer")
    logger.info(
        "Config: log_path=%s, max_entries=%d, format=%s, level=%s, truncate_every=%d",
        config.log_path, config.max_entries, config.log_format,
        config.level, config.truncate_every,
    )

    try:
        written = run(config)
    except KeyboardInterrupt:
        written = 0
    logger.info("Shut down cleanly. Total entries written: %d", written)


if __name__ == "__main__":
    main()
