"""Append-only log file capped at the most recent N lines.

Truncation scans the file backwards from EOF in fixed-size chunks, counting
newline bytes. Once ``lines_to_keep + 1`` separators have been seen, every
byte up to and including the last one found belongs to older lines and is
dropped. Files holding ``lines_to_keep`` lines or fewer are never rewritten.
"""

import logging
import os
import threading

from filelog.errors import CreateError, LogIOError, OpenError

logger = logging.getLogger(__name__)

NEWLINE = b"\n"
DEFAULT_MAX_ENTRIES = 2000
CHUNK_SIZE = 64 * 1024


def find_cut_offset(f, lines_to_keep: int, chunk_size: int = CHUNK_SIZE) -> int | None:
    """Return the offset of the first byte to keep, or None if nothing needs dropping.

    ``f`` is a binary file object opened for reading. Its position is left
    undefined.
    """
    f.seek(0, os.SEEK_END)
    pos = f.tell()
    found = 0
    while pos > 0:
        start = max(0, pos - chunk_size)
        f.seek(start)
        chunk = f.read(pos - start)
        idx = len(chunk)
        while True:
            idx = chunk.rfind(NEWLINE, 0, idx)
            if idx < 0:
                break
            found += 1
            if found > lines_to_keep:
                return start + idx + len(NEWLINE)
        pos = start
    return None


def trim_to_last(f, lines_to_keep: int, chunk_size: int = CHUNK_SIZE) -> int:
    """Rewrite ``f`` in place so only its last ``lines_to_keep`` lines remain.

    ``f`` must be opened in ``r+b`` mode. Returns the number of bytes dropped.
    The position is left at the new EOF.
    """
    f.flush()
    cut = find_cut_offset(f, lines_to_keep, chunk_size)
    if cut is None:
        f.seek(0, os.SEEK_END)
        return 0

    read_pos = cut
    write_pos = 0
    while True:
        f.seek(read_pos)
        chunk = f.read(chunk_size)
        if not chunk:
            break
        f.seek(write_pos)
        f.write(chunk)
        read_pos += len(chunk)
        write_pos += len(chunk)
    f.truncate(write_pos)
    f.flush()
    f.seek(0, os.SEEK_END)
    return cut


def truncate_file(path: str, lines_to_keep: int) -> int:
    """Trim the file at ``path`` to its last ``lines_to_keep`` lines."""
    with open(path, "r+b") as f:
        return trim_to_last(f, lines_to_keep)


class BoundedAppendFile:
    """Thread-safe append-only file that keeps at most ``max_entries`` lines.

    A missing file is created empty. An existing file is trimmed to
    ``max_entries`` lines before it is opened; if that trim fails the file
    is opened untrimmed. A file that can be written but not read is opened
    append-only, in which case ``truncate_to_last`` raises LogIOError. The
    handle stays positioned at EOF between calls.
    """

    def __init__(self, path: str, max_entries: int = DEFAULT_MAX_ENTRIES,
                 encoding: str = "utf-8"):
        if max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self._path = os.fspath(path)
        self._max_entries = max_entries
        self._encoding = encoding
        self._lock = threading.Lock()
        self._file = None

        if not os.path.exists(self._path):
            try:
                open(self._path, "ab").close()
            except OSError as exc:
                raise CreateError(f"Cannot create log file {self._path}: {exc}") from exc
        else:
            try:
                dropped = truncate_file(self._path, max_entries)
                if dropped:
                    logger.debug("Trimmed %d bytes from %s on open", dropped, self._path)
            except OSError as exc:
                logger.warning("Could not trim %s before opening: %s", self._path, exc)

        try:
            self._file = self._open_handle()
        except OSError as exc:
            raise OpenError(f"Cannot open log file {self._path}: {exc}") from exc

    def _open_handle(self):
        """Open read/write at EOF, or append-only if the file cannot be read."""
        try:
            f = open(self._path, "r+b")
        except PermissionError:
            logger.warning("%s is not readable, opening append-only; "
                           "truncate_to_last will fail", self._path)
            f = open(self._path, "ab")
        f.seek(0, os.SEEK_END)
        return f

    @property
    def path(self) -> str:
        return self._path

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def closed(self) -> bool:
        return self._file is None or self._file.closed

    def _handle(self):
        if self.closed:
            raise LogIOError(f"Log file {self._path} is closed")
        return self._file

    def append(self, data: bytes):
        """Write ``data`` verbatim at EOF. No line terminator is added."""
        with self._lock:
            f = self._handle()
            try:
                f.seek(0, os.SEEK_END)
                f.write(data)
                f.flush()
            except (OSError, ValueError) as exc:
                raise LogIOError(f"Append to {self._path} failed: {exc}") from exc

    def write(self, text: str):
        self.append(text.encode(self._encoding))

    def truncate_to_last(self, n: int | None = None) -> int:
        """Keep only the last ``n`` lines (default ``max_entries``).

        Returns the number of bytes dropped.
        """
        if n is None:
            n = self._max_entries
        if n < 1:
            raise ValueError(f"n must be positive, got {n}")
        with self._lock:
            f = self._handle()
            try:
                return trim_to_last(f, n)
            except (OSError, ValueError) as exc:
                raise LogIOError(f"Truncating {self._path} failed: {exc}") from exc

    def clear(self):
        """Reset the file to zero length."""
        with self._lock:
            f = self._handle()
            try:
                f.seek(0)
                f.truncate(0)
                f.flush()
            except (OSError, ValueError) as exc:
                raise LogIOError(f"Clearing {self._path} failed: {exc}") from exc

    def size(self) -> int:
        with self._lock:
            f = self._handle()
            try:
                return f.seek(0, os.SEEK_END)
            except (OSError, ValueError) as exc:
                raise LogIOError(f"Cannot stat {self._path}: {exc}") from exc

    def close(self):
        with self._lock:
            if self._file is not None and not self._file.closed:
                self._file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __repr__(self) -> str:
        return f"BoundedAppendFile({self._path!r}, max_entries={self._max_entries})"
