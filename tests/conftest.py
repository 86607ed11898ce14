from datetime import datetime, timedelta, timezone

import pytest

from filelog.bounded_file import BoundedAppendFile

FIXED_TIME = datetime(2025, 1, 15, 12, 30, 45, tzinfo=timezone(timedelta(hours=2)))


@pytest.fixture
def log_path(tmp_path):
    return str(tmp_path / "test.log")


@pytest.fixture
def clock():
    return lambda: FIXED_TIME


@pytest.fixture
def stream(log_path):
    f = BoundedAppendFile(log_path, max_entries=5)
    yield f
    f.close()


def write_lines(path, count, prefix="line"):
    with open(path, "wb") as f:
        for i in range(1, count + 1):
            f.write(f"{prefix} {i}\n".encode())


def read_lines(path):
    with open(path, "rb") as f:
        return f.read().decode().splitlines()
