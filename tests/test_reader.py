"""Tests for reading JSON-lines log files."""

import json

import pytest

from filelog.errors import DecodeError
from filelog.levels import Level
from filelog.reader import LogFile, decode_line, parse, read_all
from filelog.sink import open_sink


def _write_records(path, messages, label="Test", level=Level.ERROR, metadata=None):
    with open_sink(path, output_format="json") as factory:
        sink = factory(label)
        for message in messages:
            sink.log(level, message, metadata)


class TestRoundTrip:
    def test_fields_survive(self, log_path):
        _write_records(log_path, ["Test Test Test"], label="Foobar", level=Level.NOTICE)
        records = parse(log_path)
        assert len(records) == 1
        assert records[0].label == "Foobar"
        assert records[0].level is Level.NOTICE
        assert records[0].message == "Test Test Test"
        assert records[0].timestamp.tzinfo is not None

    def test_folded_metadata_kept_in_message(self, log_path):
        _write_records(log_path, ["hello"], metadata={"req": "7"})
        assert parse(log_path)[0].message == "req=7 hello"
        assert parse(log_path)[0].metadata == {}

    def test_file_order_preserved(self, log_path):
        _write_records(log_path, [f"msg {i}" for i in range(10)])
        assert [r.message for r in read_all(log_path)] == [f"msg {i}" for i in range(10)]


class TestCorruption:
    def test_truncated_last_line_skipped(self, log_path):
        _write_records(log_path, ["one", "two"])
        with open(log_path, "a", encoding="utf-8") as f:
            f.write('{"date":"2025-01-15T12:00:00+00:00","level":"err')
        assert [r.message for r in parse(log_path)] == ["one", "two"]

    def test_garbage_lines_skipped(self, log_path):
        good = json.dumps({"date": "2025-01-15T12:00:00+00:00", "level": "info",
                           "category": "c", "message": "ok"})
        with open(log_path, "w", encoding="utf-8") as f:
            f.write("not json\n[1, 2]\n\n" + good + "\n")
        assert [r.message for r in parse(log_path)] == ["ok"]

    def test_empty_file(self, log_path):
        open(log_path, "w").close()
        assert parse(log_path) == []


class TestDecodeLine:
    def _line(self, **overrides):
        data = {"date": "2025-01-15T12:00:00+00:00", "level": "error",
                "category": "Test", "message": "m"}
        data.update(overrides)
        return json.dumps(data)

    def test_valid(self):
        record = decode_line(self._line())
        assert record.level is Level.ERROR

    @pytest.mark.parametrize("overrides", [
        {"level": "loud"},
        {"date": "yesterday"},
        {"message": 3},
        {"category": None},
    ])
    def test_invalid_fields(self, overrides):
        with pytest.raises(DecodeError):
            decode_line(self._line(**overrides))

    def test_missing_field(self):
        with pytest.raises(DecodeError):
            decode_line('{"date": "2025-01-15T12:00:00+00:00", "level": "info"}')


class TestLogFile:
    def test_from_path(self, log_path):
        _write_records(log_path, ["a", "b"])
        log_file = LogFile.from_path(log_path)
        assert len(log_file) == 2
        assert [r.message for r in log_file] == ["a", "b"]
