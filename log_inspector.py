"""CLI log inspector: show, count, trim or clear a bounded log file."""

import argparse
import os
import sys

from filelog.bounded_file import truncate_file
from filelog.errors import DecodeError
from filelog.reader import decode_line, parse


def _looks_like_json(path: str) -> bool:
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            if line.strip():
                try:
                    decode_line(line)
                except DecodeError:
                    return False
                return True
    return False


def _format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def count_lines(path: str) -> int:
    with open(path, "rb") as f:
        return sum(chunk.count(b"\n") for chunk in iter(lambda: f.read(65536), b""))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect a bounded log file")
    parser.add_argument("--path", default=os.environ.get("LOG_PATH", "./logs/application.log"),
                        help="Log file to inspect")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--show", action="store_true", help="Print the file's records")
    group.add_argument("--count", action="store_true", help="Print line count and size")
    group.add_argument("--truncate", metavar="N", type=int,
                       help="Keep only the last N lines")
    group.add_argument("--clear", action="store_true", help="Empty the file")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if not os.path.isfile(args.path):
        print(f"Error: File not found: {args.path}", file=sys.stderr)
        return 1

    if args.show:
        if _looks_like_json(args.path):
            for record in parse(args.path):
                print(f"{record.timestamp.isoformat()} [{record.level.label}] "
                      f"[{record.label}] {record.message}")
        else:
            with open(args.path, "r", encoding="utf-8", errors="replace") as f:
                sys.stdout.write(f.read())

    elif args.count:
        size = os.path.getsize(args.path)
        print(f"{count_lines(args.path)} lines ({_format_size(size)})")

    elif args.truncate is not None:
        if args.truncate < 1:
            print("Error: N must be positive", file=sys.stderr)
            return 1
        dropped = truncate_file(args.path, args.truncate)
        print(f"Dropped {_format_size(dropped)}")

    elif args.clear:
        with open(args.path, "r+b") as f:
            f.truncate(0)
        print(f"Cleared {args.path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
