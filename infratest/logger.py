"""Immediate, test-labelled logging to stdout."""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Any, TextIO


def logf(test_name: str, fmt: str, *args: Any) -> None:
    """Log a %-formatted message to stdout, prefixed with test name, time and caller."""
    message = fmt % args if args else fmt
    do_log(test_name, 2, sys.stdout, message)


def log(test_name: str, *args: Any) -> None:
    """Log the given values to stdout, prefixed with test name, time and caller."""
    do_log(test_name, 2, sys.stdout, *args)


def _rfc3339_now() -> str:
    stamp = datetime.now().astimezone().isoformat(timespec="seconds")
    if stamp.endswith("+00:00"):
        stamp = stamp[: -len("+00:00")] + "Z"
    return stamp


def do_log(test_name: str, call_depth: int, writer: TextIO, *args: Any) -> None:
    """Write the values as one line to writer, after a test/time/caller prefix."""
    prefix = f"{test_name} {_rfc3339_now()} {caller_prefix(call_depth + 1)}:"
    writer.write(" ".join(str(part) for part in (prefix, *args)) + "\n")


def caller_prefix(call_depth: int) -> str:
    """Return "file:line" of the frame call_depth levels up (0 is this function)."""
    try:
        frame = sys._getframe(call_depth)
    except ValueError:
        return "???:1"
    file_name = frame.f_code.co_filename
    if "/" in file_name:
        file_name = file_name.rsplit("/", 1)[1]
    elif "\\" in file_name:
        file_name = file_name.rsplit("\\", 1)[1]
    return f"{file_name}:{frame.f_lineno}"