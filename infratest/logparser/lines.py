"""Classification of lines in `go test` style output."""

from __future__ import annotations

import re

# Whitespace as understood by the test output format: no vertical tab.
_WS = r"[\t\n\f\r ]"

_REGEX_RESULT = re.compile(
    r"--- (PASS|FAIL|SKIP): (.+) \((\d+\.\d+)(?: ?seconds|s)\)", re.ASCII
)
_REGEX_STATUS = re.compile(rf"=== (RUN|PAUSE|CONT){_WS}+(.+)", re.ASCII)
_REGEX_SUMMARY = re.compile(
    rf"^(ok|FAIL){_WS}+([^ ]+){_WS}+"
    rf"(?:(\d+\.\d+)s|\(cached\)|(\[\w+ failed\]))"
    rf"(?:{_WS}+coverage:{_WS}+(\d+\.\d+)%{_WS}of{_WS}statements(?:{_WS}in{_WS}.+)?)?\Z",
    re.ASCII,
)
_REGEX_PANIC = re.compile(r"^panic:")
_REGEX_INDENT = re.compile(rf"^{_WS}+")


def get_indent(line: str) -> str:
    """Return the leading whitespace of line ("" when it is not indented)."""
    match = _REGEX_INDENT.search(line)
    return match.group(0) if match else ""


def get_test_name_from_result_line(line: str) -> str:
    """Return the test name from a result line such as ``--- FAIL: TestSnafu (0.00s)``."""
    match = _REGEX_RESULT.search(line)
    if match is None:
        raise ValueError(f"not a test result line: {line!r}")
    return match.group(2)


def is_result_line(line: str) -> bool:
    """Return True if line reports a test result (``--- PASS``, ``--- FAIL`` or ``--- SKIP``)."""
    return _REGEX_RESULT.search(line) is not None


def get_test_name_from_status_line(line: str) -> str:
    """Return the test name from a status line such as ``=== RUN   TestSnafu``."""
    match = _REGEX_STATUS.search(line)
    if match is None:
        raise ValueError(f"not a test status line: {line!r}")
    return match.group(2)


def is_status_line(line: str) -> bool:
    """Return True if line is a test status line (RUN, PAUSE or CONT)."""
    return _REGEX_STATUS.search(line) is not None


def is_summary_line(line: str) -> bool:
    """Return True if line is a package summary line (``ok`` or ``FAIL``)."""
    return _REGEX_SUMMARY.search(line) is not None


def is_panic_line(line: str) -> bool:
    """Return True if line starts a panic."""
    return _REGEX_PANIC.search(line) is not None