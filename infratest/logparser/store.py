"""Writing per-test log files into an output directory."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import TextIO

_log = logging.getLogger(__name__)


@dataclass
class LogWriter:
    """Keeps one open log file per test name under output_dir."""

    output_dir: str
    lookup: dict[str, TextIO] = field(default_factory=dict)

    def __enter__(self) -> LogWriter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close_files()

    def get_or_create_file(self, test_name: str) -> TextIO:
        """Return the open log file for test_name, creating it if needed."""
        handle = self.lookup.get(test_name)
        if handle is not None:
            return handle
        filename = os.path.join(self.output_dir, test_name + ".log")
        handle = create_log_file(filename)
        self.lookup[test_name] = handle
        return handle

    def close_files(self) -> None:
        """Close every log file this writer holds."""
        _log.info("Closing all the files in log writer")
        for test_name, handle in self.lookup.items():
            try:
                handle.close()
            except OSError as err:
                _log.error("Error closing log file for test %s: %s", test_name, err)

    def write_log(self, test_name: str, text: str) -> None:
        """Append text as one line to the log file of test_name."""
        try:
            handle = self.get_or_create_file(test_name)
        except OSError:
            _log.error("Error retrieving log for test: %s", test_name)
            raise
        try:
            handle.write(text + "\n")
        except OSError as err:
            _log.error("Error (%s) writing log entry: %s", err, text)
            raise
        handle.flush()
        try:
            os.fsync(handle.fileno())
        except OSError:
            pass


def create_log_file(filename: str) -> TextIO:
    """Create (or truncate) filename, making its parent directories, and return it open."""
    # Nested test names contain "/", so the directory may not exist yet.
    ensure_directory_exists(os.path.dirname(filename))
    return open(filename, "w", encoding="utf-8")


def ensure_directory_exists(dir_name: str) -> None:
    """Create dir_name and its parents unless it already is a directory."""
    if os.path.isdir(dir_name):
        _log.info("Directory %s already exists", dir_name)
        return
    _log.info("Creating directory %s", dir_name)
    try:
        os.makedirs(dir_name, exist_ok=True)
    except OSError as err:
        _log.error("Error making directory %s: %s", dir_name, err)
        raise