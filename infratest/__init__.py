"""Helpers for writing infrastructure tests."""

__version__ = "0.1.0"