"""Classify go test output lines and write per-test log files."""