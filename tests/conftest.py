"""
Pytest configuration and shared fixtures for updateskip tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from updateskip.config import SkipCheckSettings


class RecordingLogger:
    """Logger that keeps every message for later assertions."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, str]] = []

    def warning(self, prefix: str, message: str) -> None:
        self.records.append(("warning", prefix, message))

    def info(self, prefix: str, message: str) -> None:
        self.records.append(("info", prefix, message))

    def debug(self, prefix: str, message: str) -> None:
        self.records.append(("debug", prefix, message))

    def messages(self, level: str) -> list[str]:
        return [message for lvl, _, message in self.records if lvl == level]


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def m2_root(tmp_test_dir: Path) -> Path:
    """Provide an empty configuration root standing in for ~/.m2."""
    root = tmp_test_dir / ".m2"
    root.mkdir()
    return root


@pytest.fixture
def settings(m2_root: Path) -> SkipCheckSettings:
    """Provide default settings rooted at the temporary m2 root."""
    return SkipCheckSettings(m2_root=m2_root)


@pytest.fixture
def logger() -> RecordingLogger:
    """Provide a logger that records messages."""
    return RecordingLogger()


@pytest.fixture
def write_properties():
    """
    Factory fixture for writing .properties files.

    Usage:
        path = write_properties(path, {"lastUpdateTime": "42"})
    """
    def _write(path: Path, values: dict[str, str]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = ["#written by test"] + [f"{k}={v}" for k, v in values.items()]
        path.write_text("\n".join(lines) + "\n", encoding="latin-1")
        return path

    return _write
