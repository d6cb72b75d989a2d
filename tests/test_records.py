"""
Tests for updateskip.records module.

Tests freshness record persistence including:
- The .properties text format
- Every load outcome
- Atomic store, temp-file cleanup and failure propagation
- Concurrent writers on the same record
"""

from __future__ import annotations

import os
import threading
from unittest.mock import patch

import pytest

from updateskip.exceptions import PersistenceError
from updateskip.records import (
    LoadResult,
    LoadStatus,
    format_properties,
    load_record,
    parse_properties,
    store_record,
)
from updateskip.records.store import parse_millis


class TestProperties:
    """Tests for the .properties text format."""

    def test_parse_simple_pairs(self):
        """Test parsing key=value lines."""
        text = "lastUpdateSuccess=true\nlastUpdateTime=1700000000000\n"
        assert parse_properties(text) == {
            "lastUpdateSuccess": "true",
            "lastUpdateTime": "1700000000000",
        }

    def test_parse_skips_comments_and_blank_lines(self):
        """Test that # and ! comments and blank lines are ignored."""
        text = "#Mon Oct 20 10:00:00 UTC 2025\n\n! another comment\nkey=value\n"
        assert parse_properties(text) == {"key": "value"}

    def test_parse_alternative_separators(self):
        """Test colon and whitespace separators with surrounding spaces."""
        text = "a : 1\nb 2\n  c   =   3\n"
        assert parse_properties(text) == {"a": "1", "b": "2", "c": "3"}

    def test_parse_keeps_trailing_value_whitespace(self):
        """Test that trailing whitespace stays part of the value."""
        assert parse_properties("key=42  \n") == {"key": "42  "}

    def test_parse_last_duplicate_wins(self):
        """Test that a repeated key keeps the last value."""
        assert parse_properties("k=1\nk=2\n") == {"k": "2"}

    def test_parse_line_continuation(self):
        """Test backslash continuation joins lines without leading space."""
        assert parse_properties("key=abc\\\n    def\n") == {"key": "abcdef"}

    def test_parse_escapes(self):
        """Test escaped separators and unicode escapes."""
        text = "my\\=key=a\\tb\nname=caf\\u00e9\n"
        assert parse_properties(text) == {"my=key": "a\tb", "name": "café"}

    def test_parse_key_without_value(self):
        """Test that a bare key maps to an empty value."""
        assert parse_properties("flag\n") == {"flag": ""}

    def test_parse_only_breaks_on_newlines(self):
        """Test NEL inside a value does not split the line."""
        assert parse_properties("lastUpdateTime=12\x853\n") == {
            "lastUpdateTime": "12\x853"
        }

    def test_parse_form_feed_before_value(self):
        """Test a form feed after the separator is separator whitespace."""
        assert parse_properties("lastUpdateTime=\f42\r\nother=1\r") == {
            "lastUpdateTime": "42",
            "other": "1",
        }

    def test_format_properties(self):
        """Test rendering key=value lines with trailing newline."""
        assert format_properties({"lastUpdateTime": "5"}) == "lastUpdateTime=5\n"


class TestParseMillis:
    """Tests for strict timestamp parsing."""

    @pytest.mark.parametrize(
        "raw, expected",
        [("1700000000000", 1700000000000), ("0", 0), ("-5", -5), ("+7", 7)],
    )
    def test_valid(self, raw, expected):
        """Test signed decimal digits are accepted."""
        assert parse_millis(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", "1.5", "1_000", " 42", "42 ", "0x10"])
    def test_invalid(self, raw):
        """Test anything else is rejected."""
        assert parse_millis(raw) is None


class TestLoadRecord:
    """Tests for load_record outcomes."""

    def test_success(self, tmp_test_dir, write_properties):
        """Test loading a valid record."""
        path = write_properties(tmp_test_dir / "rec", {"lastUpdateTime": "123"})

        result = load_record(path)

        assert result == LoadResult(LoadStatus.SUCCESS, 123)
        assert result.ok

    def test_file_not_found_logs_debug_only(self, tmp_test_dir, logger):
        """Test missing file is reported at debug level, not as a warning."""
        result = load_record(tmp_test_dir / "missing", logger)

        assert result.status is LoadStatus.FILE_NOT_FOUND
        assert result.timestamp is None
        assert logger.messages("warning") == []
        assert len(logger.messages("debug")) == 1

    def test_not_a_file(self, tmp_test_dir, logger):
        """Test a directory at the record path."""
        path = tmp_test_dir / "rec"
        path.mkdir()

        result = load_record(path, logger)

        assert result.status is LoadStatus.NOT_A_FILE
        assert len(logger.messages("warning")) == 1

    def test_not_readable(self, tmp_test_dir, write_properties, logger):
        """Test an unreadable record."""
        path = write_properties(tmp_test_dir / "rec", {"lastUpdateTime": "1"})

        with patch("updateskip.records.store.os.access", return_value=False):
            result = load_record(path, logger)

        assert result.status is LoadStatus.NOT_READABLE
        assert len(logger.messages("warning")) == 1

    def test_missing_property(self, tmp_test_dir, write_properties, logger):
        """Test a record without lastUpdateTime."""
        path = write_properties(tmp_test_dir / "rec", {"other": "1"})

        result = load_record(path, logger)

        assert result.status is LoadStatus.MISSING_PROPERTY
        assert len(logger.messages("warning")) == 1

    def test_empty_file_is_missing_property(self, tmp_test_dir):
        """Test an empty record file."""
        path = tmp_test_dir / "rec"
        path.write_text("", encoding="latin-1")

        assert load_record(path).status is LoadStatus.MISSING_PROPERTY

    def test_unparseable(self, tmp_test_dir, write_properties, logger):
        """Test a non-integer timestamp."""
        path = write_properties(tmp_test_dir / "rec", {"lastUpdateTime": "yesterday"})

        result = load_record(path, logger)

        assert result.status is LoadStatus.UNPARSEABLE
        assert result.timestamp is None
        assert len(logger.messages("warning")) == 1

    def test_permission_denied_on_stat(self, tmp_test_dir, write_properties, logger):
        """Test an unsearchable parent directory does not raise."""
        path = write_properties(tmp_test_dir / "rec", {"lastUpdateTime": "1"})

        with patch(
            "pathlib.Path.stat",
            side_effect=PermissionError(13, "Permission denied"),
        ):
            result = load_record(path, logger)

        assert result.status is LoadStatus.NOT_READABLE
        assert "Permission denied" in logger.messages("warning")[0]

    def test_other_stat_error(self, tmp_test_dir, write_properties, logger):
        """Test any other stat failure is reported as an I/O error."""
        path = write_properties(tmp_test_dir / "rec", {"lastUpdateTime": "1"})

        with patch("pathlib.Path.stat", side_effect=OSError(5, "I/O error")):
            result = load_record(path, logger)

        assert result.status is LoadStatus.IO_ERROR
        assert len(logger.messages("warning")) == 1

    def test_unparseable_with_line_separator_char(self, tmp_test_dir, logger):
        """Test a corrupt value containing NEL is not truncated to a timestamp."""
        path = tmp_test_dir / "rec"
        path.write_text("lastUpdateTime=12\x853\n", encoding="latin-1")

        assert load_record(path, logger).status is LoadStatus.UNPARSEABLE

    def test_io_error(self, tmp_test_dir, write_properties, logger):
        """Test a read failure after the file checks passed."""
        path = write_properties(tmp_test_dir / "rec", {"lastUpdateTime": "1"})

        with patch("pathlib.Path.read_text", side_effect=OSError("disk gone")):
            result = load_record(path, logger)

        assert result.status is LoadStatus.IO_ERROR
        assert "disk gone" in logger.messages("warning")[0]


class TestStoreRecord:
    """Tests for atomic store_record."""

    def test_round_trip(self, tmp_test_dir):
        """Test writing T then loading yields SUCCESS(T)."""
        path = tmp_test_dir / "rec"

        store_record(path, 1700000000123)

        assert load_record(path) == LoadResult(LoadStatus.SUCCESS, 1700000000123)

    def test_writes_single_key(self, tmp_test_dir, write_properties):
        """Test that a store replaces the whole record."""
        path = write_properties(
            tmp_test_dir / "rec", {"lastUpdateTime": "1", "extra": "value"}
        )

        store_record(path, 2)

        assert path.read_text(encoding="latin-1") == "lastUpdateTime=2\n"

    def test_creates_parent_directories(self, tmp_test_dir):
        """Test that missing parents are created."""
        path = tmp_test_dir / "com" / "example" / "lib" / "1.0" / "rec"

        store_record(path, 5)

        assert load_record(path).timestamp == 5

    def test_leaves_no_temp_files(self, tmp_test_dir):
        """Test that the temp file is gone after a successful store."""
        path = tmp_test_dir / "rec"

        store_record(path, 5)

        assert sorted(p.name for p in tmp_test_dir.iterdir()) == ["rec"]

    def test_crash_during_rename_keeps_previous_record(self, tmp_test_dir):
        """Test an interrupted write leaves the old record intact and no temp file."""
        path = tmp_test_dir / "rec"
        store_record(path, 1)

        with patch("updateskip.records.store.os.replace", side_effect=OSError("crash")):
            with pytest.raises(PersistenceError, match="Error writing record"):
                store_record(path, 2)

        assert load_record(path) == LoadResult(LoadStatus.SUCCESS, 1)
        assert sorted(p.name for p in tmp_test_dir.iterdir()) == ["rec"]

    def test_crash_during_rename_without_previous_record(self, tmp_test_dir):
        """Test an interrupted first write leaves nothing behind."""
        path = tmp_test_dir / "rec"

        with patch("updateskip.records.store.os.replace", side_effect=OSError("crash")):
            with pytest.raises(PersistenceError):
                store_record(path, 2)

        assert not path.exists()
        assert list(tmp_test_dir.iterdir()) == []

    def test_temp_file_creation_failure_raises(self, tmp_test_dir):
        """Test a failure creating the temp file is fatal."""
        with patch(
            "updateskip.records.store.tempfile.mkstemp",
            side_effect=OSError("no space"),
        ):
            with pytest.raises(PersistenceError) as excinfo:
                store_record(tmp_test_dir / "rec", 1)

        assert isinstance(excinfo.value.__cause__, OSError)

    def test_cleanup_failure_is_swallowed(self, tmp_test_dir):
        """Test that a failed temp-file removal does not mask the write error."""
        path = tmp_test_dir / "rec"

        with patch("updateskip.records.store.os.replace", side_effect=OSError("crash")):
            with patch("updateskip.records.store.os.unlink", side_effect=OSError("busy")):
                with pytest.raises(PersistenceError, match="crash"):
                    store_record(path, 9)

        assert not path.exists()

    def test_unlink_failure_after_success_is_harmless(self, tmp_test_dir):
        """Test a successful store does not depend on temp-file removal."""
        path = tmp_test_dir / "rec"

        with patch("updateskip.records.store.os.unlink", side_effect=OSError("busy")):
            store_record(path, 9)

        assert load_record(path).timestamp == 9

    def test_parent_is_a_file_raises(self, tmp_test_dir):
        """Test that an unusable parent directory is fatal."""
        blocker = tmp_test_dir / "blocker"
        blocker.write_text("x", encoding="utf-8")

        with pytest.raises(PersistenceError):
            store_record(blocker / "rec", 1)

    def test_concurrent_writers_never_corrupt(self, tmp_test_dir):
        """Test racing writers and readers only ever see complete records."""
        path = tmp_test_dir / "rec"
        store_record(path, 0)
        attempted = set(range(1, 41)) | {0}
        seen: list[LoadResult] = []
        stop = threading.Event()

        def reader():
            while not stop.is_set():
                seen.append(load_record(path))

        def writer(ts):
            store_record(path, ts)

        reader_thread = threading.Thread(target=reader)
        reader_thread.start()
        writers = [threading.Thread(target=writer, args=(ts,)) for ts in range(1, 41)]
        for t in writers:
            t.start()
        for t in writers:
            t.join()
        stop.set()
        reader_thread.join()

        final = load_record(path)
        assert final.status is LoadStatus.SUCCESS
        assert final.timestamp in attempted
        assert all(r.status is LoadStatus.SUCCESS for r in seen)
        assert all(r.timestamp in attempted for r in seen)
        assert [p for p in os.listdir(tmp_test_dir) if p != "rec"] == []
