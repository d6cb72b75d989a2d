"""
Tests for updateskip.logging module.

Tests logger levels and the global logger.
"""

from __future__ import annotations

from updateskip.logging import (
    DefaultLogger,
    SilentLogger,
    get_global_logger,
    get_logger,
    set_global_logger,
)
from updateskip.records import load_record


class TestDefaultLogger:
    """Tests for DefaultLogger output levels."""

    def test_warning_always_printed(self, capsys):
        """Test warnings print without verbose."""
        DefaultLogger().warning("RECORD", "bad record")

        assert "[RECORD] WARNING: bad record" in capsys.readouterr().err

    def test_info_requires_verbose(self, capsys):
        """Test info prints only in verbose mode."""
        DefaultLogger().info("DAEMON", "quiet")
        DefaultLogger(verbose=True).info("DAEMON", "loud")

        err = capsys.readouterr().err
        assert "quiet" not in err
        assert "[DAEMON] loud" in err

    def test_debug_implies_verbose(self, capsys):
        """Test debug mode prints info and debug."""
        logger = get_logger(debug=True)
        logger.info("DAEMON", "info line")
        logger.debug("POLICY", "debug line")

        err = capsys.readouterr().err
        assert "info line" in err
        assert "debug line" in err


class TestGlobalLogger:
    """Tests for the global logger."""

    def test_default_is_silent(self):
        """Test the default global logger is silent."""
        assert isinstance(get_global_logger(), SilentLogger)

    def test_set_global_logger_used_by_library(self, tmp_test_dir, logger):
        """Test library calls without a logger use the global one."""
        previous = get_global_logger()
        set_global_logger(logger)
        try:
            load_record(tmp_test_dir / "missing")
        finally:
            set_global_logger(previous)

        assert len(logger.messages("debug")) == 1
