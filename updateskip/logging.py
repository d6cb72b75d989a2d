# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Logging interface for updateskip.

This module provides a configurable logging interface that library modules
can use for diagnostics without depending on the host resolver. The logger
can be configured globally or passed as a parameter for better isolation.

The logger supports three output levels:
- Warning: Always printed (untrustworthy records, degraded daemon)
- Info: Only printed when verbose mode is enabled
- Debug: Only printed when debug mode is enabled (implies verbose)

Example:
    Configure global logger:
        ```python
        from updateskip.logging import get_logger, set_global_logger

        logger = get_logger(verbose=True, debug=False)
        set_global_logger(logger)
        ```

    Use in library code:
        ```python
        from updateskip.logging import get_global_logger

        logger = get_global_logger()
        logger.warning("RECORD", "Record is not readable")
        logger.info("DAEMON", "Daemon is healthy")
        logger.debug("POLICY", "Skipping com.example:lib")
        ```

    Use with dependency injection:

        def my_function(logger=None):
            if logger is None:
                logger = get_global_logger()
            logger.info("MODULE", "Processing...")

Note:
    The default logger is silent, so library functions won't print anything
    unless explicitly configured. Logging never changes a decision.
"""

from __future__ import annotations

import sys
from typing import Protocol


class Logger(Protocol):
    """Protocol for logger implementations."""

    def warning(self, prefix: str, message: str) -> None:
        """Print a warning message.

        Args:
            prefix: Message prefix (e.g., "RECORD", "DAEMON").
            message: Log message.
        """
        ...

    def info(self, prefix: str, message: str) -> None:
        """Print an informational message.

        Args:
            prefix: Message prefix (e.g., "DAEMON").
            message: Log message.
        """
        ...

    def debug(self, prefix: str, message: str) -> None:
        """Print a debug log message.

        Args:
            prefix: Message prefix (e.g., "POLICY", "RECORD").
            message: Log message.
        """
        ...


class DefaultLogger:
    """Default logger implementation that prints to stderr.

    Warnings are always printed. Info and debug messages respect the verbose
    and debug flags. Output goes to stderr so it never mixes with whatever
    the host resolver writes to stdout.
    """

    def __init__(self, verbose: bool = False, debug: bool = False) -> None:
        """Initialize logger with verbosity settings.

        Args:
            verbose: If True, print info messages.
            debug: If True, print debug messages (implies verbose).
        """
        self._verbose = verbose or debug
        self._debug = debug

    def warning(self, prefix: str, message: str) -> None:
        """Print a warning message."""
        print(f"[{prefix}] WARNING: {message}", file=sys.stderr)

    def info(self, prefix: str, message: str) -> None:
        """Print an info message (only when verbose mode is active)."""
        if self._verbose:
            print(f"[{prefix}] {message}", file=sys.stderr)

    def debug(self, prefix: str, message: str) -> None:
        """Print a debug log message (only when debug mode is active)."""
        if self._debug:
            print(f"[{prefix}] {message}", file=sys.stderr)


class SilentLogger:
    """Logger that suppresses all output.

    Useful for embedding in resolvers that own their own output.
    """

    def warning(self, prefix: str, message: str) -> None:
        """Suppress warning output."""
        pass

    def info(self, prefix: str, message: str) -> None:
        """Suppress info output."""
        pass

    def debug(self, prefix: str, message: str) -> None:
        """Suppress debug output."""
        pass


# Global logger instance (defaults to silent)
_global_logger: Logger = SilentLogger()


def get_logger(verbose: bool = False, debug: bool = False) -> Logger:
    """Get a logger instance with specified verbosity.

    Args:
        verbose: If True, logger will print info messages.
        debug: If True, logger will print debug messages (implies verbose).

    Returns:
        A logger instance configured with the specified verbosity.
    """
    return DefaultLogger(verbose=verbose, debug=debug)


def get_global_logger() -> Logger:
    """Get the global logger instance.

    Returns:
        The current global logger instance.

    Note:
        The default global logger is silent. Use set_global_logger() to
        configure it, or pass a logger instance directly to functions.
    """
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Set the global logger instance.

    Args:
        logger: Logger instance to use as the global logger.

    Note:
        This affects all library functions that are called without an
        explicit logger. For better isolation, pass logger instances
        directly instead of using the global logger.
    """
    global _global_logger
    _global_logger = logger
