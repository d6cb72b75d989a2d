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

"""Daemon status loading for updateskip.

The background daemon keeps a process-wide status file, by default
``~/.m2/mercedes.properties``::

    lastUpdateSuccess=true
    lastUpdateTime=1700000000000

The file is read once per process. From it we derive whether the daemon has
reported within the recency window (one minute by default). "Now" is captured
at load time and the verdict is never re-evaluated afterwards.

Nothing in this module raises for filesystem problems. A missing, unreadable
or broken status file yields the INVALID status, which makes the decision
policy always perform the real remote check.

Example:
    Load once and share:
        ```python
        from updateskip.daemon import DaemonStatusLoader

        loader = DaemonStatusLoader(Path.home() / ".m2" / "mercedes.properties")
        status = loader.load_once()
        if status.recently_updated:
            ...
        ```
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import os
from pathlib import Path
import stat
import threading

from updateskip.clock import Clock, now_millis
from updateskip.config.loader import ONE_MINUTE_MS
from updateskip.logging import Logger, get_global_logger
from updateskip.records.properties import parse_properties
from updateskip.records.store import LAST_UPDATE_TIME, RECORD_ENCODING, parse_millis

LAST_UPDATE_SUCCESS = "lastUpdateSuccess"


class DaemonHealth(Enum):
    """Informational classification of the daemon status."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    ABSENT = "absent"


@dataclass(frozen=True)
class DaemonStatus:
    """Daemon status as loaded at process start.

    Attributes:
        last_update_success: Whether the daemon's last refresh succeeded.
        last_update_time: When that refresh happened (epoch millis).
        recently_updated: Whether last_update_time was inside the recency
            window at load time.
        missing_fields: Keys that were absent or unparseable in the file.
    """

    last_update_success: bool
    last_update_time: int
    recently_updated: bool
    missing_fields: tuple[str, ...] = ()

    @property
    def success_reported(self) -> bool:
        """False when the daemon said nothing about success (not "said false")."""
        return LAST_UPDATE_SUCCESS not in self.missing_fields

    @property
    def is_valid(self) -> bool:
        """True when the daemon reported a successful refresh within the window."""
        return self.recently_updated and self.last_update_success

    @property
    def health(self) -> DaemonHealth:
        if self.is_valid:
            return DaemonHealth.HEALTHY
        if self.recently_updated:
            return DaemonHealth.DEGRADED
        return DaemonHealth.ABSENT


INVALID = DaemonStatus(
    last_update_success=False,
    last_update_time=0,
    recently_updated=False,
    missing_fields=(LAST_UPDATE_SUCCESS, LAST_UPDATE_TIME),
)


def evaluate_status(
    last_update_success: bool,
    last_update_time: int,
    now: int,
    recency_window_ms: int = ONE_MINUTE_MS,
    missing_fields: tuple[str, ...] = (),
) -> DaemonStatus:
    """Build a DaemonStatus, deciding recency against ``now``."""
    return DaemonStatus(
        last_update_success=last_update_success,
        last_update_time=last_update_time,
        recently_updated=(now - last_update_time) < recency_window_ms,
        missing_fields=missing_fields,
    )


def _log_summary(status: DaemonStatus, logger: Logger) -> None:
    health = status.health
    if health is DaemonHealth.HEALTHY:
        logger.info(
            "DAEMON", "Daemon is healthy, will skip snapshot checks based on its records"
        )
    elif health is DaemonHealth.DEGRADED:
        logger.warning(
            "DAEMON",
            "Daemon is running but its last refresh failed (connectivity issue?); "
            "will skip all snapshot checks, set force_update to override",
        )
    else:
        logger.warning(
            "DAEMON",
            "Daemon does not appear to be running, will check the remote repository for updates",
        )


def load_daemon_status(
    path: Path,
    recency_window_ms: int = ONE_MINUTE_MS,
    clock: Clock = now_millis,
    logger: Logger | None = None,
) -> DaemonStatus:
    """Read and classify the daemon status file.

    Args:
        path: Status file location.
        recency_window_ms: Maximum age for the status to count as recent.
        clock: Source of "now" in epoch millis, called once.
        logger: Logger for diagnostics. Defaults to the global logger.

    Returns:
        The loaded DaemonStatus, or INVALID if the file is missing,
        not a regular file, unreadable or cannot be read.
    """
    if logger is None:
        logger = get_global_logger()

    try:
        mode = path.stat().st_mode
    except (FileNotFoundError, NotADirectoryError):
        logger.warning("DAEMON", f"No daemon status file found at {path}")
        return INVALID
    except OSError as err:
        logger.warning("DAEMON", f"Error checking daemon status file {path}: {err}")
        return INVALID

    if not stat.S_ISREG(mode):
        logger.warning("DAEMON", f"Daemon status file is not a regular file: {path}")
        return INVALID
    if not os.access(path, os.R_OK):
        logger.warning("DAEMON", f"Daemon status file is not readable: {path}")
        return INVALID

    try:
        text = path.read_text(encoding=RECORD_ENCODING)
    except OSError as err:
        logger.warning("DAEMON", f"Error reading daemon status from {path}: {err}")
        return INVALID

    properties = parse_properties(text)
    missing: list[str] = []

    raw_success = properties.get(LAST_UPDATE_SUCCESS)
    if raw_success is None:
        logger.warning("DAEMON", f"Daemon status is missing {LAST_UPDATE_SUCCESS}: {path}")
        missing.append(LAST_UPDATE_SUCCESS)
        success = False
    else:
        success = raw_success.lower() == "true"

    raw_time = properties.get(LAST_UPDATE_TIME)
    update_time = None if raw_time is None else parse_millis(raw_time)
    if raw_time is None:
        logger.warning("DAEMON", f"Daemon status is missing {LAST_UPDATE_TIME}: {path}")
    elif update_time is None:
        logger.warning(
            "DAEMON", f"Daemon status has an invalid {LAST_UPDATE_TIME} {raw_time!r}: {path}"
        )
    if update_time is None:
        missing.append(LAST_UPDATE_TIME)
        update_time = 0

    status = evaluate_status(
        success, update_time, clock(), recency_window_ms, tuple(missing)
    )
    _log_summary(status, logger)
    return status


class DaemonStatusLoader:
    """Loads the daemon status at most once and hands out the same object.

    Concurrent first callers block on a lock so the file is read exactly
    once; every later call returns the memoized status without locking.

    Attributes:
        path: Status file location.
    """

    def __init__(
        self,
        path: Path,
        recency_window_ms: int = ONE_MINUTE_MS,
        clock: Clock = now_millis,
        logger: Logger | None = None,
    ) -> None:
        self.path = path
        self._recency_window_ms = recency_window_ms
        self._clock = clock
        self._logger = logger
        self._status: DaemonStatus | None = None
        self._lock = threading.Lock()

    def load_once(self) -> DaemonStatus:
        """Return the daemon status, reading the file on first use only."""
        status = self._status
        if status is not None:
            return status

        with self._lock:
            if self._status is None:
                self._status = load_daemon_status(
                    self.path,
                    recency_window_ms=self._recency_window_ms,
                    clock=self._clock,
                    logger=self._logger,
                )
            return self._status
