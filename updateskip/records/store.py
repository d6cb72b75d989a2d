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

"""Freshness record store for updateskip.

A freshness record is a tiny ``.properties`` file holding a single key,
``lastUpdateTime``, whose value is an epoch-millisecond timestamp. The daemon
writes ``mercedes.artifactInfo`` records; the decision policy writes its own
``mercedes.updateInfo`` records.

Loading never raises. Every outcome is reported as a LoadStatus so the policy
can branch on *why* a record is unusable:

- FILE_NOT_FOUND is the normal "never recorded" state (debug log only)
- Every other non-success outcome is logged as a warning

Storing is atomic: the record is written to a temporary file next to the
target and moved into place with os.replace(), so a concurrent reader sees
either the old record or the new one, never a partial write.

Example:
    Round trip:
        ```python
        from pathlib import Path
        from updateskip.records import LoadStatus, load_record, store_record

        path = Path("~/.m2/repository/com/example/lib/mercedes.updateInfo").expanduser()
        store_record(path, 1700000000000)

        result = load_record(path)
        assert result.status is LoadStatus.SUCCESS
        assert result.timestamp == 1700000000000
        ```
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import os
from pathlib import Path
import re
import stat
import tempfile

from updateskip.exceptions import PersistenceError
from updateskip.logging import Logger, get_global_logger
from updateskip.records.properties import format_properties, parse_properties

LAST_UPDATE_TIME = "lastUpdateTime"

# The daemon reads and writes record files as ISO-8859-1.
RECORD_ENCODING = "latin-1"

_MILLIS_PATTERN = re.compile(r"[+-]?[0-9]+")


class LoadStatus(Enum):
    """Outcome of loading a freshness record."""

    SUCCESS = "success"
    FILE_NOT_FOUND = "file_not_found"
    NOT_A_FILE = "not_a_file"
    NOT_READABLE = "not_readable"
    MISSING_PROPERTY = "missing_property"
    UNPARSEABLE = "unparseable"
    IO_ERROR = "io_error"


@dataclass(frozen=True)
class LoadResult:
    """Result of load_record().

    Attributes:
        status: Which outcome occurred.
        timestamp: Epoch millis, only set when status is SUCCESS.
    """

    status: LoadStatus
    timestamp: int | None = None

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.SUCCESS


def parse_millis(value: str) -> int | None:
    """Parse a decimal epoch-millis string strictly.

    Returns None for anything that is not an optionally signed run of ASCII
    digits. Surrounding whitespace, underscores and fractions are rejected.
    """
    if not _MILLIS_PATTERN.fullmatch(value):
        return None
    return int(value)


def load_record(path: Path, logger: Logger | None = None) -> LoadResult:
    """Load the ``lastUpdateTime`` timestamp from a record file.

    Args:
        path: Record file location.
        logger: Logger for diagnostics. Defaults to the global logger.

    Returns:
        LoadResult describing the outcome. Never raises for filesystem
        problems.
    """
    if logger is None:
        logger = get_global_logger()

    try:
        mode = path.stat().st_mode
    except (FileNotFoundError, NotADirectoryError):
        logger.debug("RECORD", f"No record found at {path}")
        return LoadResult(LoadStatus.FILE_NOT_FOUND)
    except PermissionError as err:
        logger.warning("RECORD", f"Record is not accessible at {path}: {err}")
        return LoadResult(LoadStatus.NOT_READABLE)
    except OSError as err:
        logger.warning("RECORD", f"Error checking record {path}: {err}")
        return LoadResult(LoadStatus.IO_ERROR)

    if not stat.S_ISREG(mode):
        logger.warning("RECORD", f"Record is not a regular file: {path}")
        return LoadResult(LoadStatus.NOT_A_FILE)
    if not os.access(path, os.R_OK):
        logger.warning("RECORD", f"Record is not readable: {path}")
        return LoadResult(LoadStatus.NOT_READABLE)

    try:
        text = path.read_text(encoding=RECORD_ENCODING)
    except OSError as err:
        logger.warning("RECORD", f"Error reading record {path}: {err}")
        return LoadResult(LoadStatus.IO_ERROR)

    raw = parse_properties(text).get(LAST_UPDATE_TIME)
    if raw is None:
        logger.warning("RECORD", f"Record is missing {LAST_UPDATE_TIME}: {path}")
        return LoadResult(LoadStatus.MISSING_PROPERTY)

    timestamp = parse_millis(raw)
    if timestamp is None:
        logger.warning(
            "RECORD", f"Record has an invalid {LAST_UPDATE_TIME} {raw!r}: {path}"
        )
        return LoadResult(LoadStatus.UNPARSEABLE)

    return LoadResult(LoadStatus.SUCCESS, timestamp)


def store_record(path: Path, timestamp: int) -> None:
    """Atomically replace the record at ``path`` with ``timestamp``.

    Missing parent directories are created. The temporary file lives in the
    target directory so the final os.replace() never crosses a filesystem
    boundary. The temporary file is removed afterwards whether or not the
    replace succeeded.

    Args:
        path: Record file location.
        timestamp: Epoch millis to store under ``lastUpdateTime``.

    Raises:
        PersistenceError: If the directories, the temporary file or the
            final rename could not be created.
    """
    content = format_properties({LAST_UPDATE_TIME: str(timestamp)})

    temp_path: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(
            prefix="mercedes-", suffix=".tmp", dir=path.parent
        )
        with os.fdopen(fd, "w", encoding=RECORD_ENCODING) as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, path)
        temp_path = None
    except OSError as err:
        raise PersistenceError(f"Error writing record to {path}: {err}") from err
    finally:
        if temp_path is not None:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
