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

"""Exception hierarchy for updateskip.

This module defines the small set of errors the decision engine is allowed
to raise:

- ConfigError: Invalid settings file (YAML parse, unknown keys, bad types)
- PersistenceError: The closing bookkeeping write could not be completed

Read-side problems (missing, unreadable or corrupt records) are never raised.
They are reported as LoadStatus values and turn into "do not skip".

All exceptions inherit from UpdateSkipError, allowing callers to catch every
updateskip error with a single except clause if needed.

Example:
    Catching a failed bookkeeping write:
        ```python
        from updateskip.exceptions import PersistenceError

        try:
            skip = policy.should_skip_update(last_modified, key)
        except PersistenceError as e:
            print(f"Could not record update check: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "UpdateSkipError",
    "ConfigError",
    "PersistenceError",
]


class UpdateSkipError(Exception):
    """Base exception for all updateskip errors."""

    pass


class ConfigError(UpdateSkipError):
    """Raised for settings-related errors.

    This exception is raised when there are problems with:

    - YAML parsing of the settings file
    - Unknown keys in the settings mapping
    - Values of the wrong type or out of range (e.g. negative windows)
    """

    pass


class PersistenceError(UpdateSkipError):
    """Raised when a freshness record cannot be written.

    Losing the engine's own check record would silently corrupt every later
    decision for that artifact, so this is the one failure that propagates
    out of should_skip_update().

    Example:
        Catching persistence errors:
            ```python
            from updateskip.records import store_record
            from updateskip.exceptions import PersistenceError

            try:
                store_record(path, 1700000000000)
            except PersistenceError as e:
                print(f"Write failed: {e}")
            ```
    """

    pass
