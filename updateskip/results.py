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

"""Public API return types for updateskip.

Note:
    Only public API return types belong in this module. Domain types
    (like DaemonStatus or LoadResult) remain co-located with their
    related logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from updateskip.records.store import LoadResult


class SkipReason(Enum):
    """Which branch of the decision policy produced the verdict."""

    FORCED_UPDATE = "forced_update"
    DAEMON_ABSENT = "daemon_absent"
    DAEMON_DEGRADED = "daemon_degraded"
    INCOMPLETE_KEY = "incomplete_key"
    NEVER_CHECKED = "never_checked"
    CHECKED_BEFORE = "checked_before"
    UNTRUSTED_RECORD = "untrusted_record"
    UNCHANGED_SINCE_CHECK = "unchanged_since_check"
    CHANGED_SINCE_CHECK = "changed_since_check"


@dataclass(frozen=True)
class SkipDecision:
    """Result of a single update-skip decision.

    Attributes:
        skip: True if the remote freshness check may be skipped.
        reason: Branch of the policy that decided.
        daemon_record: Load result of the daemon's artifact record, or None
            when the policy returned before reading records.
        check_record: Load result of the self-maintained check record, or
            None when the policy returned before reading records.
    """

    skip: bool
    reason: SkipReason
    daemon_record: LoadResult | None = None
    check_record: LoadResult | None = None
