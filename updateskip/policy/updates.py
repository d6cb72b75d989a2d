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

"""Update-skip decision policy for updateskip.

Decides whether a remote freshness check for an artifact's metadata may be
skipped because the background daemon has already confirmed it more recently
than this engine last looked.

Evaluated in order:

1. force_update set: never skip.
2. Daemon status not recent (daemon presumed absent): do not skip.
3. Daemon recent but its last refresh failed: skip. The daemon is alive but
   cannot reach the remote either, so hammering the remote is pointless.
4. Missing group id or artifact id: do not skip.
5. Compare the daemon's artifact record with our own check record:
   - no daemon record: skip only if we have checked this artifact before
   - either record untrusted (unreadable, corrupt, ...): do not skip
   - otherwise skip iff daemon_ts < check_ts - buffer

Whenever step 5 is reached, the check record is overwritten with the time the
call started, even if the comparison raised. A failure of that write raises
PersistenceError.

Example:
    Decide for one artifact:

        from updateskip.artifacts import ArtifactKey
        from updateskip.core import create_policy

        policy = create_policy()
        skip = policy.should_skip_update(
            last_modified=1700000000000,
            key=ArtifactKey("com.example", "lib", "1.0-SNAPSHOT"),
        )

"""

from __future__ import annotations

from updateskip.artifacts import ArtifactKey, artifact_info_path, update_info_path
from updateskip.clock import Clock, now_millis
from updateskip.config.loader import SkipCheckSettings
from updateskip.daemon.status import DaemonStatus
from updateskip.logging import Logger, get_global_logger
from updateskip.records.store import LoadResult, LoadStatus, load_record, store_record
from updateskip.results import SkipDecision, SkipReason


def compare_records(
    daemon_record: LoadResult, check_record: LoadResult, buffer_ms: int
) -> SkipDecision:
    """Decide from the two per-artifact records alone."""
    if daemon_record.status is LoadStatus.FILE_NOT_FOUND:
        # skip if we've checked before
        if check_record.ok:
            return SkipDecision(True, SkipReason.CHECKED_BEFORE, daemon_record, check_record)
        return SkipDecision(False, SkipReason.NEVER_CHECKED, daemon_record, check_record)

    if not daemon_record.ok or not check_record.ok:
        return SkipDecision(False, SkipReason.UNTRUSTED_RECORD, daemon_record, check_record)

    if daemon_record.timestamp < check_record.timestamp - buffer_ms:
        return SkipDecision(
            True, SkipReason.UNCHANGED_SINCE_CHECK, daemon_record, check_record
        )
    return SkipDecision(False, SkipReason.CHANGED_SINCE_CHECK, daemon_record, check_record)


class UpdateSkipPolicy:
    """Skip/no-skip decisions backed by the daemon's records.

    The daemon status is injected once and shared by every call. Calls for
    different artifacts touch different files and may run concurrently.
    Concurrent calls for the same artifact race on the check record; the
    last writer wins and readers only ever see complete records.

    Attributes:
        status: Daemon status loaded at startup.
        settings: Effective settings (paths, buffer, force flag).
    """

    def __init__(
        self,
        status: DaemonStatus,
        settings: SkipCheckSettings | None = None,
        clock: Clock = now_millis,
        logger: Logger | None = None,
    ) -> None:
        self.status = status
        self.settings = settings if settings is not None else SkipCheckSettings()
        self._clock = clock
        self._logger = logger

    @property
    def logger(self) -> Logger:
        return self._logger if self._logger is not None else get_global_logger()

    def decide(self, last_modified: int, key: ArtifactKey) -> SkipDecision:
        """Decide whether to skip the remote check and record this check.

        Args:
            last_modified: Client's last-modified timestamp for the metadata
                (epoch millis). Kept for the resolver's calling convention;
                the decision is based on the daemon and check records.
            key: Artifact identity.

        Returns:
            SkipDecision with the verdict and the branch that produced it.

        Raises:
            PersistenceError: If the check record could not be written.
        """
        start = self._clock()
        logger = self.logger

        if self.settings.force_update:
            return SkipDecision(False, SkipReason.FORCED_UPDATE)
        if not self.status.recently_updated:
            return SkipDecision(False, SkipReason.DAEMON_ABSENT)
        if not self.status.last_update_success:
            return SkipDecision(True, SkipReason.DAEMON_DEGRADED)
        if not key.is_complete:
            logger.debug("POLICY", f"Incomplete artifact key {key!r}, not skipping")
            return SkipDecision(False, SkipReason.INCOMPLETE_KEY)

        repository = self.settings.repository_root
        daemon_path = artifact_info_path(repository, key, self.settings.artifact_info_name)
        check_path = update_info_path(repository, key, self.settings.update_info_name)

        try:
            decision = compare_records(
                load_record(daemon_path, logger),
                load_record(check_path, logger),
                self.settings.buffer_ms,
            )
            logger.debug(
                "POLICY",
                f"{key}: {'skip' if decision.skip else 'check'} ({decision.reason.value})",
            )
            return decision
        finally:
            store_record(check_path, start)

    def should_skip_update(self, last_modified: int, key: ArtifactKey) -> bool:
        """Return True if the remote freshness check for ``key`` may be skipped."""
        return self.decide(last_modified, key).skip
