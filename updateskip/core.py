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

"""Core wiring for updateskip.

This module ties the pieces together for a resolver that just wants a ready
decision object:

1. Load settings (defaults, or a YAML file)
2. Load the daemon status once
3. Build an UpdateSkipPolicy around that status

The returned policy is meant to be created once at resolver start and shared
by every resolution thread.

Example:
    Programmatic usage:
        ```python
        from pathlib import Path
        from updateskip.artifacts import ArtifactKey
        from updateskip.core import create_policy

        policy = create_policy(config_path=Path("updateskip.yaml"))

        key = ArtifactKey("com.example", "lib", "1.0-SNAPSHOT")
        if not policy.should_skip_update(1700000000000, key):
            ...  # perform the real remote check
        ```
"""

from __future__ import annotations

from pathlib import Path

from updateskip.clock import Clock, now_millis
from updateskip.config import SkipCheckSettings, load_settings
from updateskip.daemon import DaemonStatusLoader
from updateskip.logging import Logger, get_global_logger
from updateskip.policy import UpdateSkipPolicy


def create_policy(
    settings: SkipCheckSettings | None = None,
    config_path: Path | None = None,
    logger: Logger | None = None,
    clock: Clock = now_millis,
    loader: DaemonStatusLoader | None = None,
) -> UpdateSkipPolicy:
    """Create a decision policy with the daemon status loaded.

    The daemon status is read once per loader. Call this once at resolver
    start and share the returned policy, or pass the same ``loader`` to
    every call so repeated calls reuse the first status.

    Args:
        settings: Ready settings. Takes precedence over config_path.
        config_path: Optional YAML settings file, used when settings is None.
        logger: Logger for diagnostics. Defaults to the global logger.
        clock: Source of "now" in epoch millis.
        loader: Shared DaemonStatusLoader. A new one is created from
            settings when None.

    Returns:
        An UpdateSkipPolicy sharing one daemon status for its lifetime.

    Raises:
        ConfigError: If config_path is given and invalid.
    """
    if logger is None:
        logger = get_global_logger()
    if settings is None:
        settings = load_settings(config_path, logger=logger)

    if loader is None:
        loader = DaemonStatusLoader(
            settings.status_path,
            recency_window_ms=settings.recency_window_ms,
            clock=clock,
            logger=logger,
        )
    status = loader.load_once()
    logger.debug(
        "DAEMON",
        f"Daemon status: {status.health.value} (last update {status.last_update_time})",
    )
    return UpdateSkipPolicy(status, settings, clock=clock, logger=logger)
