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

"""
updateskip - snapshot update-check skipping backed by a background daemon

A small library for dependency-resolution clients. Before asking the remote
repository whether a snapshot's metadata is out of date, the client asks
updateskip whether a local background daemon has already answered that
question more recently than the client itself last checked.

updateskip provides:
  - Daemon status loading with healthy / degraded / absent classification
  - Per-artifact freshness records with atomic replace-on-write
  - A fail-open decision policy (any untrustworthy state means "check")
  - Optional YAML settings for roots, time windows and a force flag

Package Structure
-----------------
core : module
    create_policy() wiring.
config : package
    Settings defaults and YAML loading.
records : package
    Freshness record format, loading and atomic storing.
daemon : package
    Daemon status loading (initialize-once).
policy : package
    The skip/no-skip decision.
artifacts : module
    Artifact identity and repository layout.

Public API
----------
    from updateskip.core import create_policy
    from updateskip.artifacts import ArtifactKey
    from updateskip.policy import UpdateSkipPolicy
    from updateskip.records import load_record, store_record
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"
__description__ = "Skip snapshot update checks already answered by a background daemon"

# Re-export commonly used names for convenience
from updateskip.artifacts import ArtifactKey
from updateskip.core import create_policy
from updateskip.daemon import DaemonStatus, load_daemon_status
from updateskip.policy import UpdateSkipPolicy
from updateskip.records import LoadResult, LoadStatus, load_record, store_record

__all__ = [
    "__version__",
    "__license__",
    "__description__",
    "ArtifactKey",
    "create_policy",
    "DaemonStatus",
    "load_daemon_status",
    "UpdateSkipPolicy",
    "LoadResult",
    "LoadStatus",
    "load_record",
    "store_record",
]
